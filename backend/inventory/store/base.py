"""Entity store contract: named collections of flat records.

Filters are ``{field: value}`` equality tests; a list/tuple/set value means
``field IN values``. ``order_by`` names one field, prefixed with ``-``
for descending order. Every call is its own unit of work, so callers that
write to several collections must compensate on their own.
"""

from abc import ABC, abstractmethod
from typing import Any

from inventory.errors import StoreError

Record = dict[str, Any]
Filters = dict[str, Any]


class ConstraintError(StoreError):
    """A store-native integrity constraint rejected the write."""

    default_code = "CONSTRAINT_VIOLATION"

    def __init__(self, message: str, *, constraint: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.constraint = constraint


class UniqueViolation(ConstraintError):
    status_code = 409
    default_code = "DUPLICATE"


class ForeignKeyViolation(ConstraintError):
    status_code = 400
    default_code = "INVALID_REFERENCE"


class NotNullViolation(ConstraintError):
    status_code = 400
    default_code = "MISSING_FIELD"


class EntityStore(ABC):
    """Generic CRUD over named collections."""

    @abstractmethod
    async def insert(self, collection: str, record: Record) -> Record:
        """Insert one record and return it as stored (defaults filled in)."""

    @abstractmethod
    async def insert_many(self, collection: str, records: list[Record]) -> list[Record]:
        """Insert several records atomically within the one collection."""

    @abstractmethod
    async def select(
        self,
        collection: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        ...

    @abstractmethod
    async def count(self, collection: str, filters: Filters | None = None) -> int:
        ...

    @abstractmethod
    async def update(self, collection: str, filters: Filters, values: Record) -> int:
        """Update matching records, returning how many changed."""

    @abstractmethod
    async def delete(self, collection: str, filters: Filters) -> int:
        """Delete matching records, returning how many were removed."""

    async def select_one(self, collection: str, filters: Filters) -> Record | None:
        rows = await self.select(collection, filters, limit=1)
        return rows[0] if rows else None

    async def exists(self, collection: str, filters: Filters) -> bool:
        return await self.select_one(collection, filters) is not None
