"""SQLAlchemy implementation of the entity store."""

import logging

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory.errors import StoreError
from inventory.models import (
    City,
    Country,
    Hotel,
    HotelCityMap,
    HotelOption,
    HotelOptionMap,
    ImageAsset,
    Room,
    RoomBasePrice,
    RoomOption,
    RoomOptionMap,
    RoomOverridePrice,
    RoomSeasonBasePrice,
    SeoMetadata,
)
from inventory.store.base import (
    ConstraintError,
    EntityStore,
    Filters,
    ForeignKeyViolation,
    NotNullViolation,
    Record,
    UniqueViolation,
)

logger = logging.getLogger(__name__)

COLLECTIONS = {
    model.__tablename__: model
    for model in (
        Country,
        City,
        Hotel,
        HotelOption,
        HotelCityMap,
        HotelOptionMap,
        Room,
        RoomOption,
        RoomOptionMap,
        RoomBasePrice,
        RoomSeasonBasePrice,
        RoomOverridePrice,
        SeoMetadata,
        ImageAsset,
    )
}

# PostgreSQL SQLSTATE codes for integrity violations
_SQLSTATE_ERRORS = {
    "23505": UniqueViolation,
    "23503": ForeignKeyViolation,
    "23502": NotNullViolation,
}


def translate_integrity_error(exc: IntegrityError) -> ConstraintError:
    """Map a driver integrity error onto the typed constraint errors."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    cause = getattr(orig, "__cause__", None)
    constraint = getattr(cause, "constraint_name", None) or getattr(orig, "constraint_name", None)
    error_cls = _SQLSTATE_ERRORS.get(sqlstate, ConstraintError)
    return error_cls(str(orig).splitlines()[0] if orig else str(exc), constraint=constraint)


class SqlEntityStore(EntityStore):
    """Runs every operation in its own session and commits it immediately."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _model(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise StoreError(f"Unknown collection '{collection}'", code="UNKNOWN_COLLECTION")

    @staticmethod
    def _where(model, filters: Filters | None) -> list:
        clauses = []
        for field, value in (filters or {}).items():
            column = getattr(model, field)
            if isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses

    @staticmethod
    def _require_filters(collection: str, filters: Filters) -> None:
        # An empty filter would match every record
        if not filters:
            raise StoreError(f"Refusing unfiltered write on '{collection}'", code="UNFILTERED_WRITE")

    @staticmethod
    def _order(model, order_by: str):
        if order_by.startswith("-"):
            return getattr(model, order_by[1:]).desc()
        return getattr(model, order_by).asc()

    async def _write(self, statement) -> list[Record]:
        async with self._session_factory() as db:
            try:
                result = await db.execute(statement)
                rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
                await db.commit()
                return rows
            except IntegrityError as e:
                await db.rollback()
                raise translate_integrity_error(e) from e
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(f"Store write failed: {e}")
                raise StoreError("Database operation failed") from e

    async def insert(self, collection: str, record: Record) -> Record:
        model = self._model(collection)
        rows = await self._write(insert(model).values(**record).returning(*model.__table__.columns))
        return rows[0]

    async def insert_many(self, collection: str, records: list[Record]) -> list[Record]:
        if not records:
            return []
        model = self._model(collection)
        return await self._write(insert(model).values(records).returning(*model.__table__.columns))

    async def select(
        self,
        collection: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        model = self._model(collection)
        query = select(*model.__table__.columns).where(*self._where(model, filters))
        if order_by:
            query = query.order_by(self._order(model, order_by))
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        async with self._session_factory() as db:
            try:
                result = await db.execute(query)
            except SQLAlchemyError as e:
                logger.error(f"Store read failed on {collection}: {e}")
                raise StoreError("Database operation failed") from e
            return [dict(row) for row in result.mappings().all()]

    async def count(self, collection: str, filters: Filters | None = None) -> int:
        model = self._model(collection)
        query = select(func.count()).select_from(model).where(*self._where(model, filters))
        async with self._session_factory() as db:
            try:
                result = await db.execute(query)
            except SQLAlchemyError as e:
                logger.error(f"Store count failed on {collection}: {e}")
                raise StoreError("Database operation failed") from e
            return result.scalar_one()

    async def update(self, collection: str, filters: Filters, values: Record) -> int:
        model = self._model(collection)
        self._require_filters(collection, filters)
        rows = await self._write(
            update(model).where(*self._where(model, filters)).values(**values).returning(model.id)
        )
        return len(rows)

    async def delete(self, collection: str, filters: Filters) -> int:
        model = self._model(collection)
        self._require_filters(collection, filters)
        rows = await self._write(
            delete(model).where(*self._where(model, filters)).returning(model.id)
        )
        return len(rows)
