from inventory.database import async_session_factory
from inventory.store.base import (
    ConstraintError,
    EntityStore,
    ForeignKeyViolation,
    NotNullViolation,
    UniqueViolation,
)
from inventory.store.sql_store import SqlEntityStore

entity_store = SqlEntityStore(async_session_factory)


def get_store() -> EntityStore:
    """FastAPI dependency returning the process-wide store."""
    return entity_store


__all__ = [
    "ConstraintError",
    "EntityStore",
    "ForeignKeyViolation",
    "NotNullViolation",
    "SqlEntityStore",
    "UniqueViolation",
    "entity_store",
    "get_store",
]
