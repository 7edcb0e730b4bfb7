"""
Repositories package - storage backends for the barbershop core.

``create_store()`` builds the backend selected by configuration. The caller
owns the returned store and passes it to the services that need it.
"""

from typing import Optional

from barbershop.core import config
from barbershop.domain.interfaces import IBarbershopStore

from .memory_store import InMemoryStore
from .sql_store import SqlAlchemyStore


def create_store(backend: Optional[str] = None, db_session=None) -> IBarbershopStore:
    """Build a store for ``backend`` (defaults to BARBERSHOP_STORAGE)."""
    backend = (backend or config.STORAGE_BACKEND).lower()

    if backend == config.STORAGE_MEMORY:
        return InMemoryStore()

    if backend == config.STORAGE_SQL:
        if db_session is None:
            from barbershop.db.session import SessionLocal, create_tables

            create_tables()
            db_session = SessionLocal()
        return SqlAlchemyStore(db_session)

    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = ["InMemoryStore", "SqlAlchemyStore", "create_store"]
