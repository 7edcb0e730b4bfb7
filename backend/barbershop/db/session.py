"""
Engine and session factory for the SQL backend.

The engine is created on first use from ``config.get_database_url()`` and
rebuilt when that URL changes, so importing this module never connects.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from barbershop.core import config

logger = logging.getLogger(__name__)

Base = declarative_base()

_state = {"url": None, "engine": None, "factory": None}


def build_engine(database_url: str) -> Engine:
    """Engine with pool settings suited to the URL's dialect."""
    url = make_url(database_url)
    echo = False  # statement logging goes through setup_logging(enable_sql_echo=...)

    if url.get_backend_name() == "postgresql":
        return create_engine(
            url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={"application_name": "barbershop", "connect_timeout": 10},
        )

    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        # One shared connection, otherwise each checkout sees an empty database
        return create_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_engine(url, echo=echo)


def get_engine() -> Engine:
    database_url = config.get_database_url()
    if _state["engine"] is None or _state["url"] != database_url:
        if _state["engine"] is not None:
            _state["engine"].dispose()
        engine = build_engine(database_url)
        _state.update(url=database_url, engine=engine, factory=None)
        logger.debug(
            "Database engine created",
            extra={"context": {"dialect": engine.dialect.name}},
        )
    return _state["engine"]


def get_sessionmaker() -> sessionmaker:
    engine = get_engine()
    if _state["factory"] is None:
        _state["factory"] = sessionmaker(bind=engine, autoflush=False)
    return _state["factory"]


def SessionLocal() -> Session:
    """New session on the configured database; the caller closes it."""
    return get_sessionmaker()()


def create_tables(engine=None) -> None:
    """Create the clients, services and appointments tables if missing."""
    from barbershop.db import base  # noqa: F401  (registers the models)

    Base.metadata.create_all(bind=engine or get_engine())
