from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from homehub.config import SETTINGS


def make_engine(database_url: str) -> Engine:
    """Engine for ``database_url``; SQLite gets thread-shared connections, in-memory a single one."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)
    options = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite:"):
        options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


engine = make_engine(SETTINGS.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    with (bind or engine).connect() as connection:
        connection.execute(text("SELECT 1"))


def create_schema(bind: Engine | None = None) -> None:
    """Create every homehub table straight from the models (SQLite setups and tests)."""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
