from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from homehub.infra.cache import shared_cache  # noqa: E402
from homehub.infra.db import create_schema, make_engine  # noqa: E402


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite+pysqlite:///:memory:")
    create_schema(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture(autouse=True)
def _clear_shared_cache():
    shared_cache.clear()
    yield
    shared_cache.clear()
