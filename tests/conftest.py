from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import func, select

# Make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from creditcard_api.core import config as core_config  # noqa: E402
from creditcard_api.db import models  # noqa: E402
from creditcard_api.db import session as db_session  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cards.test")
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    finally:
        engine.dispose()
        _clear_caches()


@pytest.fixture()
def memory_db(monkeypatch):
    """Run against the single-connection in-memory SQLite database."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()
    _clear_caches()


@pytest.fixture()
def person_count():
    """Count stored person rows for an email."""

    def _count(email: str) -> int:
        with db_session.get_session() as session:
            stmt = select(func.count()).select_from(models.Person).where(models.Person.email == email)
            return int(session.execute(stmt).scalar_one())

    return _count
