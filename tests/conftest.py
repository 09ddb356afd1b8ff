from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the registry package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from registry.core import config as core_config  # noqa: E402
from registry.db import session as db_session  # noqa: E402


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point SQLITE_DB_PATH at a temporary file and dispose engines afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("SQLITE_DB_PATH", str(db_file))
    _reset_caches()

    yield db_file

    try:
        db_session.get_engine(f"sqlite:///{db_file}").dispose()
    except Exception:
        pass
    _reset_caches()
