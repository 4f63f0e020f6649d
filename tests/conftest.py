from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def sqlite_env(tmp_path, monkeypatch):
    db_path = tmp_path / "app.db"
    monkeypatch.setenv("DB_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(db_path))
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    yield db_path


@pytest.fixture
def client(sqlite_env):
    from main import app

    # Entering the context runs the lifespan: open store + init schema.
    with TestClient(app) as test_client:
        yield test_client
