"""Shared test fixtures.

  use_test_engine: redirects UoW + infra layer to a temp-file SQLite DB.
  client: FastAPI TestClient wired to the test engine.
  api_key: configures the budget endpoint's shared secret.
"""
import os
import tempfile
import pytest
from sqlmodel import SQLModel, create_engine


def pytest_configure(config):
    """Keep the default data directory out of the working tree.

    crewtime.db creates its engine (and data directory) at import time, which
    happens during collection.
    """
    os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="crewtime-test-"))


@pytest.fixture
def use_test_engine(tmp_path, monkeypatch):
    """Monkeypatch infra/db engine references to an isolated temp-file SQLite DB."""
    db_path = tmp_path / "test_crewtime.db"
    test_engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False},
    )

    from crewtime.infra.db.engine import configure_sqlite
    configure_sqlite(test_engine)

    import crewtime.models  # noqa: F401  registers all ORM mappers
    SQLModel.metadata.create_all(test_engine)

    monkeypatch.setattr("crewtime.infra.db.engine.engine", test_engine)
    monkeypatch.setattr("crewtime.infra.db.uow.engine", test_engine)

    yield test_engine

    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def client(use_test_engine):
    """FastAPI TestClient backed by the isolated test engine."""
    from fastapi.testclient import TestClient
    from crewtime.api.app import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_key(monkeypatch):
    from pydantic import SecretStr
    from crewtime.config import settings

    monkeypatch.setattr(settings, "API_KEY", SecretStr("test-api-key"))
    return "test-api-key"
