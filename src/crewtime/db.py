"""Engine singleton and table creation."""
from __future__ import annotations
from sqlmodel import SQLModel, create_engine
from crewtime.config import settings


def _make_engine():
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return create_engine(
        settings.database_url, echo=False, connect_args={"check_same_thread": False},
    )


engine = _make_engine()


def init_db() -> None:
    import crewtime.models  # noqa: F401  # registers table mappers
    SQLModel.metadata.create_all(engine)
