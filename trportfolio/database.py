"""SQLite engines and a generic repository that saves models."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DB_FILENAME = "traderepublic.db"

M = TypeVar("M")


def new_sqlite_on_fs() -> Engine:
    """Engine for the database file in the working directory."""
    return create_engine(f"sqlite:///{DB_FILENAME}")


def new_sqlite_in_memory() -> Engine:
    """Engine for a private in-memory database with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class Repository(Generic[M]):
    """Saves instances of one mapped model, creating its table on start."""

    def __init__(self, engine: Engine, model: type[M]) -> None:
        self._engine = engine
        self._model = model
        model.metadata.create_all(engine, tables=[model.__table__])  # type: ignore[attr-defined]
        logger.debug("initialized repository for model %s", model.__name__)

    def create(self, instance: M) -> None:
        """Insert the instance, or update the stored row with the same key."""
        with Session(self._engine) as session, session.begin():
            session.merge(instance)
        logger.debug("saved entry to db: %r", instance)