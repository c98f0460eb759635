"""Database schema bootstrap helpers."""

from __future__ import annotations

from sqlalchemy import Engine

from printflow.infrastructure.database.base import Base


def ensure_schema(engine: Engine) -> None:
    """Best-effort table creation (create_all is a no-op for existing tables)."""

    # Ensure ORM models are imported so they are registered on Base.metadata
    from printflow.infrastructure.database import models as _models  # noqa: F401

    Base.metadata.create_all(bind=engine)
