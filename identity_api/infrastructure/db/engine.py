from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str, connect_timeout_seconds: int = 5, statement_timeout_ms: int = 5000):
    connect_args = {}
    if dsn.startswith("postgresql"):
        connect_args = {
            "connect_timeout": connect_timeout_seconds,
            "options": f"-c statement_timeout={statement_timeout_ms}",
        }
    return create_engine(dsn, future=True, pool_pre_ping=True, connect_args=connect_args)


def create_schema(engine) -> None:
    from identity_api.infrastructure.db.models import users  # noqa: F401

    Base.metadata.create_all(engine)
