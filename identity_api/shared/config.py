from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str) -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


def _list(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    db_connect_timeout_seconds: int
    db_statement_timeout_ms: int
    db_create_schema: bool
    access_token_secret: str
    access_token_ttl_minutes: int
    refresh_token_secret: str
    refresh_token_ttl_days: int
    media_upload_url: str
    media_upload_preset: str
    media_upload_timeout_seconds: float
    cookie_secure: bool
    cookie_samesite: str
    cors_origins: list[str]
    log_level: str


def get_settings() -> Settings:
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        db_connect_timeout_seconds=int(_env("DB_CONNECT_TIMEOUT_SECONDS", "5")),
        db_statement_timeout_ms=int(_env("DB_STATEMENT_TIMEOUT_MS", "5000")),
        db_create_schema=_bool("DB_CREATE_SCHEMA", "false"),
        access_token_secret=_env("ACCESS_TOKEN_SECRET", ""),
        access_token_ttl_minutes=int(_env("ACCESS_TOKEN_TTL_MINUTES", "60")),
        refresh_token_secret=_env("REFRESH_TOKEN_SECRET", ""),
        refresh_token_ttl_days=int(_env("REFRESH_TOKEN_TTL_DAYS", "10")),
        media_upload_url=_env("MEDIA_UPLOAD_URL", ""),
        media_upload_preset=_env("MEDIA_UPLOAD_PRESET", ""),
        media_upload_timeout_seconds=float(_env("MEDIA_UPLOAD_TIMEOUT_SECONDS", "30")),
        cookie_secure=_bool("COOKIE_SECURE", "true"),
        cookie_samesite=(_env("COOKIE_SAMESITE", "strict") or "strict").lower(),
        cors_origins=_list("CORS_ORIGINS", "*"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
