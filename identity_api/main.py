from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from identity_api.api.deps import build_token_service
from identity_api.api.errors import register_error_handlers
from identity_api.api.routers import health, users
from identity_api.infrastructure.db.engine import create_schema, get_engine
from identity_api.shared.config import get_settings


settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    startup_settings = get_settings()
    # Raises on missing or shared signing secrets; the process must not start.
    build_token_service(startup_settings)
    if startup_settings.db_create_schema and startup_settings.postgres_dsn:
        create_schema(
            get_engine(
                startup_settings.postgres_dsn,
                startup_settings.db_connect_timeout_seconds,
                startup_settings.db_statement_timeout_ms,
            )
        )
        logger.info("main: schema_ready")
    yield


app = FastAPI(title="Identity API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)
app.include_router(health.router)
app.include_router(users.router)
