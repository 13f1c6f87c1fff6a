"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_diary.application.services import StaffService
from customer_diary.config import get_settings
from customer_diary.infrastructure.database import Base, engine
from customer_diary.infrastructure.database.repositories import SQLAlchemyStaffUserRepository
from customer_diary.infrastructure.database.session import async_session_factory
from customer_diary.infrastructure.logging.log_config import setup_logging
from customer_diary.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql"):
        return
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_bootstrap_manager() -> None:
    """Create the configured first manager when the staff table is empty."""
    settings = get_settings()
    if not (settings.bootstrap_manager_code and settings.bootstrap_manager_pin):
        return
    async with async_session_factory() as session:
        service = StaffService(SQLAlchemyStaffUserRepository(session))
        created = await service.ensure_bootstrap_manager(
            settings.bootstrap_manager_code,
            settings.bootstrap_manager_pin,
            settings.bootstrap_manager_name,
        )
        await session.commit()
    if created is None:
        logger.debug("Staff accounts exist; bootstrap manager not needed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — logging, tables, first-run account."""
    setup_logging()

    await _ensure_database_exists()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await _seed_bootstrap_manager()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "customer_diary.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )
