"""Integration fixtures — the FastAPI app on a private in-memory SQLite database."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from customer_diary.application.schemas import StaffUserCreate
from customer_diary.application.services import StaffService
from customer_diary.infrastructure.database import Base, get_db_session
from customer_diary.infrastructure.database.repositories import SQLAlchemyStaffUserRepository
from customer_diary.main import create_app

MANAGER_CODE, MANAGER_PIN = "MGR", "1234"
STAFF_CODE, STAFF_PIN = "STF", "5678"


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        service = StaffService(SQLAlchemyStaffUserRepository(session))
        manager = await service.ensure_bootstrap_manager(MANAGER_CODE, MANAGER_PIN, "Max Manager")
        await service.create_staff(
            manager, StaffUserCreate(staff_code=STAFF_CODE, full_name="Sam Staff", pin=STAFF_PIN)
        )
        await session.commit()

    return factory


@pytest.fixture
def app(session_factory):
    app = create_app()

    async def _session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session
    return app


@pytest.fixture
async def anonymous_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def staff_client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=(STAFF_CODE, STAFF_PIN),
    ) as client:
        yield client


@pytest.fixture
async def manager_client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=(MANAGER_CODE, MANAGER_PIN),
    ) as client:
        yield client
