from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from receiptdesk.core.security import issue_token
from receiptdesk.db.base import get_db, init_models
from receiptdesk.db.models.users import User
from receiptdesk.db.repositories.users import get_user_by_id, update_user
from receiptdesk.main import create_app


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'receiptdesk-test.db'}", poolclass=NullPool)
    asyncio.run(init_models(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def add_user(session_factory):
    def _add(**fields) -> User:
        async def _insert() -> User:
            async with session_factory() as session:
                user = User(**fields)
                session.add(user)
                await session.commit()
                await session.refresh(user)
                return user

        return asyncio.run(_insert())

    return _add


@pytest.fixture
def load_user(session_factory):
    def _load(user_id: int) -> User | None:
        async def _select() -> User | None:
            async with session_factory() as session:
                return await get_user_by_id(session, user_id)

        return asyncio.run(_select())

    return _load


@pytest.fixture
def set_columns(session_factory):
    def _set(user_id: int, **values) -> None:
        async def _update() -> None:
            async with session_factory() as session:
                await update_user(session, user_id, values)
                await session.commit()

        asyncio.run(_update())

    return _set


@pytest.fixture
def merchant(add_user) -> User:
    return add_user(
        superkey="SK-1001",
        name="Asha Rao",
        store_name="Rao Stores",
        store_address="12 MG Road, Pune",
        store_contact="9876543210",
        store_country_code="+91",
        profile_photo="photos/asha.png",
        profile_complete=True,
    )


@pytest.fixture
def client(session_factory):
    app = create_app(use_lifespan=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth():
    def _headers(user_id: int, expires_in: timedelta = timedelta(hours=1)) -> dict:
        return {"Authorization": f"Bearer {issue_token(user_id, expires_in=expires_in)}"}

    return _headers
