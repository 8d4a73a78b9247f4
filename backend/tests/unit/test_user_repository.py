"""
用户Repository单元测试
使用内存SQLite数据库
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ainft.db.database import Base
from ainft.models import User
from ainft.repositories import UserRepository
from ainft.services.user import UserService


@pytest_asyncio.fixture
async def db_session():
    """每个测试独立的内存数据库会话"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.mark.unit
@pytest.mark.users
class TestUserRepository:
    """UserRepository 单元测试类"""

    @pytest.mark.asyncio
    async def test_create_generates_id(self, db_session):
        repository = UserRepository(db_session)

        user = await repository.create(name="Alice", email="alice@example.com")

        assert isinstance(user, User)
        assert len(user.id) == 36
        assert user.created_at is not None
        assert await repository.get_by_id(user.id) is user

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session):
        assert await UserRepository(db_session).get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_allowed(self, db_session):
        repository = UserRepository(db_session)

        await repository.create(name="Alice", email="same@example.com")
        await repository.create(name="Bob", email="same@example.com")

        assert await repository.count() == 2

    @pytest.mark.asyncio
    async def test_service_lists_in_creation_order(self, db_session):
        service = UserService(db_session)

        first = await service.create_user(" Alice ", "alice@example.com ")
        await service.create_user("Bob", "bob@example.com")
        users = await service.list_users()

        assert first["name"] == "Alice"
        assert first["email"] == "alice@example.com"
        assert [user["name"] for user in users] == ["Alice", "Bob"]
