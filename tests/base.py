# tests/base.py
import os
import tempfile
import unittest
from types import SimpleNamespace
from uuid import uuid4

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import Base, get_db
from app.core.security import hash_password
from app.main import app
from app.models.user import User


def make_user(name="Alex", **extra):
    """A detached user-like object for the pure-function tests."""
    return SimpleNamespace(id=uuid4(), display_name=name, avatar_url=None, **extra)


def make_profile(teach=(), learn=(), bio="", user_id=None):
    return SimpleNamespace(
        user_id=user_id or uuid4(),
        teach_skills=list(teach),
        learn_skills=list(learn),
        bio=bio,
    )


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """
    Fresh SQLite database per test, wired into the app through get_db.

    Each test gets its own file and engine, so nothing leaks between tests
    or event loops.
    """

    async def asyncSetUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        url = "sqlite+aiosqlite:///" + os.path.join(self._tmpdir.name, "test.db")
        self.engine = create_async_engine(url, poolclass=NullPool)
        self.session_maker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async def override_get_db():
            async with self.session_maker() as session:
                yield session

        app.dependency_overrides[get_db] = override_get_db
        self.db = self.session_maker()

    async def asyncTearDown(self):
        await self.db.close()
        app.dependency_overrides.pop(get_db, None)
        await self.engine.dispose()
        self._tmpdir.cleanup()

    async def create_user(self, email, full_name=None, password="password123", is_admin=False):
        user = User(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            is_admin=is_admin,
        )
        self.db.add(user)
        await self.db.commit()
        return user

    def client(self) -> AsyncClient:
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
