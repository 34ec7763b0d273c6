"""
Pytest fixtures - per-test SQLite database, HTTP client, registered users.
"""

from dataclasses import dataclass
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.config import Settings
from skillswap.core.security import create_access_token, hash_password
from skillswap.db.models import Profile, User
from skillswap.db.session import Database, get_db
from skillswap.main import create_app


@dataclass(frozen=True)
class Account:
    """Plain snapshot of a test user (safe to use after any rollback)."""

    id: int
    email: str
    name: str | None
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        upload_dir=tmp_path / "uploads",
        seed_sample_data=False,
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_maker() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession, settings: Settings):
    app = create_app(settings)

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password("password123")


@pytest.fixture
def make_account(session: AsyncSession, settings: Settings, password_hash: str):
    """Insert a user with an empty profile; returns an Account with a valid token."""

    async def _make(email: str, name: str | None = None) -> Account:
        user = User(email=email, hashed_password=password_hash, name=name)
        session.add(user)
        await session.flush()
        session.add(Profile(user_id=user.id))
        await session.commit()
        return Account(
            id=user.id,
            email=email,
            name=name,
            token=create_access_token(user.id, settings, extra={"email": email}),
        )

    return _make


@pytest_asyncio.fixture
async def alice(make_account) -> Account:
    return await make_account("a@x.com", "Alice")


@pytest_asyncio.fixture
async def bob(make_account) -> Account:
    return await make_account("b@x.com", "Bob")


@pytest_asyncio.fixture
async def carol(make_account) -> Account:
    return await make_account("c@x.com", "Carol")
