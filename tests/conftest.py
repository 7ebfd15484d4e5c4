"""
Shared test fixtures.

Service tests use AsyncMock sessions and patched repositories. API tests
drive the real application over ASGI against a per-test SQLite database.
"""

import os

# Settings are read at import time, so configure the environment first
os.environ["PYTHON_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["REDIS_URL"] = ""

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campus_revival.core.database import Base, get_db  # noqa: E402
from campus_revival.core.rate_limit import reset_memory_store  # noqa: E402
from campus_revival.core.revocation import InMemoryRevocationStore  # noqa: E402
from campus_revival.core.security import hash_password  # noqa: E402
from campus_revival.main import app  # noqa: E402
from campus_revival.modules.adoptions.models import Adoption, AdoptionJournalEntry  # noqa: E402
from campus_revival.modules.journal.models import JournalEntry  # noqa: E402
from campus_revival.modules.schools.models import School  # noqa: E402
from campus_revival.modules.users.models import User, UserRole  # noqa: E402
from campus_revival.modules.users.repository import UserRepository  # noqa: E402

ADMIN_EMAIL = "admin@admin.org"
ADMIN_PASSWORD = "admin-pass"


@pytest.fixture(autouse=True)
def clear_rate_limits():
    """Start every test with an empty in-memory rate limiter."""
    reset_memory_store()
    yield
    reset_memory_store()


# ============================================
# Service-level fixtures
# ============================================


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    db.delete = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_user():
    """An adopter that has been a member for ten days."""
    return User(
        id=str(uuid4()),
        email="ann@x.com",
        password_hash=hash_password("secret1"),
        name="Ann",
        role=UserRole.ADOPTER,
        created_at=datetime.now(UTC) - timedelta(days=10, hours=1),
        updated_at=datetime.now(UTC),
    )


@pytest.fixture
def sample_school():
    """An unadopted school."""
    now = datetime.now(UTC)
    return School(
        id=str(uuid4()),
        name="Lincoln High",
        lat=40.7,
        lng=-74.0,
        address="1 Main St",
        description="Public high school",
        adopted=False,
        adopter_id=None,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_adoption(sample_user, sample_school):
    """An adoption of sample_school by sample_user with two journal notes."""
    now = datetime.now(UTC)
    adoption = Adoption(
        id=str(uuid4()),
        user_id=sample_user.id,
        school_id=sample_school.id,
        date_adopted=now,
        prayer_count=3,
        created_at=now,
        updated_at=now,
    )
    adoption.school = sample_school
    adoption.journal_entries = [
        AdoptionJournalEntry(
            id=str(uuid4()),
            text="First visit",
            date=now - timedelta(days=2),
            created_at=now,
            updated_at=now,
        ),
        AdoptionJournalEntry(
            id=str(uuid4()),
            text="Prayed at the gate",
            date=now - timedelta(days=1),
            created_at=now,
            updated_at=now,
        ),
    ]
    return adoption


@pytest.fixture
def sample_journal_entry(sample_user, sample_school):
    now = datetime.now(UTC)
    entry = JournalEntry(
        id=str(uuid4()),
        user_id=sample_user.id,
        entry_text="Prayed for the staff",
        school_id=sample_school.id,
        date=now,
        created_at=now,
        updated_at=now,
    )
    entry.school = sample_school
    return entry


# ============================================
# API-level fixtures
# ============================================


@pytest.fixture
async def session_maker(tmp_path):
    """Session factory bound to a fresh SQLite database file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def client(session_maker):
    """HTTP client for the application with the test database wired in."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.revocation_store = InMemoryRevocationStore()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(session_maker):
    """An admin account created the way the bootstrap script does it."""
    async with session_maker() as db:
        return await UserRepository.create(
            db,
            email=ADMIN_EMAIL,
            password_hash=hash_password(ADMIN_PASSWORD),
            name="Site Admin",
            role=UserRole.ADMIN,
        )


@pytest.fixture
def register_adopter(client):
    """Return a helper that registers an adopter and returns its auth headers."""

    async def _register(email: str, name: str = "Ann", password: str = "secret1") -> dict:
        response = await client.post(
            "/api/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
async def admin_headers(client, admin_user):
    response = await client.post(
        "/api/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def adopter_headers(register_adopter):
    return await register_adopter("ann@x.com")


@pytest.fixture
async def created_school(client, admin_headers):
    """A school created through the admin endpoint."""
    response = await client.post(
        "/api/schools",
        json={
            "name": "Lincoln High",
            "lat": 40.7,
            "lng": -74.0,
            "address": "1 Main St",
            "description": "Public high school",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["school"]
