"""Shared test configuration and fixtures.

Each test gets a fresh in-memory SQLite database, and its session is wrapped
in a transaction that rolls back after the test. The LLM client, invitation
cache and mailer are replaced through FastAPI dependency overrides.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import date
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_invitation_cache, get_llm_client, get_mailer
from app.database import Base, get_db
from app.invitations.cache import InvitationCache
from app.mail.sender import InvitationMailer
from app.main import app
from app.models.couple import CoupleProfile
from app.models.guest import Guest

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeLLM:
    """LLM client returning canned replies (or raising) and recording calls."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


# ---------------------------------------------------------------------------
# App wiring
# ---------------------------------------------------------------------------


@pytest.fixture
def invitation_cache() -> InvitationCache:
    return InvitationCache(ttl_seconds=3600)


@pytest.fixture
def fake_llm() -> FakeLLM:
    """LLM that is configured but always fails, so generation falls back to templates."""
    return FakeLLM(error=RuntimeError("provider unavailable"))


@pytest.fixture
def mailer() -> InvitationMailer:
    mailer = InvitationMailer(
        host="smtp.test", port=587, from_address="wedding@example.com", username="u", password="p"
    )
    mailer.send = AsyncMock()  # type: ignore[method-assign]
    return mailer


@pytest.fixture(autouse=True)
def _no_retry_sleep(monkeypatch):
    """Keep retry backoff out of test run time."""
    from app.api import deps

    monkeypatch.setattr(deps.settings, "generation_retry_base_delay", 0.0)
    monkeypatch.setattr(deps.settings, "generation_retry_max_jitter", 0.0)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    invitation_cache: InvitationCache,
    fake_llm: FakeLLM,
    mailer: InvitationMailer,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB session and test doubles."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_invitation_cache] = lambda: invitation_cache
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: couple and guest
# ---------------------------------------------------------------------------

COUPLE_PAYLOAD = {
    "groom_name": "陳大文",
    "bride_name": "林小美",
    "wedding_date": "2025-06-01",
    "wedding_time": "18:00",
    "wedding_location": "台北",
    "wedding_theme": "現代簡約",
}


@pytest_asyncio.fixture
async def test_couple(db_session: AsyncSession) -> CoupleProfile:
    """Create and return the couple profile directly in the DB."""
    couple = CoupleProfile(
        groom_name="陳大文",
        bride_name="林小美",
        wedding_date=date(2025, 6, 1),
        wedding_time="18:00",
        wedding_location="台北",
        wedding_theme="現代簡約",
    )
    db_session.add(couple)
    await db_session.flush()
    await db_session.refresh(couple)
    return couple


@pytest_asyncio.fixture
async def test_guest(client: AsyncClient, test_couple: CoupleProfile) -> dict:
    """Create and return a pending guest via the API."""
    unique = uuid.uuid4().hex[:8]
    response = await client.post(
        "/api/v1/guests",
        json={
            "couple_id": str(test_couple.id),
            "name": "王小明",
            "relationship": "朋友",
            "email": f"guest-{unique}@test.com",
            "how_met": "大學",
        },
    )
    assert response.status_code == 201, f"Failed to create test guest: {response.text}"
    return response.json()


@pytest.fixture
def make_guest(db_session: AsyncSession):
    """Factory inserting guest rows directly, bypassing API validation."""

    async def _make(couple_id: uuid.UUID, **overrides) -> Guest:
        fields = {
            "name": "王小明",
            "relationship": "朋友",
            "email": f"guest-{uuid.uuid4().hex[:8]}@test.com",
            "status": "pending",
        }
        fields.update(overrides)
        guest = Guest(couple_id=couple_id, **fields)
        db_session.add(guest)
        await db_session.flush()
        await db_session.refresh(guest)
        return guest

    return _make
