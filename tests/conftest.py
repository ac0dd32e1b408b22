"""Shared test fixtures for the trip planner API."""

import os

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["SMTP_HOST"] = "localhost"
os.environ["API_BASE_URL"] = "http://api.test"
os.environ["WEB_BASE_URL"] = "http://web.test"
os.environ["CORS_ORIGINS"] = "http://web.test"

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from planner.core.cache import RedisCache
from planner.core.database import Base, get_db
from planner.core.errors import DeliveryFailureError
from planner.core.redis_lifecycle import get_cache
from planner.main import create_app
from planner.models import Participant, Trip  # noqa: F401  registers tables
from planner.services.email_service import MailMessage, get_mail_sender


class InMemoryCache:
    """Dict-backed stand-in for RedisCache."""

    build_key = staticmethod(RedisCache.build_key)

    def __init__(self):
        self.store: dict[str, Any] = {}
        self.expiry: dict[str, int] = {}

    async def get(self, key: str) -> Optional[Any]:
        return self.store.get(key)

    async def set(self, key: str, value: Any, expire: int) -> None:
        self.store[key] = value
        self.expiry[key] = expire

    async def delete(self, key: str) -> None:
        self.store.pop(key, None)


class RecordingMailSender:
    """Records every message; addresses in ``fail_for`` are rejected."""

    def __init__(self):
        self.sent: list[MailMessage] = []
        self.fail_for: set[str] = set()

    async def send(self, message: MailMessage) -> str:
        if message.to_email in self.fail_for:
            raise DeliveryFailureError(message.to_email, "550 mailbox unavailable")
        self.sent.append(message)
        return f"<{len(self.sent)}@planner.test>"

    def recipients(self) -> list[str]:
        return [message.to_email for message in self.sent]


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Session for inspecting stored state from a test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def mail_sender():
    return RecordingMailSender()


@pytest.fixture
def build_app(session_factory, cache, mail_sender):
    """Create an app wired to the test database, cache and mail sender."""

    def build(app_settings=None):
        app = create_app(app_settings) if app_settings else create_app()

        async def override_get_db():
            async with session_factory() as session:
                yield session

        async def override_get_cache():
            yield cache

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_cache] = override_get_cache
        app.dependency_overrides[get_mail_sender] = lambda: mail_sender
        return app

    return build


@pytest.fixture
def app(build_app):
    return build_app()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def trip_payload():
    """Build a valid creation body; keyword arguments override fields."""

    def build(**overrides):
        now = datetime.now(timezone.utc)
        payload = {
            "destination": "Paris trip",
            "starts_at": (now + timedelta(days=1)).isoformat(),
            "ends_at": (now + timedelta(days=5)).isoformat(),
            "owner_name": "Ana",
            "owner_email": "ana@example.com",
            "emails_to_invite": ["bob@example.com"],
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def create_trip(client, trip_payload):
    """POST a trip and return its id as a string."""

    async def create(**overrides) -> str:
        response = await client.post("/trips", json=trip_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["tripId"]

    return create
