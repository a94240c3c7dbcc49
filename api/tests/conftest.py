"""Shared fixtures: in-memory mapping store, fake Discord client, ASGI test client."""
import os

# Settings are read at import time; keep tests off Discord and off the on-disk database.
os.environ["ENABLE_DISCORD"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notifier.channels.client import ChatDeliveryError
from notifier.channels.discord import build_message
from notifier.database import get_db
from notifier.main import app
from notifier.models import Base
from notifier.routers.webhooks import get_chat_client
from notifier.store import UserMappingStore


class FakeChatClient:
    """Records what would have been posted to Discord."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.notifications = []
        self.messages = []

    async def send_notification(self, notification):
        if self.fail:
            raise ChatDeliveryError("Discord returned status 503: unavailable")
        self.notifications.append(notification)
        self.messages.append(build_message(notification))


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def store(session_factory):
    async with session_factory() as session:
        yield UserMappingStore(session)


@pytest.fixture
def chat_client():
    return FakeChatClient()


@pytest.fixture
async def client(session_factory, chat_client):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
