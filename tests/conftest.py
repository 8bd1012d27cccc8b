import os

# Test-only settings; must be set before anything under app/ is imported.
TEST_SECRET = "test-secret-key-that-is-at-least-32-characters-long"
os.environ["JWT_SECRET"] = TEST_SECRET
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SMTP_HOST"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db import get_db
from app.core.tokens import TokenService
from app.main import create_app
from app.models import Base
from app.services import registration_service
from app.services.confirmation_store import InMemoryPendingStore


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest_asyncio.fixture
async def db_engine():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    maker = async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


@pytest.fixture
def store():
    return InMemoryPendingStore()


@pytest.fixture(autouse=True)
def sent_mail(monkeypatch):
    """Replace SMTP delivery with an in-memory outbox."""
    outbox = []

    def fake_send(to_address, subject, html_body):
        outbox.append({"to": to_address, "subject": subject, "html": html_body})
        return True

    monkeypatch.setattr(registration_service, "send_email", fake_send)
    return outbox


def _app_for(engine):
    app = create_app()
    maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def _get_db():
        async with maker() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    return app


@pytest.fixture
def api_app(db_engine):
    return _app_for(db_engine)


@pytest_asyncio.fixture
async def client(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def broken_db_client():
    """Client whose database has no tables, so every query fails."""
    engine = _memory_engine()
    app = _app_for(engine)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    await engine.dispose()
