import os

# Keep tests off any real database or provider
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("PINATA_JWT", None)

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from frameboard.core.auth import VerifyResult, get_verifier
from frameboard.core.config import Settings, get_settings
from frameboard.core.services import get_storage
from frameboard.db.base import Base
from frameboard.db.session import get_db
from frameboard.main import app

SIGN_IN_DOMAIN = "frameboard.test"


class FakeVerifier:
    """Accepts `sig-<fid>` signatures for the configured domain and nonce `nonce-ok`."""

    def __init__(self):
        self.calls = []

    async def verify(self, nonce, domain, message, signature):
        self.calls.append(
            {"nonce": nonce, "domain": domain, "message": message, "signature": signature}
        )
        if domain != SIGN_IN_DOMAIN or nonce != "nonce-ok":
            return VerifyResult(success=False, error="mismatch")
        if not signature.startswith("sig-"):
            return VerifyResult(success=False, error="bad signature")
        return VerifyResult(success=True, fid=int(signature[len("sig-"):]))


class FakeStorage:
    gateway_url = "gateway.pinata.test"

    def __init__(self):
        self.calls = []

    async def create_signed_url(self, expires=60):
        self.calls.append(expires)
        return f"https://uploads.pinata.test/signed?expires={expires}"


def proof_for(fid: int) -> dict:
    return {"nonce": "nonce-ok", "message": "sign in please", "signature": f"sig-{fid}"}


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite://",
        sign_in_domain=SIGN_IN_DOMAIN,
        app_url="https://frameboard.test",
        embed_fallback_image_url="https://frameboard.test/fallback.png",
        embed_site_image_url="https://frameboard.test/og.png",
        signed_url_expires=60,
    )


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest_asyncio.fixture
async def db_engine():
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
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, settings, verifier, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_verifier] = lambda: verifier
    app.dependency_overrides[get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def count_rows(session_factory):
    async def _count(model):
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


@pytest.fixture
def proof():
    return proof_for


class BrokenSession:
    """Stands in for a session whose database has gone away."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def broken_db(client):
    async def override_get_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = override_get_db
