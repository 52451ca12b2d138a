"""
Shared test fixtures for the Cleo test suite.

Async throughout (aiosqlite + AsyncSession).  Every test starts from a
freshly bootstrapped instance: one instance row and the default admin.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
_TEST_ENV = {
    "CLEO_HOST": "127.0.0.1",
    "CLEO_PORT": "8000",
    "CLEO_HOSTNAME": "http://cleo.test",
    "CLEO_INSTANCE_NAME": "Cleo Test",
    "CLEO_FILE_DIR": "/tmp/cleo-files",
    "CLEO_SMTP_SERVER": "smtp.cleo.test",
    "CLEO_SMTP_USERNAME": "noreply@cleo.test",
    "CLEO_SMTP_PASS": "smtp-secret",
    "CLEO_ADMIN_USERNAME": "admin",
    "CLEO_ADMIN_EMAIL": "admin@cleo.test",
    "CLEO_ADMIN_PASSWORD": "admin-pass",
    "CLEO_ADMIN_DISPLAY_NAME": "Administrator",
    "CLEO_POSTGRES_USER": "cleo",
    "CLEO_POSTGRES_PASS": "cleo",
    "CLEO_POSTGRES_HOST": "localhost",
    "CLEO_POSTGRES_PORT": "5432",
    # Use async sqlite driver
    "CLEO_DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    # Cheap hashes keep the suite fast
    "CLEO_BCRYPT_ROUNDS": "4",
}
os.environ.update(_TEST_ENV)

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cleo.api.v1.deps import get_db
from cleo.core.config import settings
from cleo.core.exceptions import DownstreamError
from cleo.db.base import Base
from cleo.main import app
from cleo.models.instance import InstanceInformation
from cleo.services.bootstrap import bootstrap_instance
from cleo.services.mailer import Mailer, get_mailer

ADMIN_USERNAME = _TEST_ENV["CLEO_ADMIN_USERNAME"]
ADMIN_PASSWORD = _TEST_ENV["CLEO_ADMIN_PASSWORD"]

# Create a test engine for the entire session
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_db(tmp_path):
    """Create all tables and seed the instance before each test, drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    config = settings.model_copy(update={"FILE_DIR": str(tmp_path / "files")})
    async with TestingSessionLocal() as session:
        await bootstrap_instance(session, config)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


# ── Mail ────────────────────────────────────────────────────────────
class RecordingMailer(Mailer):
    """Keeps messages in memory instead of talking to an SMTP relay."""

    def __init__(self) -> None:
        super().__init__(settings)
        self.sent: list[dict[str, str]] = []
        self.fail = False

    async def send(self, info: InstanceInformation, to_addr: str, subject: str, body: str) -> None:
        if self.fail:
            raise DownstreamError("Could not send email.")
        self.sent.append({"to": to_addr, "subject": subject, "body": body})

    def last_token(self) -> str:
        """The email token embedded in the most recent verification link."""
        return self.sent[-1]["body"].rsplit("/email/", 1)[1]


@pytest.fixture(autouse=True)
def mailer() -> RecordingMailer:
    recorder = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: recorder
    return recorder


# ── Clients & sessions ──────────────────────────────────────────────
@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


# ── Account helpers ─────────────────────────────────────────────────
async def _login(client: AsyncClient, username: str, password: str) -> str:
    resp = await client.post("/token/create", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
async def admin_token(async_client: AsyncClient) -> str:
    return await _login(async_client, ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def issue_key(async_client: AsyncClient, admin_token: str):
    """Factory: have the admin issue a signup key, return its secret."""

    async def _issue(username: str, key_type: str = "normal") -> str:
        resp = await async_client.post(
            "/keys/create",
            json={"api_token": admin_token, "key_type": key_type, "username": username},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["user_key"]

    return _issue


@pytest.fixture
def make_user(async_client: AsyncClient, issue_key):
    """Factory: register *username* with a fresh key and return an API token."""

    async def _make(username: str, key_type: str = "normal", password: str = "hunter22") -> str:
        key = await issue_key(username, key_type)
        resp = await async_client.post(
            "/user/create",
            json={
                "username": username,
                "display_name": username.title(),
                "password": password,
                "email_addr": f"{username}@example.com",
                "pfp_url": "",
                "user_key": key,
            },
        )
        assert resp.status_code == 200, resp.text
        return await _login(async_client, username, password)

    return _make
