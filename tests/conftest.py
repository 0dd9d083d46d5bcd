from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import cast
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.value_objects.role import Role
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    cattle,
    device_token,
    notification,
    pregnancy_record,
    semination_record,
)
from src.infrastructure.db.orm.organization import OrganizationORM
from src.infrastructure.db.orm.user import UserORM
from src.interfaces.http.main import create_app

TEST_PASSWORD = "secret-pass"


class RecordingPushSender:
    """Collects push calls instead of talking to FCM."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[dict] = []

    async def send_to_tokens(self, tokens, title, body, data=None):
        self.calls.append({"tokens": list(tokens), "title": title, "body": body, "data": data})
        if self.fail:
            raise RuntimeError("push backend unavailable")
        return []


@pytest.fixture(scope="session")
def password_hasher() -> PasswordHasher:
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(bcrypt_rounds=4)


@pytest.fixture(scope="session")
def hashed_password(password_hasher: PasswordHasher) -> str:
    return password_hasher.hash(TEST_PASSWORD)


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "log_level": "INFO",
            "environment": "test",
            "reminders_enabled": False,
        }
    )


@pytest.fixture()
def push_sender() -> RecordingPushSender:
    return RecordingPushSender()


@pytest.fixture()
def app(test_settings: Settings, password_hasher: PasswordHasher, push_sender):
    return create_app(
        settings=test_settings, password_hasher=password_hasher, push_sender=push_sender
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


@pytest.fixture()
async def seeded_users(app, client, hashed_password: str) -> dict:
    """Two farms: ``farm`` with an admin and a worker, ``other`` with its own admin."""
    farm_id = uuid4()
    other_id = uuid4()
    users = {
        "admin": UserORM(
            id=uuid4(),
            organization_id=farm_id,
            username="admin",
            email="admin@example.com",
            hashed_password=hashed_password,
            role=Role.ADMIN,
            is_active=True,
        ),
        "worker": UserORM(
            id=uuid4(),
            organization_id=farm_id,
            username="worker",
            email="worker@example.com",
            hashed_password=hashed_password,
            role=Role.USER,
            is_active=True,
        ),
        "other_admin": UserORM(
            id=uuid4(),
            organization_id=other_id,
            username="other-admin",
            email="other@example.com",
            hashed_password=hashed_password,
            role=Role.ADMIN,
            is_active=True,
        ),
    }
    async with app.state.session_factory() as session:
        async_session = cast(AsyncSession, session)
        async_session.add_all(
            [
                OrganizationORM(id=farm_id, name="Green Valley"),
                OrganizationORM(id=other_id, name="Hill Farm"),
            ]
        )
        await async_session.flush()
        async_session.add_all(list(users.values()))
        await async_session.commit()

    jwt_service = app.state.jwt_service
    seeded: dict = {"farm_id": farm_id, "other_id": other_id}
    for key, user in users.items():
        token = jwt_service.create_access_token(
            subject=user.id, organization_id=user.organization_id, role=user.role
        )
        seeded[key] = user.id
        seeded[f"{key}_headers"] = {"Authorization": f"Bearer {token}"}
    return seeded
