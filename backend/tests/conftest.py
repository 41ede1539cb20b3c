"""Shared fixtures for the Promissio backend tests."""

from datetime import UTC, date, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from promissio.core.config import DatabaseConfig, Settings
from promissio.core.database import initialize_database, shutdown_database
from promissio.main import create_app
from promissio.modules.audit.domain.entities.audit_log_entry import (
    AuditActor,
    AuditLogEntry,
)
from promissio.modules.audit.infrastructure.models import AuditLogModel
from promissio.modules.contracts.domain.entities.contract import Contract
from promissio.modules.contracts.infrastructure.models import ContractModel
from promissio.modules.identity.infrastructure.models import UserModel

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed reference instant."""
    return NOW


@pytest.fixture
def make_contract():
    """Factory for contracts created long before ``NOW`` unless overridden."""

    def _make(
        contract_id="c-1",
        status="Active",
        end_date: date | None = None,
        created_at: datetime | None = None,
        partner="Acme Films",
        content=None,
    ) -> Contract:
        return Contract(
            id=contract_id,
            partner=partner,
            content=content,
            status=status,
            start_date=date(2024, 1, 1),
            end_date=end_date,
            created_at=created_at or NOW - timedelta(days=365),
        )

    return _make


@pytest.fixture
def make_entry():
    """Factory for audit log entries."""

    def _make(
        entry_id="log-1",
        action="Contract Created",
        user: AuditActor | None = None,
        created_at: datetime | None = None,
        **kwargs,
    ) -> AuditLogEntry:
        return AuditLogEntry(
            id=entry_id,
            action=action,
            user=user,
            created_at=created_at or NOW,
            **kwargs,
        )

    return _make


@pytest.fixture
def jane():
    return AuditActor(id="u-1", email="jane@example.com", first_name="Jane", last_name="Doe")


@pytest.fixture
def test_settings(monkeypatch):
    """Settings read from a clean testing environment."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    return Settings(env_file=None)


@pytest_asyncio.fixture
async def database():
    """In-memory database with all tables created."""
    manager = initialize_database(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await manager.create_tables()
    yield manager
    await shutdown_database()


@pytest_asyncio.fixture
async def seeded_database(database):
    """Users, contracts and audit logs relative to ``NOW`` (stored as naive UTC)."""
    naive_now = NOW.replace(tzinfo=None)

    async with database.session() as session:
        session.add_all(
            [
                UserModel(
                    id="u-1",
                    email="jane@example.com",
                    first_name="Jane",
                    last_name="Doe",
                    role="Admin",
                ),
                UserModel(id="u-2", email="legal@example.com", role="Legal"),
            ]
        )
        session.add_all(
            [
                ContractModel(
                    id="c-expired",
                    partner="Acme Films",
                    content="Summer Catalogue",
                    status="Expired",
                    start_date=date(2024, 3, 1),
                    end_date=(NOW - timedelta(days=10)).date(),
                    created_at=naive_now - timedelta(days=400),
                ),
                ContractModel(
                    id="c-expiring",
                    partner="Blue Harbor",
                    status="Active",
                    start_date=date(2024, 4, 1),
                    end_date=(NOW + timedelta(days=5)).date(),
                    created_at=naive_now - timedelta(days=300),
                ),
                ContractModel(
                    id="c-new",
                    partner="Northwind Media",
                    status="Pending",
                    created_at=naive_now - timedelta(days=1),
                ),
            ]
        )
        session.add_all(
            [
                AuditLogModel(
                    id="log-1",
                    action="Contract Created",
                    entity_type="contract",
                    entity_id="c-new-0000-1111",
                    new_values={"partner": "Northwind Media"},
                    user_id="u-1",
                    ip_address="10.0.0.1",
                    created_at=naive_now - timedelta(days=1),
                ),
                AuditLogModel(
                    id="log-2",
                    action="Contract Updated",
                    entity_type="contract",
                    entity_id="c-expiring",
                    old_values={"status": "Pending"},
                    new_values={"status": "Active"},
                    user_id="u-2",
                    created_at=naive_now - timedelta(hours=2),
                ),
                AuditLogModel(
                    id="log-3",
                    action="Royalty Statement Generated",
                    created_at=naive_now - timedelta(days=20),
                ),
                AuditLogModel(
                    id="log-4",
                    action="User Created",
                    entity_type="user",
                    entity_id="u-2",
                    user_id="u-1",
                    created_at=naive_now - timedelta(days=40),
                ),
            ]
        )
        await session.commit()

    return database


@pytest_asyncio.fixture
async def api_client(seeded_database, test_settings):
    """HTTP client bound to the application over ASGI (lifespan not run)."""
    app = create_app(test_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
