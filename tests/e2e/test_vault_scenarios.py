"""End-to-end scenarios: login, admin edits, outages, and logout against a mock vault"""

import httpx
from decimal import Decimal
import pytest

from vault_gateway.application.reconciliation import ReconciliationLoop, SyncOutcome
from vault_gateway.application.session import SessionManager
from vault_gateway.domain.exceptions import InvalidCredentialsError, VaultUnavailableError
from vault_gateway.domain.models import Credentials, SessionState
from vault_gateway.infrastructure.clients.record_store import RecordStoreClient
from vault_gateway.presentation.dashboard import DashboardRenderer
from mock_vault.main import create_mock_vault

ALICE_ROW = {
    "id": 2,
    "username": "alice",
    "password": "1234",
    "fullName": "Alice A",
    "balance": 500,
    "currency": "USD",
}


class CountingTransport(httpx.AsyncBaseTransport):
    """ASGI transport that counts requests reaching the vault"""

    def __init__(self, app):
        self.inner = httpx.ASGITransport(app=app)
        self.requests = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        return await self.inner.handle_async_request(request)


@pytest.fixture
def vault():
    return create_mock_vault(rows=[ALICE_ROW])


@pytest.fixture
def transport(vault) -> CountingTransport:
    return CountingTransport(vault)


@pytest.fixture
def gateway(settings, transport):
    client = RecordStoreClient(settings=settings, transport=transport)
    renderer = DashboardRenderer()
    manager = SessionManager(client, renderer=renderer)
    loop = ReconciliationLoop(manager, client, interval_seconds=settings.poll_interval_seconds, renderer=renderer)
    return manager, loop, renderer


async def test_alice_logs_in_then_wrong_secret_is_rejected(gateway, settings, transport):
    manager, _, renderer = gateway

    record = await manager.attempt_login(Credentials("alice", "1234"))
    assert record.full_name == "Alice A"
    assert record.balance == 500
    assert record.currency == "USD"
    assert manager.state is SessionState.AUTHENTICATED
    assert renderer.view.balance == "$500.00"

    fresh = SessionManager(RecordStoreClient(settings=settings, transport=transport))
    with pytest.raises(InvalidCredentialsError):
        await fresh.attempt_login(Credentials("alice", "wrong"))
    assert fresh.state is SessionState.ANONYMOUS
    assert fresh.current_record() is None


async def test_unreachable_vault_then_anonymous_tick_makes_no_calls(gateway, vault, transport):
    manager, loop, renderer = gateway
    vault.state.available = False

    with pytest.raises(VaultUnavailableError):
        await manager.attempt_login(Credentials("alice", "1234"))

    assert manager.current_record() is None
    assert renderer.notifications[-1].message == "System Error: Vault Connection Timed Out"

    calls_before = transport.requests
    assert await loop.tick() is SyncOutcome.SKIPPED_ANONYMOUS
    assert transport.requests == calls_before


async def test_admin_balance_change_reaches_dashboard(gateway, vault):
    manager, loop, renderer = gateway
    await manager.attempt_login(Credentials("alice", "1234"))

    vault.state.rows[0]["balance"] = 1250.75
    vault.state.rows[0]["transactionHistory"] = "Bonus +750.75"

    assert await loop.tick() is SyncOutcome.UPDATED
    assert manager.current_record().balance == Decimal("1250.75")
    assert renderer.view.balance == "$1,250.75"
    assert renderer.view.history == (("Bonus +750.75", "SECURED"),)


async def test_row_deleted_by_admin_keeps_stale_record(gateway, vault):
    manager, loop, renderer = gateway
    await manager.attempt_login(Credentials("alice", "1234"))
    held = manager.current_record()

    vault.state.rows.clear()

    assert await loop.tick() is SyncOutcome.NOT_FOUND
    assert manager.current_record() is held
    assert renderer.view.client_name == "Alice A"


async def test_outage_then_recovery(gateway, vault):
    manager, loop, _ = gateway
    await manager.attempt_login(Credentials("alice", "1234"))

    vault.state.available = False
    assert await loop.tick() is SyncOutcome.FAILED
    assert manager.is_authenticated

    vault.state.available = True
    vault.state.rows[0]["balance"] = 42
    assert await loop.tick() is SyncOutcome.UPDATED
    assert manager.current_record().balance == 42


async def test_logout_stops_sync_traffic(gateway, transport):
    manager, loop, _ = gateway
    await manager.attempt_login(Credentials("alice", "1234"))

    manager.reset()
    calls_before = transport.requests

    assert await loop.tick() is SyncOutcome.SKIPPED_ANONYMOUS
    assert transport.requests == calls_before
    assert manager.current_record() is None
