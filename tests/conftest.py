"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Any, Dict, List
from unittest.mock import AsyncMock

from vault_gateway.application.session import SessionManager
from vault_gateway.config import Settings
from vault_gateway.domain.models import RecordDefaults, UserRecord
from vault_gateway.domain.records import parse_collection
from vault_gateway.infrastructure.clients.record_store import RecordStoreClient
from vault_gateway.presentation.renderer import Severity

VAULT_URL = "http://vault.test/onlineBanking/userDatabase"


class RecordingRenderer:
    """ViewRenderer that remembers every call in order"""

    def __init__(self):
        self.calls: List[tuple] = []

    def render(self, record: UserRecord) -> None:
        self.calls.append(("render", record))

    def show_error(self, message: str, severity: Severity) -> None:
        self.calls.append(("show_error", message, severity))

    def set_loading(self, is_loading: bool) -> None:
        self.calls.append(("set_loading", is_loading))

    def of(self, kind: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == kind]


def make_record(username: str = "alice", secret: Any = "1234", **overrides: Any) -> UserRecord:
    fields = dict(
        username=username,
        secret=secret,
        full_name="Alice A",
        account_type="checking",
        account_number="100200300",
        balance=Decimal("500"),
        currency="USD",
        credit_score="700",
        account_status="Active",
        transaction_history=(),
    )
    fields.update(overrides)
    return UserRecord(**fields)


@pytest.fixture
def settings() -> Settings:
    """Settings pointed at a fake vault, independent of the environment"""
    return Settings(endpoint_url=VAULT_URL, poll_interval_ms=30_000)


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Sheety rows as the vault returns them"""
    return [
        {
            "id": 2,
            "username": "alice",
            "password": 1234,
            "fullName": "Alice A",
            "accountType": "checking",
            "accountNumber": 100200300,
            "balance": 500,
            "currency": "USD",
            "transactionHistory": "Salary +3000; Rent -1500",
            "accountStatus": "Active",
            "creditScore": 742,
        },
        {
            "id": 3,
            "username": "bob",
            "password": "hunter2",
            "fullName": "Bob B",
            "accountType": "savings",
            "accountNumber": "SV-9",
            "balance": 75.25,
            "currency": "EUR",
        },
    ]


@pytest.fixture
def sample_records(sample_rows) -> List[UserRecord]:
    return parse_collection({"userDatabase": sample_rows}, "userDatabase", RecordDefaults())


@pytest.fixture
def store(sample_records) -> AsyncMock:
    """Record store client double returning sample_records"""
    client = AsyncMock(spec=RecordStoreClient)
    client.fetch_all.return_value = sample_records
    return client


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def session_manager(store: AsyncMock, renderer: RecordingRenderer) -> SessionManager:
    return SessionManager(store, renderer=renderer)
