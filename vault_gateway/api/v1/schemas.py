"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional

from vault_gateway.domain.models import UserRecord
from vault_gateway.presentation.dashboard import DashboardView


class LoginRequest(BaseModel):
    """Request body for POST /v1/session/login"""

    username: str = Field(..., description="Identity key")
    password: str = Field(..., description="Secret, compared in plaintext")


class RecordSchema(BaseModel):
    """User record as exposed to the page; the secret is never included"""

    username: str
    full_name: str
    account_type: str
    account_number: str
    balance: Decimal
    currency: str
    credit_score: str
    account_status: str
    transaction_history: List[str]

    @classmethod
    def from_record(cls, record: UserRecord) -> "RecordSchema":
        return cls(
            username=record.username,
            full_name=record.full_name,
            account_type=record.account_type,
            account_number=record.account_number,
            balance=record.balance,
            currency=record.currency,
            credit_score=record.credit_score,
            account_status=record.account_status,
            transaction_history=list(record.transaction_history),
        )


class SessionResponse(BaseModel):
    """Response for the /v1/session endpoints"""

    authenticated: bool
    record: Optional[RecordSchema] = None
    last_sync: Optional[datetime] = None


class HistoryItemSchema(BaseModel):
    description: str
    tag: str


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    client_name: str
    balance: str
    account_number: str
    account_type: str
    credit_score: str
    account_status: str
    history: List[HistoryItemSchema]
    avatar_url: str
    loading: bool = False

    @classmethod
    def from_view(cls, view: DashboardView, loading: bool = False) -> "DashboardResponse":
        return cls(
            client_name=view.client_name,
            balance=view.balance,
            account_number=view.account_number,
            account_type=view.account_type,
            credit_score=view.credit_score,
            account_status=view.account_status,
            history=[HistoryItemSchema(description=item, tag=tag) for item, tag in view.history],
            avatar_url=view.avatar_url,
            loading=loading,
        )


class SyncResponse(BaseModel):
    """Response for POST /v1/session/sync"""

    outcome: str
    last_sync: Optional[datetime] = None
