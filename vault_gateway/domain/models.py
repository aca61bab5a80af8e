"""Domain models - pure Python dataclasses representing vault entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class UserRecord:
    """One row of the user database, with fallbacks already applied"""

    username: str  # identity key
    secret: Any = field(repr=False)  # raw sheet value: str, or int for all-digit passwords
    full_name: str
    account_type: str
    account_number: str
    balance: Decimal
    currency: str
    credit_score: str
    account_status: str
    transaction_history: Tuple[str, ...] = ()


RecordCollection = List[UserRecord]


@dataclass(frozen=True)
class Credentials:
    """Transient login pair; never persisted"""

    identity_key: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class RecordDefaults:
    """Fallback values for optional record columns"""

    currency: str = "USD"
    credit_score: str = "700"
    account_status: str = "Active"


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class Session:
    """
    Snapshot of the client session.

    Instances are immutable so a state transition is a single reference swap:
    either record and last_sync are both set, or neither is.
    """

    state: SessionState = SessionState.ANONYMOUS
    record: Optional[UserRecord] = None
    last_sync: Optional[datetime] = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def authenticated(cls, record: UserRecord, synced_at: datetime) -> "Session":
        return cls(state=SessionState.AUTHENTICATED, record=record, last_sync=synced_at)
