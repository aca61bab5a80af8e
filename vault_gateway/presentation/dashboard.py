"""Dashboard projection of a user record, plus an in-memory renderer holding it"""

from collections import deque
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import Deque, List, Optional, Tuple
from urllib.parse import urlencode

from vault_gateway.domain.models import UserRecord
from vault_gateway.presentation.renderer import Severity

AVATAR_BACKGROUND = "d4af37"
AVATAR_COLOR = "0a192f"
HISTORY_TAG = "SECURED"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
}

# ISO 4217 currencies without minor units
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW", "VND", "CLP", "ISK"})


@dataclass(frozen=True)
class DashboardView:
    """What the dashboard page shows for the signed-in client"""

    client_name: str
    balance: str
    account_number: str
    account_type: str
    credit_score: str
    account_status: str
    history: Tuple[Tuple[str, str], ...]
    avatar_url: str


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity


def format_currency(amount: Decimal, currency: str = "USD") -> str:
    """
    Format an amount in en-US currency style.

    Examples:
        1234.5, USD -> $1,234.50
        -20, USD    -> -$20.00
        500, AED    -> AED 500.00
    """
    code = (currency or "USD").upper()
    places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    amount = Decimal(amount)
    if not amount.is_finite():
        return f"{code} {amount}"

    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Enough digits for the integer part plus the minor units
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_EVEN)
        sign = "-" if rounded < 0 else ""
        digits = f"{abs(rounded):,.{places}f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {digits}"
    return f"{sign}{symbol}{digits}"


def avatar_url(full_name: str, base_url: str = "https://ui-avatars.com/api/") -> str:
    query = urlencode(
        {"name": full_name, "background": AVATAR_BACKGROUND, "color": AVATAR_COLOR, "bold": "true"}
    )
    return f"{base_url}?{query}"


def project_dashboard(record: UserRecord, avatar_base_url: str = "https://ui-avatars.com/api/") -> DashboardView:
    """Map record columns onto the dashboard fields"""
    return DashboardView(
        client_name=record.full_name,
        balance=format_currency(record.balance, record.currency),
        account_number=f"Acc: {record.account_number}",
        account_type=record.account_type.upper(),
        credit_score=record.credit_score,
        account_status=record.account_status,
        history=tuple((item, HISTORY_TAG) for item in record.transaction_history),
        avatar_url=avatar_url(record.full_name, avatar_base_url),
    )


class DashboardRenderer:
    """
    Headless ViewRenderer that keeps the latest dashboard projection.

    The HTTP layer serves whatever this holds; the browser page polls it.
    """

    def __init__(self, avatar_base_url: str = "https://ui-avatars.com/api/", max_notifications: int = 20):
        self.avatar_base_url = avatar_base_url
        self.view: Optional[DashboardView] = None
        self.loading = False
        self._notifications: Deque[Notification] = deque(maxlen=max_notifications)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    def render(self, record: UserRecord) -> None:
        self.view = project_dashboard(record, self.avatar_base_url)

    def show_error(self, message: str, severity: Severity) -> None:
        self._notifications.append(Notification(message=message, severity=severity))

    def set_loading(self, is_loading: bool) -> None:
        self.loading = is_loading

    def clear(self) -> None:
        """Drop the projection after logout"""
        self.view = None
        self.loading = False
