"""View renderer boundary consumed by the session manager and reconciliation loop"""

from enum import Enum
from typing import Protocol

from vault_gateway.domain.models import UserRecord


class Severity(str, Enum):
    ERROR = "error"
    INFO = "info"


class ViewRenderer(Protocol):
    """Presentation surface; implemented outside the core"""

    def render(self, record: UserRecord) -> None: ...

    def show_error(self, message: str, severity: Severity) -> None: ...

    def set_loading(self, is_loading: bool) -> None: ...


class NullRenderer:
    """Renderer that discards every call"""

    def render(self, record: UserRecord) -> None:
        pass

    def show_error(self, message: str, severity: Severity) -> None:
        pass

    def set_loading(self, is_loading: bool) -> None:
        pass
