"""Session manager - sole owner of the client session state"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from vault_gateway.domain.exceptions import (
    AuthError,
    DomainException,
    IllegalStateError,
    InvalidCredentialsError,
    LoginInProgressError,
    MissingCredentialsError,
    VaultUnavailableError,
)
from vault_gateway.domain.models import Credentials, Session, SessionState, UserRecord
from vault_gateway.domain.verifier import verify
from vault_gateway.infrastructure.clients.record_store import RecordStoreClient
from vault_gateway.infrastructure.observability.logging import log_login_attempt
from vault_gateway.infrastructure.observability.metrics import record_login, record_session_state
from vault_gateway.presentation.renderer import NullRenderer, Severity, ViewRenderer

logger = logging.getLogger(__name__)

_LOGIN_OUTCOMES = {
    MissingCredentialsError: "missing_credentials",
    InvalidCredentialsError: "invalid_credentials",
    VaultUnavailableError: "vault_unavailable",
    LoginInProgressError: "in_progress",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    """
    Owns the single Session value and every transition of it.

    ANONYMOUS -> AUTHENTICATED only through attempt_login; back to ANONYMOUS
    only through reset(). Other components read through the accessors.
    """

    def __init__(
        self,
        client: RecordStoreClient,
        renderer: Optional[ViewRenderer] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.renderer = renderer or NullRenderer()
        self._clock = clock
        self._session = Session.anonymous()
        self._login_in_flight = False

    # ── Accessors ─────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def is_authenticated(self) -> bool:
        return self._session.state is SessionState.AUTHENTICATED

    @property
    def last_sync(self) -> Optional[datetime]:
        return self._session.last_sync

    @property
    def identity_key(self) -> Optional[str]:
        record = self._session.record
        return record.username if record else None

    @property
    def login_in_flight(self) -> bool:
        return self._login_in_flight

    def current_record(self) -> Optional[UserRecord]:
        return self._session.record

    def snapshot(self) -> Session:
        """The current immutable session value"""
        return self._session

    # ── Transitions ───────────────────────────────────────────

    async def attempt_login(self, credentials: Credentials) -> UserRecord:
        """
        Verify credentials against a fresh read of the record store.

        Returns the matched record and moves the session to AUTHENTICATED.
        On any failure the session is left exactly as it was.

        Raises:
            MissingCredentialsError: Identity key or secret is blank
            LoginInProgressError: Another attempt is awaiting the record store
            InvalidCredentialsError: No record matches
            VaultUnavailableError: Record store unreachable or malformed
        """
        start_time = time.time()
        identity_key = credentials.identity_key.strip()

        try:
            record = await self._login(credentials)
        except AuthError as e:
            outcome = _LOGIN_OUTCOMES.get(type(e), "failed")
            record_login(outcome)
            log_login_attempt(identity_key, outcome, (time.time() - start_time) * 1000)
            self.renderer.show_error(e.user_message, Severity.ERROR)
            raise

        record_login("granted")
        log_login_attempt(identity_key, "granted", (time.time() - start_time) * 1000)
        logger.info("Access granted for %s", record.full_name or record.username)
        self.renderer.render(record)
        return record

    async def _login(self, credentials: Credentials) -> UserRecord:
        if not credentials.identity_key.strip() or not credentials.secret.strip():
            raise MissingCredentialsError("Identity key and secret are required")
        if self._login_in_flight:
            raise LoginInProgressError("A login attempt is already awaiting the record store")

        self._login_in_flight = True
        self.renderer.set_loading(True)
        try:
            logger.info("Attempting secure fetch from vault")
            try:
                records = await self.client.fetch_all()
            except DomainException as e:
                logger.error("Vault fetch failed during login: %s", e)
                raise VaultUnavailableError(str(e)) from e

            record = verify(records, credentials)
            if record is None:
                raise InvalidCredentialsError("No record matches the submitted credentials")

            # Single reference swap: record and last_sync are set together
            self._session = Session.authenticated(record, self._clock())
            record_session_state(True)
            return record
        finally:
            self._login_in_flight = False
            self.renderer.set_loading(False)

    def replace_record(self, new_record: UserRecord) -> None:
        """
        Swap in a freshly synced record for the signed-in user.

        Raises:
            IllegalStateError: If the session is ANONYMOUS
        """
        if not self.is_authenticated:
            raise IllegalStateError("Cannot replace record on an anonymous session")
        self._session = Session.authenticated(new_record, self._clock())

    def reset(self) -> None:
        """Logout: discard the held record and return to ANONYMOUS"""
        if self.is_authenticated:
            logger.info("Session reset for %s", self.identity_key)
        self._session = Session.anonymous()
        record_session_state(False)
