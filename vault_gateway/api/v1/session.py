"""/v1/session - login, logout, session state, and on-demand sync"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from vault_gateway.api.v1.schemas import LoginRequest, RecordSchema, SessionResponse, SyncResponse
from vault_gateway.api.dependencies import (
    get_reconciliation_loop,
    get_renderer,
    get_request_id,
    get_session_manager,
)
from vault_gateway.application.reconciliation import ReconciliationLoop
from vault_gateway.application.session import SessionManager
from vault_gateway.domain.exceptions import (
    InvalidCredentialsError,
    LoginInProgressError,
    MissingCredentialsError,
    VaultUnavailableError,
)
from vault_gateway.domain.models import Credentials
from vault_gateway.presentation.dashboard import DashboardRenderer

router = APIRouter()
logger = logging.getLogger(__name__)


def _session_response(session_manager: SessionManager) -> SessionResponse:
    record = session_manager.current_record()
    return SessionResponse(
        authenticated=session_manager.is_authenticated,
        record=RecordSchema.from_record(record) if record else None,
        last_sync=session_manager.last_sync,
    )


@router.post("/session/login", response_model=SessionResponse)
async def login(
    request_body: LoginRequest,
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Authorize a session against a fresh read of the vault.

    Status codes:
    - 400: identity key or secret blank
    - 401: no matching record
    - 409: another login is awaiting the vault
    - 503: vault unreachable or returned an unusable body
    """
    request_id = get_request_id(request)
    credentials = Credentials(identity_key=request_body.username, secret=request_body.password)

    try:
        await session_manager.attempt_login(credentials)
    except MissingCredentialsError as e:
        raise HTTPException(status_code=400, detail=e.user_message)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.user_message)
    except LoginInProgressError as e:
        raise HTTPException(status_code=409, detail=e.user_message)
    except VaultUnavailableError as e:
        logger.error(f"Vault unavailable during login: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail=e.user_message)

    return _session_response(session_manager)


@router.get("/session", response_model=SessionResponse)
def get_session(session_manager: SessionManager = Depends(get_session_manager)):
    """Current session state; the record is omitted while anonymous"""
    return _session_response(session_manager)


@router.post("/session/logout", response_model=SessionResponse)
def logout(
    session_manager: SessionManager = Depends(get_session_manager),
    renderer: DashboardRenderer = Depends(get_renderer),
):
    """Full reset back to an anonymous session"""
    session_manager.reset()
    renderer.clear()
    return _session_response(session_manager)


@router.post("/session/sync", response_model=SyncResponse)
async def sync_now(
    session_manager: SessionManager = Depends(get_session_manager),
    reconciliation_loop: ReconciliationLoop = Depends(get_reconciliation_loop),
):
    """Run one reconciliation tick immediately instead of waiting for the timer"""
    outcome = await reconciliation_loop.tick()
    return SyncResponse(outcome=outcome.value, last_sync=session_manager.last_sync)
