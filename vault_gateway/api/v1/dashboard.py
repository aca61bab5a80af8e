"""GET /v1/dashboard - rendered projection of the signed-in user's record"""

from fastapi import APIRouter, Depends, HTTPException

from vault_gateway.api.v1.schemas import DashboardResponse
from vault_gateway.api.dependencies import get_renderer, get_session_manager
from vault_gateway.application.session import SessionManager
from vault_gateway.presentation.dashboard import DashboardRenderer

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    session_manager: SessionManager = Depends(get_session_manager),
    renderer: DashboardRenderer = Depends(get_renderer),
):
    """Latest dashboard projection, refreshed by login and every successful sync"""
    if not session_manager.is_authenticated or renderer.view is None:
        raise HTTPException(status_code=404, detail="No active session")
    return DashboardResponse.from_view(renderer.view, loading=renderer.loading)
