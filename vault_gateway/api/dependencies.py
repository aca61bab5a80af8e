"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from vault_gateway.application.reconciliation import ReconciliationLoop
from vault_gateway.application.session import SessionManager
from vault_gateway.presentation.dashboard import DashboardRenderer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session_manager(request: Request) -> SessionManager:
    """Provide the process-wide session manager"""
    return request.app.state.session_manager


def get_reconciliation_loop(request: Request) -> ReconciliationLoop:
    """Provide the reconciliation loop bound to the session manager"""
    return request.app.state.reconciliation_loop


def get_renderer(request: Request) -> DashboardRenderer:
    """Provide the dashboard renderer fed by login and sync"""
    return request.app.state.renderer
