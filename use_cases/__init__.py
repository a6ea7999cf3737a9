"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowResult, AuthFlowStatus, GuardDecision, decide, ensure_authenticated_session, rehydrate_session
from .bootstrap import StartupResult, StartupStatus, run_startup
from .report_flow import ReportContext, build_report_context, inventory_rows, low_stock_rows
from .session_models import LoginCredentials, SessionState, SessionStatus, User
from .session_store import SessionStore

__all__ = [
    "AuthFlowResult",
    "AuthFlowStatus",
    "GuardDecision",
    "LoginCredentials",
    "ReportContext",
    "SessionState",
    "SessionStatus",
    "SessionStore",
    "StartupResult",
    "StartupStatus",
    "User",
    "build_report_context",
    "decide",
    "ensure_authenticated_session",
    "inventory_rows",
    "low_stock_rows",
    "rehydrate_session",
    "run_startup",
]
