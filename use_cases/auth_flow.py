"""Route guard: cold-start session rehydration and access gating."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from infrastructure.api.api_client import ApiError
from infrastructure.notifications import Notifier
from infrastructure.storage.token_storage import ACCESS_TOKEN_KEY, TokenStorage
from use_cases.session_models import SessionState
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

AuthFlowStatus = Literal["CONTINUE", "STOP"]
GuardDecision = Literal["LOADING", "REDIRECT", "RENDER"]

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for auth flow orchestration."""

    status: AuthFlowStatus
    reason: str
    user_id: Optional[int] = None


def rehydrate_session(store: SessionStore, storage: TokenStorage, notifier: Notifier) -> None:
    """Fetch the current user when a stored access token exists but no session is active."""
    state = store.state
    if not storage.get(ACCESS_TOKEN_KEY) or state.is_authenticated or state.is_loading:
        return
    try:
        store.get_current_user()
    except ApiError as exc:
        log.info("Failed to fetch user on route load: %s", exc.message)
        notifier.error(SESSION_EXPIRED_MESSAGE)


def decide(state: SessionState) -> GuardDecision:
    if state.is_loading:
        return "LOADING"
    if not state.is_authenticated:
        return "REDIRECT"
    return "RENDER"


def ensure_authenticated_session(store: SessionStore, storage: TokenStorage, notifier: Notifier) -> AuthFlowResult:
    """Run auth-gate orchestration and return a control-flow status."""
    rehydrate_session(store, storage, notifier)

    decision = decide(store.state)
    if decision == "LOADING":
        return AuthFlowResult(status="STOP", reason="loading")
    if decision == "REDIRECT":
        return AuthFlowResult(status="STOP", reason="auth_required")

    user = store.state.user
    return AuthFlowResult(status="CONTINUE", reason="authenticated", user_id=user.id if user else None)
