"""Startup orchestration for application bootstrap."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import settings
from utils import session_manager

StartupStatus = Literal["CONTINUE", "STOP"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Build the per-tab client context once; later reruns reuse it."""
    executed_steps = []

    first_run = "session_store" not in session_manager.st.session_state
    if first_run:
        app_settings = settings.load_settings()
        executed_steps.append("load_settings")
        log.info("Starting client against %s", app_settings.api_base_url)
    else:
        app_settings = None

    session_manager.init_session_state(app_settings)
    executed_steps.append("init_session_state")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
