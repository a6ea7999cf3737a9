"""User-visible notification dispatch (the UI boundary of the core)."""

import logging
from dataclasses import dataclass
from typing import List, Literal, MutableMapping, Optional

import streamlit as st

NotificationLevel = Literal["success", "error", "info"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


class Notifier:
    def notify(self, notification: Notification) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self.notify(Notification("success", message))

    def error(self, message: str) -> None:
        self.notify(Notification("error", message))

    def info(self, message: str) -> None:
        self.notify(Notification("info", message))

    def flush(self) -> None:
        pass


class LoggingNotifier(Notifier):
    """Headless notifier: notifications go to the log only."""

    def notify(self, notification: Notification) -> None:
        level = logging.ERROR if notification.level == "error" else logging.INFO
        log.log(level, "notification: %s", notification.message)


class StreamlitNotifier(Notifier):
    """
    Toasts are queued in session state and shown by flush(), which the app
    calls at the start and end of every run. A notification raised right
    before st.rerun() is therefore shown by the next run instead of lost.
    """

    ICONS = {"success": "✅", "error": "🚨", "info": "ℹ️"}
    QUEUE_KEY = "_pending_notifications"

    def __init__(self, state: Optional[MutableMapping] = None):
        self._state = state if state is not None else st.session_state

    def _queue(self) -> List[Notification]:
        if self.QUEUE_KEY not in self._state:
            self._state[self.QUEUE_KEY] = []
        return self._state[self.QUEUE_KEY]

    def notify(self, notification: Notification) -> None:
        self._queue().append(notification)

    def flush(self) -> None:
        queue = self._queue()
        while queue:
            notification = queue.pop(0)
            st.toast(notification.message, icon=self.ICONS[notification.level])
