"""Authentication state machine for one running client."""

import logging
from dataclasses import replace
from typing import Callable, List

import auth
from infrastructure.api.api_client import ApiClient, ApiError
from infrastructure.navigation import Navigator
from infrastructure.notifications import Notifier
from infrastructure.storage.token_storage import TokenStorage
from use_cases.session_models import LoginCredentials, SessionState

log = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]

LOGIN_SUCCESS_MESSAGE = "Login successful!"
LOGOUT_SUCCESS_MESSAGE = "Logged out successfully!"


class SessionStore:
    """
    Owns the session snapshot (user, authenticated/loading flags, last error)
    and mediates every transition. Each transition replaces the snapshot and
    notifies subscribers.

    Operations are not serialized: overlapping calls are allowed and the last
    state write wins.
    """

    def __init__(
        self,
        client: ApiClient,
        storage: TokenStorage,
        notifier: Notifier,
        navigator: Navigator,
    ):
        self.client = client
        self.storage = storage
        self.notifier = notifier
        self.navigator = navigator
        self._state = SessionState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _update(self, **changes) -> None:
        self._set_state(replace(self._state, **changes))

    def reset(self) -> None:
        self._set_state(SessionState())

    def _fail(self, error: ApiError) -> None:
        self._update(is_loading=False, is_authenticated=False, user=None, error=error.message)
        if not error.notified:
            self.notifier.error(error.message)
            error.notified = True

    def login(self, credentials: LoginCredentials) -> None:
        self._update(is_loading=True, error=None)
        try:
            auth.obtain_token_pair(self.client, self.storage, credentials)
            self.get_current_user()
        except ApiError as exc:
            log.info("Login failed for %s: %s", credentials.username, exc.message)
            self._fail(exc)
            raise
        self._update(is_authenticated=True, is_loading=False)
        self.notifier.success(LOGIN_SUCCESS_MESSAGE)

    def logout(self) -> None:
        self.storage.clear_tokens()
        self.reset()
        self.notifier.success(LOGOUT_SUCCESS_MESSAGE)

    def get_current_user(self) -> None:
        self._update(is_loading=True, error=None)
        try:
            user = auth.fetch_current_user(self.client)
        except ApiError as exc:
            self._fail(exc)
            # Also covers a 401 that exhausted the gateway's own retry.
            if exc.status_code == 401:
                self.storage.clear_tokens()
                self.navigator.redirect_to_login()
            raise
        self._update(user=user, is_authenticated=True, is_loading=False)
