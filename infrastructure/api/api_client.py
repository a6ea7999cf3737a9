"""
HTTP gateway to the inventory REST API.

Every outbound call goes through ApiClient.request(): the access token is
attached as a bearer credential, and a 401 triggers one refresh-and-resubmit
cycle. Failures are raised as ApiError after a single notification.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import requests

from infrastructure.navigation import Navigator
from infrastructure.notifications import Notifier
from infrastructure.storage.token_storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TokenStorage

log = logging.getLogger(__name__)

TOKEN_REFRESH_PATH = "/auth/token/refresh/"
GENERIC_ERROR_MESSAGE = "Ha ocurrido un error"


class RetryState(Enum):
    INITIAL = "initial"
    RETRYING_AFTER_REFRESH = "retrying_after_refresh"
    EXHAUSTED = "exhausted"


class ApiError(Exception):
    """Failed API call. status_code is None for transport errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.notified = False

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiError":
        try:
            payload = response.json()
        except ValueError:
            payload = None
        return cls(extract_error_message(payload), status_code=response.status_code, payload=payload)


class RefreshFailedError(ApiError):
    """The refresh token could not be exchanged for a new access token."""


def extract_error_message(payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("detail", "message"):
            value = payload.get(key)
            if value:
                return str(value)
    return GENERIC_ERROR_MESSAGE


@dataclass(frozen=True)
class OutboundCall:
    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    data: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, Any]] = None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        storage: TokenStorage,
        notifier: Notifier,
        navigator: Navigator,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.notifier = notifier
        self.navigator = navigator
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    # --- public verbs ---

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self.request("GET", path, params=params))

    def post(self, path: str, json: Any = None, data=None, files=None, refresh_on_unauthorized: bool = True) -> Any:
        response = self.request(
            "POST", path, json=json, data=data, files=files, refresh_on_unauthorized=refresh_on_unauthorized
        )
        return self._decode(response)

    def put(self, path: str, json: Any = None, data=None, files=None) -> Any:
        return self._decode(self.request("PUT", path, json=json, data=data, files=files))

    def patch(self, path: str, json: Any = None, data=None, files=None) -> Any:
        return self._decode(self.request("PATCH", path, json=json, data=data, files=files))

    def delete(self, path: str) -> Any:
        return self._decode(self.request("DELETE", path))

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        refresh_on_unauthorized: bool = True,
    ) -> requests.Response:
        call = OutboundCall(method.upper(), path, params=params, json=json, data=data, files=files)
        state = RetryState.INITIAL if refresh_on_unauthorized else RetryState.EXHAUSTED
        return self._dispatch(call, state)

    # --- dispatch ---

    def _dispatch(self, call: OutboundCall, state: RetryState, access_token: Optional[str] = None) -> requests.Response:
        token = access_token if access_token is not None else self.storage.get(ACCESS_TOKEN_KEY)
        try:
            response = self._send(call, token)
        except requests.RequestException as exc:
            log.warning("%s %s failed: %s", call.method, call.path, exc)
            error = ApiError(GENERIC_ERROR_MESSAGE)
            self._fail(error)
            raise error from exc

        if response.ok:
            return response

        error = ApiError.from_response(response)
        if response.status_code == 401 and state is RetryState.INITIAL:
            return self._refresh_and_resubmit(call, error)

        log.info("%s %s -> %s (%s)", call.method, call.path, response.status_code, state.value)
        self._fail(error)
        raise error

    def _refresh_and_resubmit(self, call: OutboundCall, original: ApiError) -> requests.Response:
        refresh_token = self.storage.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            log.info("401 on %s %s and no refresh token stored", call.method, call.path)
            self._fail(original)
            raise original

        try:
            new_access = self._refresh(refresh_token)
        except RefreshFailedError as refresh_error:
            log.warning("Token refresh failed (%s); clearing credentials", refresh_error.status_code)
            self.storage.clear_tokens()
            self.navigator.redirect_to_login()
            self._fail(refresh_error)
            raise refresh_error from original

        self.storage.set(ACCESS_TOKEN_KEY, new_access)
        log.info("Access token refreshed; resubmitting %s %s", call.method, call.path)
        return self._dispatch(call, RetryState.RETRYING_AFTER_REFRESH, access_token=new_access)

    def _refresh(self, refresh_token: str) -> str:
        call = OutboundCall("POST", TOKEN_REFRESH_PATH, json={"refresh": refresh_token})
        try:
            response = self._send(call, None)
        except requests.RequestException as exc:
            raise RefreshFailedError(GENERIC_ERROR_MESSAGE) from exc

        if not response.ok:
            error = ApiError.from_response(response)
            raise RefreshFailedError(error.message, status_code=error.status_code, payload=error.payload)

        try:
            access = response.json().get("access")
        except (ValueError, AttributeError):
            access = None
        if not access:
            raise RefreshFailedError(GENERIC_ERROR_MESSAGE, status_code=response.status_code)
        return access

    def _send(self, call: OutboundCall, access_token: Optional[str]) -> requests.Response:
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return self.session.request(
            call.method,
            self._url(call.path),
            params=call.params,
            json=call.json,
            data=call.data,
            files=call.files,
            headers=headers,
            timeout=self.timeout,
        )

    def _fail(self, error: ApiError) -> None:
        self.notifier.error(error.message)
        error.notified = True

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _decode(self, response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            # 2xx with a non-JSON body (proxy or HTML error page)
            log.warning("Undecodable %s response body", response.status_code)
            error = ApiError(GENERIC_ERROR_MESSAGE, status_code=response.status_code)
            self._fail(error)
            raise error from exc
