"""Calls against the API's authentication endpoints."""

import logging

from infrastructure.api.api_client import TOKEN_REFRESH_PATH, ApiClient, ApiError
from infrastructure.storage.token_storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TokenStorage
from use_cases.session_models import LoginCredentials, User

log = logging.getLogger(__name__)

TOKEN_PATH = "/auth/token/"
CURRENT_USER_PATH = "/me/"


def obtain_token_pair(client: ApiClient, storage: TokenStorage, credentials: LoginCredentials) -> dict:
    """Exchange username/password for a token pair and persist both tokens."""
    # Bad credentials answer 401; that must not go through the refresh cycle.
    data = client.post(TOKEN_PATH, json=credentials.to_payload(), refresh_on_unauthorized=False)
    if not isinstance(data, dict) or not data.get("access") or not data.get("refresh"):
        raise ApiError("Respuesta de autenticación inválida")

    storage.set(ACCESS_TOKEN_KEY, data["access"])
    storage.set(REFRESH_TOKEN_KEY, data["refresh"])
    log.info("Token pair issued for %s", credentials.username)
    return data


def refresh_access_token(client: ApiClient, storage: TokenStorage) -> str:
    """Explicitly mint a new access token from the stored refresh token."""
    refresh_token = storage.get(REFRESH_TOKEN_KEY)
    if not refresh_token:
        raise ApiError("No refresh token available", status_code=401)
    data = client.post(TOKEN_REFRESH_PATH, json={"refresh": refresh_token}, refresh_on_unauthorized=False)
    access = (data or {}).get("access")
    if not access:
        raise ApiError("Respuesta de autenticación inválida")
    storage.set(ACCESS_TOKEN_KEY, access)
    return access


def fetch_current_user(client: ApiClient) -> User:
    data = client.get(CURRENT_USER_PATH)
    try:
        return User.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise ApiError("Respuesta de usuario inválida") from exc
