import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from infrastructure.api.api_client import ApiClient, ApiError
from infrastructure.storage.token_storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, InMemoryTokenStorage
from use_cases.session_models import LoginCredentials, SessionStatus, User
from use_cases.session_store import LOGIN_SUCCESS_MESSAGE, LOGOUT_SUCCESS_MESSAGE, SessionStore

ANA = {"id": 7, "username": "ana", "email": "ana@example.com", "first_name": "Ana", "last_name": "Gómez"}


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode() if body is not None else b""
    return response


def make_store(responses=(), tokens=None):
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = list(responses)
    storage = InMemoryTokenStorage(tokens)
    notifier = MagicMock()
    navigator = MagicMock()
    client = ApiClient("http://api.test/api", storage=storage, notifier=notifier, navigator=navigator, session=session)
    store = SessionStore(client, storage=storage, notifier=notifier, navigator=navigator)
    return store, session, storage, notifier, navigator


def test_initial_state_is_logged_out():
    store, _, _, _, _ = make_store()
    assert store.state.status is SessionStatus.LOGGED_OUT
    assert store.state.user is None
    assert store.state.error is None


def test_login_success_stores_tokens_and_user():
    store, session, storage, notifier, _ = make_store(
        [make_response(200, {"access": "A1", "refresh": "R1"}), make_response(200, ANA)]
    )

    store.login(LoginCredentials("ana", "secreta"))

    assert storage.get(ACCESS_TOKEN_KEY) == "A1"
    assert storage.get(REFRESH_TOKEN_KEY) == "R1"
    assert store.state.is_authenticated is True
    assert store.state.is_loading is False
    assert store.state.user == User.from_dict(ANA)
    assert session.request.call_args_list[0].kwargs["json"] == {"username": "ana", "password": "secreta"}
    assert session.request.call_args_list[1].kwargs["headers"]["Authorization"] == "Bearer A1"
    notifier.success.assert_called_once_with(LOGIN_SUCCESS_MESSAGE)


def test_login_bad_credentials_sets_error_once():
    store, session, storage, notifier, navigator = make_store(
        [make_response(401, {"detail": "No active account found with the given credentials"})]
    )

    with pytest.raises(ApiError):
        store.login(LoginCredentials("ana", "mala"))

    assert session.request.call_count == 1
    assert store.state.status is SessionStatus.ERROR
    assert store.state.error == "No active account found with the given credentials"
    assert storage.get(ACCESS_TOKEN_KEY) is None
    notifier.error.assert_called_once()
    notifier.success.assert_not_called()
    navigator.redirect_to_login.assert_not_called()


def test_login_failing_at_me_leaves_store_unauthenticated():
    store, _, storage, notifier, _ = make_store(
        [make_response(200, {"access": "A1", "refresh": "R1"}), make_response(500, {"detail": "Server error"})]
    )

    with pytest.raises(ApiError):
        store.login(LoginCredentials("ana", "secreta"))

    assert store.state.is_authenticated is False
    assert store.state.is_loading is False
    assert store.state.error == "Server error"
    # Tokens were issued and stay persisted
    assert storage.get(ACCESS_TOKEN_KEY) == "A1"
    notifier.error.assert_called_once_with("Server error")


def test_get_current_user_401_clears_tokens_and_redirects():
    store, _, storage, _, navigator = make_store(
        [make_response(401, {"detail": "Unauthorized"})],
        tokens={ACCESS_TOKEN_KEY: "A1"},
    )

    with pytest.raises(ApiError):
        store.get_current_user()

    assert storage.get(ACCESS_TOKEN_KEY) is None
    assert store.state.is_authenticated is False
    navigator.redirect_to_login.assert_called_once()


def test_get_current_user_server_error_keeps_tokens():
    store, _, storage, _, navigator = make_store(
        [make_response(503, {"detail": "Unavailable"})],
        tokens={ACCESS_TOKEN_KEY: "A1", REFRESH_TOKEN_KEY: "R1"},
    )

    with pytest.raises(ApiError):
        store.get_current_user()

    assert storage.get(ACCESS_TOKEN_KEY) == "A1"
    assert store.state.error == "Unavailable"
    navigator.redirect_to_login.assert_not_called()


def test_logout_clears_tokens_and_resets_state():
    store, session, storage, notifier, _ = make_store(
        [make_response(200, ANA)], tokens={ACCESS_TOKEN_KEY: "A1", REFRESH_TOKEN_KEY: "R1"}
    )
    store.get_current_user()

    store.logout()

    assert storage.get(ACCESS_TOKEN_KEY) is None
    assert storage.get(REFRESH_TOKEN_KEY) is None
    assert store.state.status is SessionStatus.LOGGED_OUT
    assert session.request.call_count == 1
    notifier.success.assert_called_once_with(LOGOUT_SUCCESS_MESSAGE)


def test_subscribers_see_each_transition_until_unsubscribed():
    store, _, _, _, _ = make_store([make_response(200, ANA)], tokens={ACCESS_TOKEN_KEY: "A1"})
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.get_current_user()

    assert [s.is_loading for s in seen] == [True, False]
    assert seen[-1].is_authenticated is True

    unsubscribe()
    store.logout()
    assert len(seen) == 2


@patch("use_cases.session_store.auth.fetch_current_user")
@patch("use_cases.session_store.auth.obtain_token_pair")
def test_login_invalid_token_response_is_reported(mock_obtain, mock_fetch):
    store, _, _, notifier, _ = make_store()
    mock_obtain.side_effect = ApiError("Respuesta de autenticación inválida")

    with pytest.raises(ApiError):
        store.login(LoginCredentials("ana", "secreta"))

    mock_fetch.assert_not_called()
    notifier.error.assert_called_once_with("Respuesta de autenticación inválida")
    assert store.state.error == "Respuesta de autenticación inválida"
