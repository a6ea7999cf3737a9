from unittest.mock import patch

from infrastructure.storage.token_storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    BrowserTokenStorage,
    InMemoryTokenStorage,
)


def test_in_memory_storage_roundtrip_and_clear():
    storage = InMemoryTokenStorage({ACCESS_TOKEN_KEY: "A1", "theme": "dark"})
    storage.set(REFRESH_TOKEN_KEY, "R1")

    assert storage.get(ACCESS_TOKEN_KEY) == "A1"
    assert storage.get(REFRESH_TOKEN_KEY) == "R1"

    storage.clear_tokens()

    assert storage.get(ACCESS_TOKEN_KEY) is None
    assert storage.get(REFRESH_TOKEN_KEY) is None
    assert storage.get("theme") == "dark"


def test_in_memory_storage_remove_missing_key_is_noop():
    storage = InMemoryTokenStorage()
    storage.remove(ACCESS_TOKEN_KEY)
    assert storage.get(ACCESS_TOKEN_KEY) is None


@patch("infrastructure.storage.token_storage.components.html")
def test_browser_storage_set_writes_cookie_and_local_storage(mock_html):
    state = {}
    storage = BrowserTokenStorage(state)

    storage.set(ACCESS_TOKEN_KEY, "A1")

    assert storage.get(ACCESS_TOKEN_KEY) == "A1"
    script = mock_html.call_args.args[0]
    assert 'localStorage.setItem("access_token", value)' in script
    assert "document.cookie" in script
    assert '"A1"' in script


@patch("infrastructure.storage.token_storage.components.html")
def test_browser_storage_remove_expires_cookie(mock_html):
    state = {}
    storage = BrowserTokenStorage(state)
    storage.set(REFRESH_TOKEN_KEY, "R1")

    storage.remove(REFRESH_TOKEN_KEY)

    assert storage.get(REFRESH_TOKEN_KEY) is None
    script = mock_html.call_args.args[0]
    assert "max-age=0" in script
    assert 'localStorage.removeItem("refresh_token")' in script


@patch("infrastructure.storage.token_storage.BrowserTokenStorage._read_cookie", return_value="A%3D1")
def test_browser_storage_seeds_cache_from_cookie_once(mock_read):
    state = {}
    storage = BrowserTokenStorage(state)

    assert storage.get(ACCESS_TOKEN_KEY) == "A%3D1"
    assert storage.get(ACCESS_TOKEN_KEY) == "A%3D1"
    mock_read.assert_called_once_with(ACCESS_TOKEN_KEY)


@patch("infrastructure.storage.token_storage.components.html")
@patch("infrastructure.storage.token_storage.BrowserTokenStorage._read_cookie", return_value="stale")
def test_browser_storage_removed_key_is_not_reseeded(mock_read, _mock_html):
    storage = BrowserTokenStorage({})
    storage.remove(ACCESS_TOKEN_KEY)

    assert storage.get(ACCESS_TOKEN_KEY) is None
    mock_read.assert_not_called()


@patch("infrastructure.storage.token_storage.st")
def test_browser_storage_unquotes_cookie_value(mock_st):
    mock_st.context.cookies.get.return_value = "abc%3D%3D"
    storage = BrowserTokenStorage({})

    assert storage.get(REFRESH_TOKEN_KEY) == "abc=="
    mock_st.context.cookies.get.assert_called_once_with(REFRESH_TOKEN_KEY)
