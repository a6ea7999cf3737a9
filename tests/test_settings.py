from unittest.mock import patch

import settings


@patch("settings.st")
def test_load_settings_defaults(mock_st, monkeypatch):
    mock_st.secrets.get.return_value = None
    for key in ("INVENTORY_API_URL", "INVENTORY_LOGIN_PATH", "INVENTORY_REQUEST_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)

    loaded = settings.load_settings()

    assert loaded.api_base_url == "http://127.0.0.1:8000/api"
    assert loaded.login_path == "/login"
    assert loaded.request_timeout == 15.0


@patch("settings.st")
def test_load_settings_reads_environment_fallback(mock_st, monkeypatch):
    mock_st.secrets.get.return_value = None
    monkeypatch.setenv("INVENTORY_API_URL", "https://inventario.example.com/api/")
    monkeypatch.setenv("INVENTORY_REQUEST_TIMEOUT", "30")

    loaded = settings.load_settings()

    assert loaded.api_base_url == "https://inventario.example.com/api"
    assert loaded.request_timeout == 30.0


@patch("settings.st")
def test_secrets_take_precedence_over_environment(mock_st, monkeypatch):
    mock_st.secrets.get.side_effect = lambda key: {"INVENTORY_LOGIN_PATH": "/ingresar"}.get(key)
    monkeypatch.setenv("INVENTORY_LOGIN_PATH", "/login-env")

    assert settings.load_settings().login_path == "/ingresar"


@patch("settings.st")
def test_missing_secrets_file_falls_back_to_environment(mock_st, monkeypatch):
    mock_st.secrets.get.side_effect = FileNotFoundError
    monkeypatch.setenv("INVENTORY_API_URL", "http://env/api")

    assert settings.get_secret("INVENTORY_API_URL") == "http://env/api"


@patch("settings.st")
def test_bad_timeout_uses_default(mock_st, monkeypatch):
    mock_st.secrets.get.return_value = None
    monkeypatch.setenv("INVENTORY_REQUEST_TIMEOUT", "pronto")

    assert settings.load_settings().request_timeout == settings.DEFAULT_REQUEST_TIMEOUT
