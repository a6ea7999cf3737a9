"""Runtime configuration read from Streamlit secrets with environment fallback."""

import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

DEFAULT_API_URL = "http://127.0.0.1:8000/api"
DEFAULT_LOGIN_PATH = "/login"
DEFAULT_REQUEST_TIMEOUT = 15.0


def get_secret(key: str) -> Optional[str]:
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    if value is None:
        value = os.getenv(key)
    return value


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_URL
    login_path: str = DEFAULT_LOGIN_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_settings() -> Settings:
    timeout_raw = get_secret("INVENTORY_REQUEST_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        timeout = DEFAULT_REQUEST_TIMEOUT

    return Settings(
        api_base_url=(get_secret("INVENTORY_API_URL") or DEFAULT_API_URL).rstrip("/"),
        login_path=get_secret("INVENTORY_LOGIN_PATH") or DEFAULT_LOGIN_PATH,
        request_timeout=timeout,
    )
