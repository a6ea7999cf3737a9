"""Persisted credential pair (access + refresh token) storage backends."""

import json
import logging
from typing import Dict, MutableMapping, Optional
from urllib.parse import unquote

import streamlit as st
import streamlit.components.v1 as components

log = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
TOKEN_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)

COOKIE_MAX_AGE = 2592000  # 30 days


class TokenStorage:
    """Key/value store for the credential pair. Absent keys return None."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear_tokens(self) -> None:
        for key in TOKEN_KEYS:
            self.remove(key)


class InMemoryTokenStorage(TokenStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class BrowserTokenStorage(TokenStorage):
    """
    Tokens persisted in the browser (cookie + localStorage mirror).

    Reads go through a per-tab cache kept in ``st.session_state``; a key that
    was never loaded is seeded from the request cookies, so a reloaded tab
    sees the tokens written before the reload. Writes update the cache and
    inject a script that updates the browser side.
    """

    CACHE_KEY = "_token_cache"

    def __init__(self, state: Optional[MutableMapping] = None):
        self._state = state if state is not None else st.session_state

    def _cache(self) -> Dict[str, Optional[str]]:
        if self.CACHE_KEY not in self._state:
            self._state[self.CACHE_KEY] = {}
        return self._state[self.CACHE_KEY]

    def _read_cookie(self, key: str) -> Optional[str]:
        try:
            raw = st.context.cookies.get(key)
        except Exception:
            # No browser context (bare script or tests)
            return None
        return unquote(raw) if raw else None

    def get(self, key: str) -> Optional[str]:
        cache = self._cache()
        if key not in cache:
            cache[key] = self._read_cookie(key)
        return cache[key]

    def set(self, key: str, value: str) -> None:
        self._cache()[key] = value
        self._run_script(
            f"""
            var value = {json.dumps(value)};
            var cookieStr = "{key}=" + encodeURIComponent(value) + "; path=/; max-age={COOKIE_MAX_AGE}; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
            localStorage.setItem("{key}", value);
            """
        )

    def remove(self, key: str) -> None:
        self._cache()[key] = None
        self._run_script(
            f"""
            var cookieStr = "{key}=; path=/; max-age=0; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
            localStorage.removeItem("{key}");
            """
        )

    def _run_script(self, body: str) -> None:
        components.html(f"<script>{body}</script>", height=0)
