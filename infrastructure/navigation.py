import json
import logging

import streamlit.components.v1 as components

from infrastructure.storage.token_storage import TOKEN_KEYS

log = logging.getLogger(__name__)


class Navigator:
    def redirect_to_login(self) -> None:
        raise NotImplementedError


class BrowserNavigator(Navigator):
    """
    Full page navigation (not an in-app page switch), so the tab reloads clean.

    The stored credentials are expired in the same script, before the
    navigation: a separate clearing iframe may not have run when the page
    unloads, and the reloaded tab would read the stale cookies.
    """

    def __init__(self, login_path: str):
        self.login_path = login_path

    def redirect_to_login(self) -> None:
        log.info("Forcing navigation to %s", self.login_path)
        components.html(
            f"""
            <script>
              {json.dumps(list(TOKEN_KEYS))}.forEach(function (key) {{
                var cookieStr = key + "=; path=/; max-age=0; SameSite=Lax";
                document.cookie = cookieStr;
                try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
                localStorage.removeItem(key);
              }});
              window.parent.location.href = {json.dumps(self.login_path)};
            </script>
            """,
            height=0,
        )
