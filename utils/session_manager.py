import time

import streamlit as st

from infrastructure.api.api_client import ApiClient
from infrastructure.navigation import BrowserNavigator
from infrastructure.notifications import Notifier, StreamlitNotifier
from infrastructure.storage.token_storage import BrowserTokenStorage, TokenStorage
from settings import Settings, load_settings
from use_cases.session_store import SessionStore

"""
SESSION STATE CONTRACT

Streamlit keeps one st.session_state per browser tab; everything the client
needs for its lifetime lives there.

Keys of st.session_state:

app_settings: Settings
    resolved configuration
    default: load_settings()
    owner: session_manager

token_storage: TokenStorage
    persisted credential pair (cookie + localStorage)
    default: BrowserTokenStorage()
    owner: session_manager

notifier: Notifier
    toast dispatcher
    default: StreamlitNotifier()
    owner: session_manager

api_client: ApiClient
    HTTP gateway bound to token_storage
    owner: session_manager

session_store: SessionStore
    the tab's single auth state machine
    owner: session_manager

product_form_open: bool
    products page shows the form instead of the list
    default: False
    owner: views.products_view

product_edit_id: int | None
    product opened in the product form, None for a new product
    default: None
    owner: views.products_view

category_form_open: bool
    categories page shows the form instead of the list
    default: False
    owner: views.categories_view

category_edit_id: int | None
    category opened in the category form, None for a new category
    default: None
    owner: views.categories_view
"""


def init_session_state(settings: Settings = None):
    ss = st.session_state
    if "app_settings" not in ss:
        ss.app_settings = settings or load_settings()
    if "token_storage" not in ss:
        ss.token_storage = BrowserTokenStorage()
    if "notifier" not in ss:
        ss.notifier = StreamlitNotifier()
    if "api_client" not in ss:
        ss.api_client = ApiClient(
            ss.app_settings.api_base_url,
            storage=ss.token_storage,
            notifier=ss.notifier,
            navigator=BrowserNavigator(ss.app_settings.login_path),
            timeout=ss.app_settings.request_timeout,
        )
    if "session_store" not in ss:
        ss.session_store = SessionStore(
            ss.api_client,
            storage=ss.token_storage,
            notifier=ss.notifier,
            navigator=ss.api_client.navigator,
        )
    if "product_form_open" not in ss:
        ss.product_form_open = False
    if "product_edit_id" not in ss:
        ss.product_edit_id = None
    if "category_form_open" not in ss:
        ss.category_form_open = False
    if "category_edit_id" not in ss:
        ss.category_edit_id = None


def get_session_store() -> SessionStore:
    return st.session_state.session_store


def get_api_client() -> ApiClient:
    return st.session_state.api_client


def get_token_storage() -> TokenStorage:
    return st.session_state.token_storage


def get_notifier() -> Notifier:
    return st.session_state.notifier


# Seconds the injected cookie/localStorage scripts get before st.rerun() discards their iframes
BROWSER_WRITE_DELAY = 1.0


def wait_for_browser_writes():
    time.sleep(BROWSER_WRITE_DELAY)


def logout():
    get_session_store().logout()
    st.session_state.product_form_open = False
    st.session_state.product_edit_id = None
    st.session_state.category_form_open = False
    st.session_state.category_edit_id = None
    wait_for_browser_writes()
    st.rerun()
