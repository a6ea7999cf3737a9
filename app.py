import sentry_sdk
import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases import auth_flow, bootstrap
from utils import session_manager
from views import pages

# --- PAGE SETUP ---
st.set_page_config(page_title="Sistema de Inventario", page_icon="📦", layout="wide", initial_sidebar_state="expanded")
ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

notifier = session_manager.get_notifier()
# Toasts queued before the last st.rerun()
notifier.flush()

# --- ROUTE GUARD ---
store = session_manager.get_session_store()
auth_result = auth_flow.ensure_authenticated_session(store, session_manager.get_token_storage(), notifier)

if auth_result.reason == "loading":
    ui.show_loading_placeholder("Verificando sesión...")
    st.stop()

if auth_result.status == "STOP":
    st.navigation([pages.get_page("login")], position="hidden").run()
    notifier.flush()
    st.stop()

# === MAIN LAYOUT ===
user = store.state.user
sentry_sdk.set_user({"id": user.id, "username": user.username})

with st.sidebar:
    st.markdown(f"**👤 {user.full_name}**")
    if user.email:
        st.caption(user.email)
    if st.button("Cerrar sesión", key="logout_btn", type="secondary", use_container_width=True):
        session_manager.logout()
    st.divider()

st.navigation({"Inventario": pages.guarded_pages()}).run()
notifier.flush()
