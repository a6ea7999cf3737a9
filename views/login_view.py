import streamlit as st

from infrastructure.api.api_client import ApiError
from use_cases.form_validation import validate_login
from use_cases.session_models import LoginCredentials
from utils import session_manager


def render_auth_screen():
    st.title("🔐 Sistema de Inventario")
    st.caption("Inicia sesión para continuar")

    with st.form("login_form", clear_on_submit=False):
        username = st.text_input("Usuario")
        password = st.text_input("Contraseña", type="password")
        submitted = st.form_submit_button("Iniciar sesión", type="primary")

    if not submitted:
        return

    errors = validate_login(username, password)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    store = session_manager.get_session_store()
    try:
        with st.spinner("Verificando credenciales..."):
            store.login(LoginCredentials(username=username.strip(), password=password))
    except ApiError:
        # Already notified by the gateway or the store.
        return
    session_manager.wait_for_browser_writes()
    st.rerun()
