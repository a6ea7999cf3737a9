import pandas as pd
import streamlit as st

import ui
from infrastructure.api.api_client import ApiError
from services import category_service
from use_cases.domain_models import CategoryFormData
from use_cases.form_validation import validate_category
from utils import session_manager
from utils.formatting import format_date


def _open_form(category_id=None):
    st.session_state.category_form_open = True
    st.session_state.category_edit_id = category_id
    st.rerun()


def _close_form():
    st.session_state.category_form_open = False
    st.session_state.category_edit_id = None
    st.rerun()


def render_categories():
    if st.session_state.category_form_open:
        render_category_form(st.session_state.category_edit_id)
        return

    client = session_manager.get_api_client()
    notifier = session_manager.get_notifier()

    c_title, c_new = st.columns([5, 1])
    c_title.title("🗂️ Categorías")
    if c_new.button("➕ Nueva", type="primary", use_container_width=True):
        _open_form()

    search = st.text_input("Buscar", placeholder="Nombre de la categoría")
    try:
        categories = category_service.fetch_all_categories(client, search=search.strip() or None)
    except ApiError:
        st.warning("No se pudieron cargar las categorías.")
        return

    df = pd.DataFrame([
        {
            "ID": c.id,
            "Nombre": c.name,
            "Descripción": c.description,
            "Estado": "Activa" if c.is_active else "Inactiva",
            "Creada": format_date(c.created_at),
        }
        for c in categories
    ])
    ui.render_aggrid(df, height=360)

    if not categories:
        return

    st.divider()
    labels = {c.name: c for c in categories}
    selected = labels[st.selectbox("Categoría seleccionada", list(labels.keys()))]

    a1, a2 = st.columns(2)
    if a1.button("✏️ Editar", use_container_width=True):
        _open_form(selected.id)

    confirm = a2.checkbox(f"Confirmar eliminación de «{selected.name}»", key=f"confirm_delete_category_{selected.id}")
    if a2.button("🗑️ Eliminar", disabled=not confirm, use_container_width=True):
        try:
            category_service.delete_category(client, selected.id)
        except ApiError:
            return
        notifier.success("Categoría eliminada correctamente")
        st.rerun()


def render_category_form(category_id=None):
    client = session_manager.get_api_client()
    notifier = session_manager.get_notifier()
    is_edit = category_id is not None

    st.title("✏️ Editar Categoría" if is_edit else "➕ Nueva Categoría")
    if st.button("← Volver"):
        _close_form()

    category = None
    if is_edit:
        try:
            category = category_service.get_category(client, category_id)
        except ApiError:
            _close_form()
            return

    with st.form("category_form"):
        name = st.text_input("Nombre *", value=category.name if category else "")
        description = st.text_area("Descripción", value=category.description if category else "")
        is_active = st.checkbox("Categoría activa", value=category.is_active if category else True)
        submitted = st.form_submit_button("Guardar", type="primary")

    if not submitted:
        return

    errors = validate_category(name)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    form = CategoryFormData(name=name.strip(), description=description, is_active=is_active)
    try:
        if is_edit:
            category_service.update_category(client, category_id, form.to_payload())
            notifier.success("Categoría actualizada correctamente")
        else:
            category_service.create_category(client, form)
            notifier.success("Categoría creada correctamente")
    except ApiError:
        return
    _close_form()
