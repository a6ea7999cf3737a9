import logging

import streamlit as st

import ui
from infrastructure.api.api_client import ApiError
from services import analytics_service, category_service, product_service
from use_cases.domain_models import ImageUpload, ProductFormData
from use_cases.form_validation import validate_product
from utils import session_manager

logger = logging.getLogger(__name__)

STATUS_FILTERS = {"Todos": None, "Activos": True, "Inactivos": False}


def _open_form(product_id=None):
    st.session_state.product_form_open = True
    st.session_state.product_edit_id = product_id
    st.rerun()


def _close_form():
    st.session_state.product_form_open = False
    st.session_state.product_edit_id = None
    st.rerun()


def render_products():
    if st.session_state.product_form_open:
        render_product_form(st.session_state.product_edit_id)
        return

    client = session_manager.get_api_client()
    notifier = session_manager.get_notifier()

    c_title, c_new = st.columns([5, 1])
    c_title.title("📦 Productos")
    if c_new.button("➕ Nuevo", type="primary", use_container_width=True):
        _open_form()

    try:
        categories = category_service.fetch_all_categories(client)
    except ApiError:
        st.warning("No se pudieron cargar los datos.")
        return

    f1, f2, f3 = st.columns([3, 2, 2])
    search = f1.text_input("Buscar", placeholder="Nombre o SKU")
    category_names = {"Todas": None, **{c.name: c.id for c in categories}}
    category_label = f2.selectbox("Categoría", list(category_names.keys()))
    status_label = f3.selectbox("Estado", list(STATUS_FILTERS.keys()))

    try:
        products = product_service.fetch_all_products(
            client,
            search=search.strip() or None,
            category=category_names[category_label],
            is_active=STATUS_FILTERS[status_label],
        )
    except ApiError:
        return

    df = analytics_service.products_frame(products)
    if not df.empty:
        df["is_active"] = df["is_active"].map({True: "Activo", False: "Inactivo"})
        df = df.drop(columns=["category_id"]).rename(columns={
            "id": "ID",
            "name": "Nombre",
            "sku": "SKU",
            "category": "Categoría",
            "price": "Precio",
            "stock": "Stock",
            "min_stock": "Stock Mínimo",
            "is_active": "Estado",
        })
    ui.render_aggrid(df, height=420, pagination=True, currency_columns=("Precio",))

    if not products:
        return

    st.divider()
    labels = {f"{p.name} ({p.sku})": p for p in products}
    selected_label = st.selectbox("Producto seleccionado", list(labels.keys()))
    selected = labels[selected_label]

    a1, a2 = st.columns(2)
    if a1.button("✏️ Editar", use_container_width=True):
        _open_form(selected.id)

    confirm = a2.checkbox(f"Confirmar eliminación de «{selected.name}»", key=f"confirm_delete_product_{selected.id}")
    if a2.button("🗑️ Eliminar", disabled=not confirm, use_container_width=True):
        try:
            product_service.delete_product(client, selected.id)
        except ApiError:
            return
        notifier.success("Producto eliminado correctamente")
        st.rerun()


def render_product_form(product_id=None):
    client = session_manager.get_api_client()
    notifier = session_manager.get_notifier()
    is_edit = product_id is not None

    st.title("✏️ Editar Producto" if is_edit else "➕ Nuevo Producto")
    if st.button("← Volver"):
        _close_form()

    try:
        categories = category_service.fetch_all_categories(client, is_active=True)
        product = product_service.get_product(client, product_id) if is_edit else None
    except ApiError:
        _close_form()
        return

    category_ids = [c.id for c in categories]
    category_labels = {c.id: c.name for c in categories}
    current_category = product.category.id if product and product.category else None
    if current_category is not None and current_category not in category_ids:
        category_ids.append(current_category)
        category_labels[current_category] = product.category_name

    with st.form("product_form"):
        name = st.text_input("Nombre *", value=product.name if product else "")
        description = st.text_area("Descripción", value=product.description if product else "")
        c1, c2 = st.columns(2)
        sku = c1.text_input("SKU *", value=product.sku if product else "")
        category_id = c2.selectbox(
            "Categoría *",
            category_ids,
            index=category_ids.index(current_category) if current_category in category_ids else None,
            format_func=lambda cid: category_labels.get(cid, str(cid)),
            placeholder="Selecciona una categoría",
        )
        c3, c4, c5 = st.columns(3)
        price = c3.number_input("Precio *", value=float(product.price) if product else None, step=100.0)
        stock = c4.number_input("Stock *", value=product.stock if product else None, step=1)
        min_stock = c5.number_input("Stock Mínimo *", value=product.min_stock if product else None, step=1)
        is_active = st.checkbox("Producto activo", value=product.is_active if product else True)
        image_file = st.file_uploader("Imagen", type=["png", "jpg", "jpeg", "webp"])
        submitted = st.form_submit_button("Guardar", type="primary")

    if not submitted:
        return

    errors = validate_product(name, sku, category_id, price, stock, min_stock)
    if errors:
        for message in errors.values():
            st.error(message)
        return

    image = None
    if image_file is not None:
        image = ImageUpload(image_file.name, image_file.getvalue(), image_file.type or "application/octet-stream")

    form = ProductFormData(
        name=name.strip(),
        description=description,
        sku=sku.strip(),
        category_id=int(category_id),
        price=float(price),
        stock=int(stock),
        min_stock=int(min_stock),
        is_active=is_active,
        image=image,
    )
    try:
        if is_edit:
            product_service.update_product(client, product_id, form.fields(), image=image)
            notifier.success("Producto actualizado correctamente")
        else:
            product_service.create_product(client, form)
            notifier.success("Producto creado correctamente")
    except ApiError as exc:
        logger.info("Saving product failed: %s", exc.message)
        return
    _close_form()
