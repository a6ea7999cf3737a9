import logging

import pandas as pd
import plotly.express as px
import streamlit as st

import ui
from infrastructure.api.api_client import ApiError
from services import analytics_service
from utils import session_manager
from utils.formatting import format_currency

logger = logging.getLogger(__name__)


def render_dashboard():
    st.title("📊 Dashboard")
    st.caption("Resumen general del inventario")

    placeholder = st.empty()
    with placeholder.container():
        ui.render_skeleton_kpis(num_cols=4)

    try:
        data = analytics_service.build_dashboard(session_manager.get_api_client())
    except ApiError as exc:
        logger.error("Error loading dashboard data: %s", exc.message)
        placeholder.empty()
        st.warning("No se pudieron cargar los datos del dashboard.")
        return

    placeholder.empty()
    stats = data.stats

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("📦 Total Productos", stats.total_products)
    c2.metric("🗂️ Categorías", stats.total_categories)
    c3.metric("⚠️ Stock Bajo", stats.low_stock_products)
    c4.metric("💰 Valor Total", format_currency(stats.total_value))

    shares = pd.DataFrame([{"Categoría": s.name, "Productos": s.products} for s in data.category_shares])
    col_bar, col_pie = st.columns(2)
    with col_bar:
        st.write("### Productos por Categoría")
        if shares.empty:
            st.info("No hay categorías registradas")
        else:
            fig = px.bar(shares, x="Categoría", y="Productos")
            st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)
    with col_pie:
        st.write("### Distribución por Categoría")
        if shares.empty or shares["Productos"].sum() == 0:
            st.info("No hay productos registrados")
        else:
            fig = px.pie(shares, names="Categoría", values="Productos")
            fig.update_traces(textinfo="label+percent")
            st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)

    st.write("### Productos Recientes")
    if not data.recent_products:
        st.info("No hay productos registrados")
    for product in data.recent_products:
        c_name, c_price, c_stock = st.columns([4, 2, 2])
        c_name.markdown(f"**{product.name}**  \n{product.category_name}")
        c_price.write(format_currency(product.price))
        if product.is_low_stock:
            c_stock.markdown(f'<span class="inv-low-stock">Stock: {product.stock}</span>', unsafe_allow_html=True)
        else:
            c_stock.write(f"Stock: {product.stock}")

    st.write("### Acciones Rápidas")
    q1, q2, q3 = st.columns(3)
    if q1.button("➕ Nuevo Producto", use_container_width=True):
        st.session_state.product_edit_id = None
        st.session_state.product_form_open = True
        _go_to("products")
    if q2.button("🗂️ Nueva Categoría", use_container_width=True):
        st.session_state.category_edit_id = None
        st.session_state.category_form_open = True
        _go_to("categories")
    if q3.button("📄 Ver Reportes", use_container_width=True):
        _go_to("reports")


def _go_to(page_key):
    from views import pages
    st.switch_page(pages.get_page(page_key))
