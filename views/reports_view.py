import logging

import pandas as pd
import streamlit as st

import ui
from infrastructure.api.api_client import ApiError
from services import export_service
from use_cases import report_flow
from utils import session_manager
from utils.formatting import format_currency

logger = logging.getLogger(__name__)


def _notify_exported():
    session_manager.get_notifier().success("Reporte exportado correctamente")


def render_reports():
    st.title("📄 Reportes")
    st.caption("Estado del inventario y exportaciones")

    with st.spinner("Cargando reportes..."):
        try:
            context = report_flow.build_report_context(session_manager.get_api_client())
        except ApiError as exc:
            logger.error("Error loading report data: %s", exc.message)
            st.warning("No se pudieron cargar los reportes.")
            return

    c1, c2, c3 = st.columns(3)
    c1.metric("📦 Total Productos", context.total_products)
    c2.metric("⚠️ Stock Bajo", context.low_stock_count)
    c3.metric("💰 Valor del Inventario", format_currency(context.total_value))

    st.divider()
    st.write("### Productos con Stock Bajo")
    low_stock = report_flow.low_stock_rows(context.low_stock_products)
    if low_stock:
        ui.render_aggrid(pd.DataFrame(low_stock), height=320, currency_columns=("Precio",))
    else:
        st.success("Todos los productos tienen stock suficiente")

    st.write("### Exportar")
    e1, e2 = st.columns(2)
    e1.download_button(
        "⬇️ Stock Bajo (CSV)",
        data=export_service.records_to_csv(low_stock),
        file_name=export_service.dated_filename(report_flow.LOW_STOCK_FILE_PREFIX),
        mime="text/csv",
        disabled=not low_stock,
        on_click=_notify_exported,
        use_container_width=True,
    )
    inventory = report_flow.inventory_rows(context.all_products)
    e2.download_button(
        "⬇️ Inventario Completo (CSV)",
        data=export_service.records_to_csv(inventory),
        file_name=export_service.dated_filename(report_flow.INVENTORY_FILE_PREFIX),
        mime="text/csv",
        disabled=not inventory,
        on_click=_notify_exported,
        use_container_width=True,
    )
