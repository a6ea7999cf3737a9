"""Page registry for st.navigation / st.switch_page."""

import streamlit as st

from views import categories_view, dashboard_view, login_view, products_view, reports_view

PAGE_SPECS = {
    "login": (login_view.render_auth_screen, "Iniciar sesión", "🔐", "login"),
    "dashboard": (dashboard_view.render_dashboard, "Dashboard", "📊", "dashboard"),
    "products": (products_view.render_products, "Productos", "📦", "products"),
    "categories": (categories_view.render_categories, "Categorías", "🗂️", "categories"),
    "reports": (reports_view.render_reports, "Reportes", "📄", "reports"),
}

GUARDED_PAGES = ("dashboard", "products", "categories", "reports")


def get_page(key: str) -> st.Page:
    render, title, icon, url_path = PAGE_SPECS[key]
    return st.Page(render, title=title, icon=icon, url_path=url_path, default=(key == "dashboard"))


def guarded_pages():
    return [get_page(key) for key in GUARDED_PAGES]
