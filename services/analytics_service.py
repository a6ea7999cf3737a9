import pandas as pd
from typing import List

from infrastructure.api.api_client import ApiClient
from services import category_service, product_service
from use_cases.domain_models import Category, CategoryShare, DashboardData, DashboardStats, Page, Product

RECENT_PRODUCTS_LIMIT = 5

PRODUCT_FRAME_COLUMNS = ["id", "name", "sku", "category_id", "category", "price", "stock", "min_stock", "is_active"]


def products_frame(products: List[Product]) -> pd.DataFrame:
    """Flatten products into a DataFrame for aggregation and tables."""
    rows = [
        {
            "id": p.id,
            "name": p.name,
            "sku": p.sku,
            "category_id": p.category.id if p.category else None,
            "category": p.category_name,
            "price": p.price,
            "stock": p.stock,
            "min_stock": p.min_stock,
            "is_active": p.is_active,
        }
        for p in products
    ]
    return pd.DataFrame(rows, columns=PRODUCT_FRAME_COLUMNS)


def inventory_value(products: List[Product]) -> float:
    df = products_frame(products)
    if df.empty:
        return 0.0
    return float((df["price"] * df["stock"]).sum())


def count_low_stock(products: List[Product]) -> int:
    df = products_frame(products)
    if df.empty:
        return 0
    return int((df["stock"] <= df["min_stock"]).sum())


def calculate_dashboard_stats(products_page: Page[Product], categories_page: Page[Category]) -> DashboardStats:
    """
    Totals come from the page envelopes; low-stock count and inventory value
    are computed over the products actually loaded.
    """
    return DashboardStats(
        total_products=products_page.count,
        total_categories=categories_page.count,
        low_stock_products=count_low_stock(products_page.results),
        total_value=inventory_value(products_page.results),
    )


def category_distribution(products: List[Product], categories: List[Category]) -> List[CategoryShare]:
    df = products_frame(products)
    counts = df.groupby("category_id").size() if not df.empty else pd.Series(dtype=int)
    return [CategoryShare(name=c.name, products=int(counts.get(c.id, 0))) for c in categories]


def build_dashboard(client: ApiClient) -> DashboardData:
    products_page = product_service.list_products(client, page=1)
    categories_page = category_service.list_categories(client, page=1)

    return DashboardData(
        stats=calculate_dashboard_stats(products_page, categories_page),
        recent_products=products_page.results[:RECENT_PRODUCTS_LIMIT],
        category_shares=category_distribution(products_page.results, categories_page.results),
    )
