"""Report context preparation for the reports page and its CSV exports."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from infrastructure.api.api_client import ApiClient
from services import analytics_service, product_service
from use_cases.domain_models import Product
from utils.formatting import format_date

LOW_STOCK_FILE_PREFIX = "productos-stock-bajo"
INVENTORY_FILE_PREFIX = "inventario-completo"


@dataclass(frozen=True)
class ReportContext:
    """Prepared data for report rendering."""

    low_stock_products: List[Product] = field(default_factory=list)
    all_products: List[Product] = field(default_factory=list)

    @property
    def total_products(self) -> int:
        return len(self.all_products)

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock_products)

    @property
    def total_value(self) -> float:
        return analytics_service.inventory_value(self.all_products)


def _status_label(product: Product) -> str:
    return "Activo" if product.is_active else "Inactivo"


def low_stock_rows(products: List[Product]) -> List[Dict[str, Any]]:
    return [
        {
            "Nombre": p.name,
            "SKU": p.sku,
            "Categoría": p.category_name,
            "Stock Actual": p.stock,
            "Stock Mínimo": p.min_stock,
            "Precio": p.price,
            "Estado": _status_label(p),
        }
        for p in products
    ]


def inventory_rows(products: List[Product]) -> List[Dict[str, Any]]:
    return [
        {
            "Nombre": p.name,
            "SKU": p.sku,
            "Categoría": p.category_name,
            "Stock": p.stock,
            "Stock Mínimo": p.min_stock,
            "Precio": p.price,
            "Valor Total": p.total_value,
            "Estado": _status_label(p),
            "Fecha Creación": format_date(p.created_at),
        }
        for p in products
    ]


def build_report_context(client: ApiClient) -> ReportContext:
    return ReportContext(
        low_stock_products=product_service.list_low_stock_products(client),
        all_products=product_service.fetch_all_products(client),
    )
