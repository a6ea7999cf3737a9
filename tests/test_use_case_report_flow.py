from unittest.mock import MagicMock

from use_cases import report_flow
from use_cases.domain_models import Category, Product

TOOLS = Category(id=1, name="Herramientas")

HAMMER = Product(
    id=1, name="Martillo", sku="HER-001", category=TOOLS, price=25000.0, stock=2, min_stock=5,
    created_at="2023-01-15T10:00:00Z",
)
SAW = Product(
    id=2, name="Sierra", sku="HER-002", category=None, price=60000.0, stock=10, min_stock=2, is_active=False,
)


def test_report_context_totals():
    context = report_flow.ReportContext(low_stock_products=[HAMMER], all_products=[HAMMER, SAW])

    assert context.total_products == 2
    assert context.low_stock_count == 1
    assert context.total_value == 25000.0 * 2 + 60000.0 * 10


def test_empty_context():
    context = report_flow.ReportContext()
    assert context.total_products == 0
    assert context.total_value == 0.0


def test_low_stock_rows_columns():
    rows = report_flow.low_stock_rows([HAMMER])

    assert rows == [
        {
            "Nombre": "Martillo",
            "SKU": "HER-001",
            "Categoría": "Herramientas",
            "Stock Actual": 2,
            "Stock Mínimo": 5,
            "Precio": 25000.0,
            "Estado": "Activo",
        }
    ]


def test_inventory_rows_include_value_and_date():
    rows = report_flow.inventory_rows([HAMMER, SAW])

    assert rows[0]["Valor Total"] == 50000.0
    assert rows[0]["Fecha Creación"] == "15 de ene de 2023"
    assert rows[1]["Categoría"] == ""
    assert rows[1]["Estado"] == "Inactivo"
    assert rows[1]["Fecha Creación"] == ""


def test_build_report_context_fetches_both_lists():
    client = MagicMock()
    raw = {"id": 1, "name": "Martillo", "sku": "HER-001", "price": "25000.00", "stock": 2, "min_stock": 5}
    client.get.side_effect = [
        [raw],
        {"count": 1, "next": None, "results": [raw]},
    ]

    context = report_flow.build_report_context(client)

    assert client.get.call_args_list[0].args[0] == "/products/low-stock/"
    assert client.get.call_args_list[1].args[0] == "/products/"
    assert context.low_stock_count == 1
    assert context.total_products == 1
