"""Display formatting in the es-CO locale used across the app."""

from datetime import datetime
from typing import Union

NBSP = "\u00a0"

MONTHS_SHORT_ES = ["ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"]


def format_currency(amount: Union[int, float]) -> str:
    """COP amount as "$ 1.234,56" (non-breaking space after the sign)."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    # 1,234.56 -> 1.234,56
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}${NBSP}{grouped}"


def format_date(value: str) -> str:
    """ISO timestamp as "15 de ene de 2023". Unparseable input is returned as is."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.day} de {MONTHS_SHORT_ES[parsed.month - 1]} de {parsed.year}"
