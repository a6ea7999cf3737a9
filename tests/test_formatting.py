import pytest

from utils.formatting import NBSP, format_currency, format_date


@pytest.mark.parametrize(
    "amount, expected",
    [
        (1234.56, f"${NBSP}1.234,56"),
        (0, f"${NBSP}0,00"),
        (1000000, f"${NBSP}1.000.000,00"),
        (-50.5, f"-${NBSP}50,50"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_date_iso_timestamp():
    assert format_date("2023-01-15T10:30:00Z") == "15 de ene de 2023"
    assert format_date("2024-09-02") == "2 de sept de 2024"


def test_format_date_passthrough():
    assert format_date("") == ""
    assert format_date("ayer") == "ayer"
