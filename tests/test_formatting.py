import pytest

from billing.utils.formatting import format_currency, group_indian


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0.00"),
        (123, "₹123.00"),
        (1234, "₹1,234.00"),
        (123456, "₹1,23,456.00"),
        (1234567.5, "₹12,34,567.50"),
        (100000000, "₹10,00,00,000.00"),
        (0.005, "₹0.01"),
        (-1234.5, "-₹1,234.50"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_without_symbol():
    assert format_currency(123456, symbol=False) == "1,23,456.00"


def test_non_numeric_formats_as_zero():
    assert format_currency("n/a") == "₹0.00"
    assert format_currency(float("nan")) == "₹0.00"


def test_group_indian():
    assert group_indian("1234567") == "12,34,567"
    assert group_indian("999") == "999"


def test_amounts_beyond_default_decimal_precision():
    assert format_currency(1e30) == "₹10," + "00," * 13 + "000.00"
    assert format_currency(-1e26, symbol=False).startswith("-10,00,")
