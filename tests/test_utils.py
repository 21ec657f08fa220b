from decimal import Decimal

from utils import format_money, price_str, safe_decimal, safe_int, species_emoji, to_decimal


def test_safe_int():
    assert safe_int(" 4 ") == 4
    assert safe_int("4.2", None) is None
    assert safe_int("x") == 0


def test_safe_decimal():
    assert safe_decimal("25.5") == Decimal("25.5")
    assert safe_decimal("abc") is None
    assert safe_decimal("inf") is None


def test_to_decimal_from_float():
    assert to_decimal(25.5) == Decimal("25.50")
    assert to_decimal(0.1 + 0.2) == Decimal("0.30")


def test_to_decimal_out_of_range_values():
    assert to_decimal(float("inf")) == Decimal("Infinity")
    assert to_decimal(1e27) == Decimal(str(1e27))
    assert to_decimal(None) == Decimal("0.00")


def test_money_formatting():
    assert format_money(Decimal("35.5")) == "35.50"
    assert format_money(1234.5) == "1,234.50"
    assert price_str(Decimal("10")) == "$10.00"


def test_species_emoji():
    assert species_emoji("Dog") == "\U0001F436"
    assert species_emoji("iguana") == "\U0001F43E"
