from decimal import Decimal

from vitrina.services.currency import format_price, format_price_plain, round_price


def test_format_price_rounds_before_grouping():
    assert format_price(19999.6) == "₲ 20.000"


def test_format_price_groups_thousands_with_dots():
    assert format_price(Decimal("2000000")) == "₲ 2.000.000"
    assert format_price(950) == "₲ 950"
    assert format_price(0) == "₲ 0"


def test_round_half_up():
    assert round_price("2.5") == 3
    assert round_price(Decimal("1499.49")) == 1499


def test_plain_price_has_no_symbol():
    assert format_price_plain(Decimal("150000.00")) == "150.000"
