from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CURRENCY_SYMBOL = "₲"

Number = Union[int, float, Decimal, str]


def round_price(price: Number) -> int:
    """Redondeo al entero más cercano (0.5 hacia arriba), sin decimales"""
    return int(Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def group_thousands(value: int) -> str:
    """Separador de miles con punto (convención es-PY)"""
    return f"{value:,}".replace(",", ".")


def format_price(price: Number) -> str:
    return f"{CURRENCY_SYMBOL} {group_thousands(round_price(price))}"


def format_price_plain(price: Number) -> str:
    """Precio sin símbolo, para exportaciones"""
    return group_thousands(round_price(price))
