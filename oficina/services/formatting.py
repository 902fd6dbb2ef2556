# -*- coding: utf-8 -*-
"""
pt-BR display helpers
"""


def format_brl(value: float) -> str:
    """Format as Brazilian currency: R$ 1.234,56"""
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_quantity(quantity: float) -> str:
    """Drop the decimal part of whole numbers: 750.0 -> 750"""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"
