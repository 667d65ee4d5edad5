"""Display helpers for amounts and dates (Brazilian Portuguese conventions)."""

from datetime import date
from decimal import Decimal
from typing import Union

CURRENCY_SYMBOL = "R$"

# swap the en-US separators produced by format() for pt-BR ones
_PT_BR_SEPARATORS = str.maketrans({",": ".", ".": ","})


def format_currency(value: Union[Decimal, int, float]) -> str:
    """Format a value as ``R$ 1.234,56``; negatives get a leading minus."""

    text = f"{abs(value):,.2f}".translate(_PT_BR_SEPARATORS)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {text}"


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")
