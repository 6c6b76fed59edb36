"""Money formatting for display."""

from typing import Optional, Union

from wallet.config import settings


def group_indian(digits: str) -> str:
    """Group an integer digit string the en-IN way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_money(amount: Union[int, float], symbol: Optional[str] = None) -> str:
    """
    Format an amount as currency with en-IN grouping.

    Fractions are shown only when present, rounded to two places:
    ``format_money(123456.5) == "₹1,23,456.5"``.
    """
    if symbol is None:
        symbol = settings.currency_symbol
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    if whole == "0" and not fraction:
        sign = ""
    text = group_indian(whole)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"
