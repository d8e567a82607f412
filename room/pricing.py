"""
Nightly prices are stored as display strings with thousands separators
("11,800"). These helpers convert between that form and whole amounts.
"""
import re

SEPARATORS = re.compile(r"[,\s_]")


def parse_price(value) -> int:
    """Return the whole amount of a display price such as ``"11,800"``."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    if isinstance(value, int):
        amount = value
    else:
        digits = SEPARATORS.sub("", str(value))
        if not digits.isdigit():
            raise ValueError(f"Invalid price: {value!r}")
        amount = int(digits)

    if amount < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return amount


def format_price(amount: int) -> str:
    """Group digits in threes: ``11800 -> "11,800"``."""
    return f"{parse_price(amount):,}"
