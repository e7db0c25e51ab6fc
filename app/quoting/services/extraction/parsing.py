"""
Numeric helpers for quoted amounts.
"""

from decimal import Decimal

from price_parser import Price


def parse_amount(raw: str) -> float | None:
    """
    Parse a captured amount such as "150,000.00" into a float.

    Commas are thousands separators and "." is the decimal point, with or
    without a currency symbol. Returns None when price-parser cannot read
    a number (e.g. a lone ",").
    """
    if not raw or not raw.strip():
        return None
    price = Price.fromstring(raw.strip(), decimal_separator=".")
    return price.amount_float


def format_price(amount: float, symbol: str = "₡") -> str:
    """
    Render an amount with thousands grouping.

    Whole amounts drop the decimals (150000.0 -> "₡150,000"); others keep
    at least two and every further significant digit, so the text never
    rounds away part of the price (12345.678 -> "₡12,345.678").
    """
    if float(amount).is_integer():
        return f"{symbol}{amount:,.0f}"
    exponent = Decimal(repr(float(amount))).normalize().as_tuple().exponent
    places = max(2, -exponent)
    return f"{symbol}{amount:,.{places}f}"
