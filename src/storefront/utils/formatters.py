"""Display formatting for prices and counts."""


def format_currency(amount_in_cents: int) -> str:
    """Format an amount in cents as US dollars, e.g. ``500 -> "$5.00"``."""
    sign = "-" if amount_in_cents < 0 else ""
    return f"{sign}${abs(amount_in_cents) / 100:,.2f}"


def format_number(value: int) -> str:
    """Format an integer with thousands separators."""
    return f"{value:,}"
