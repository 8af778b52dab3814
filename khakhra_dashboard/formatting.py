"""Display formatting for money, counts, dates and percentages (en-IN)."""

from khakhra_dashboard.models import parse_timestamp

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€"}
EMPTY_DATE = "—"


def group_indian(digits: str) -> str:
    """'1234567' -> '12,34,567' (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(value, currency="INR"):
    """Format a number as ₹1,23,456.78."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    whole, frac = f"{abs(float(value)):.2f}".split(".")
    text = f"{symbol}{group_indian(whole)}.{frac}"
    return f"-{text}" if float(value) < 0 and text != f"{symbol}0.00" else text


def format_number(value):
    """Whole number with Indian digit grouping."""
    rounded = int(round(float(value)))
    text = group_indian(str(abs(rounded)))
    return f"-{text}" if rounded < 0 else text


def format_date(value):
    if not value:
        return EMPTY_DATE
    return parse_timestamp(value).strftime("%d %b %Y")


def format_percentage(value, decimals=1):
    return f"{float(value):.{decimals}f}%"
