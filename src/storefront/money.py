"""Money helpers shared by checkout and notifications."""

_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def to_minor_units(amount: float) -> int:
    """Convert a decimal amount to the gateway's integer minor units (paise, cents)."""
    return int(round(amount * 100))


def _group_indian(digits: str) -> str:
    # Last three digits form one group, the rest are grouped in pairs: 12,34,567
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


def format_amount(amount: float, currency: str) -> str:
    """Format an amount for display, e.g. ``₹1,23,456.50`` or ``$1,234.00``."""
    currency = currency.upper()
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    grouped = _group_indian(whole) if currency == "INR" else f"{int(whole):,}"
    symbol = _SYMBOLS.get(currency)
    if symbol is None:
        return f"{sign}{grouped}.{fraction} {currency}"
    return f"{sign}{symbol}{grouped}.{fraction}"
