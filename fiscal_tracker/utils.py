"""Shared utility functions for the Fiscal Budget Tracker.

Contains the canonical implementations of common formatting functions
used across the codebase. All callsites should import from here
rather than maintaining local copies.
"""

import random
import string
import time

_ID_ALPHABET = string.digits + string.ascii_lowercase


def format_amount(amount: float) -> str:
    """Format a budget amount with thousand separators and no decimals.

    Produces output like "1,234,567" for positive amounts and "-1,234,567"
    for negative amounts. Currency symbols are left to the caller.

    Args:
        amount: Budget amount as a float or int.

    Returns:
        Formatted string with thousand separators.
    """
    return f"{amount:,.0f}"


def format_compact(amount: float) -> str:
    """Format an amount in compact notation for narrow timeline cells.

    Examples: 950 -> "950", 85000 -> "85K", 1500000 -> "1.5M".
    """
    value = abs(amount)
    sign = "-" if amount < 0 else ""
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if value >= threshold:
            scaled = value / threshold
            text = f"{scaled:.1f}".rstrip("0").rstrip(".") if scaled < 10 else f"{scaled:.0f}"
            return f"{sign}{text}{suffix}"
    return f"{sign}{value:.0f}"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ID_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_project_id() -> str:
    """Generate an opaque project id: base-36 epoch millis plus random suffix."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=11))
    return _to_base36(millis) + suffix
