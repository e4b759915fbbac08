"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY_RE = re.compile(r"^(?:rs\.?|inr|₹|\$)\s*|\s*(?:rs\.?|inr|₹)$", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "1250", "1,250.50", "₹1,250", "Rs. 1250" and "INR 1250". Indian
    digit grouping ("1,20,200") is accepted since commas are simply dropped.

    Raises:
        ValueError: If the string is empty or not a number
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_RE.sub("", amount_str.strip()).replace(",", "").strip()
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
