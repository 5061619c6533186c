"""Shared utilities used across the booking engine."""

import math
import re


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("06 12 34 56 78")
        '0612345678'
        >>> normalize_phone("+212 (6) 12-34-56-78")
        '+212612345678'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def sanitize_decimal(value: object) -> float:
    """Turn free-text numeric input into a non-negative float.

    Keeps digits and the first decimal point, drops leading zeros, and
    treats anything unparseable as 0.

    Examples:
        >>> sanitize_decimal("120 cm")
        120.0
        >>> sanitize_decimal("1.2.5")
        1.25
        >>> sanitize_decimal("-abc")
        0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value > 0 else 0.0

    cleaned = re.sub(r"[^\d.]", "", str(value))
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = parts[0] + "." + "".join(parts[1:])
    if len(cleaned) > 1 and cleaned.startswith("0") and cleaned[1] != ".":
        cleaned = cleaned.lstrip("0") or "0"
    if cleaned in ("", "."):
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def round_money(amount: float) -> float:
    """Round to cents on the binary value, halves toward +infinity.

    Matches the storefront's ``Math.round(x * 100) / 100``, so a stored
    price equals the one the visitor saw: 1.005 rounds to 1.0 because
    ``1.005 * 100`` is just below 100.5.
    """
    if not math.isfinite(amount):
        return 0.0
    return math.floor(amount * 100 + 0.5) / 100
