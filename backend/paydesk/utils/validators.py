"""
Validators — Rule-based checks for submitted payment fields.
"""
import math
import re


def validate_phone(phone: str | None) -> bool:
    """Validate Indian mobile number: exactly 10 ASCII digits, nothing else."""
    if not phone:
        return False
    return bool(re.fullmatch(r"[0-9]{10}", phone))


def parse_amount(amount) -> float | None:
    """Coerce a submitted amount to a finite float, or None if it is not numeric."""
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, str) and not amount.isascii():
        return None
    try:
        value = float(str(amount).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_amount(amount, minimum: float = 100) -> tuple[bool, str]:
    """Validate a payment amount against the collection minimum (₹100 by default)."""
    value = parse_amount(amount)
    if value is None:
        return False, "Amount must be a number"
    if value < minimum:
        return False, f"Minimum payment amount is ₹{minimum:g}"
    return True, "Valid"


def clean_text(value) -> str:
    """Strip surrounding whitespace. Integers (a phone sent as a JSON number) become
    their decimal text; None and other types become empty."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        return ""
    return value.strip()
