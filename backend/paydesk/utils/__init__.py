from paydesk.utils.hashing import generate_token, safe_equals
from paydesk.utils.validators import validate_phone, validate_amount, parse_amount, clean_text

__all__ = [
    "generate_token", "safe_equals",
    "validate_phone", "validate_amount", "parse_amount", "clean_text",
]
