"""
Token Hashing Utilities — HMAC-SHA256 admin tokens and constant-time comparison.
"""
import hashlib
import hmac


def generate_token(subject: str, secret: str) -> str:
    """Sign ``subject`` with ``secret`` (HMAC-SHA256, hex digest)."""
    return hmac.new(secret.encode("utf-8"), subject.encode("utf-8"), hashlib.sha256).hexdigest()


def safe_equals(left: str | None, right: str | None) -> bool:
    """Constant-time string comparison; None never matches."""
    if left is None or right is None:
        return False
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))
