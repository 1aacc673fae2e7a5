"""Placeholder credential hashing for imported owners."""

from __future__ import annotations

import hashlib
import hmac


def build_password_hash(password: str, salt: str) -> str:
    """Return the HMAC-SHA256 hex digest of a password keyed by salt.

    Args:
        password: Plain-text password.
        salt: Secret key shared with the API layer.

    Returns:
        Lowercase hex digest.
    """
    return hmac.new(salt.encode("utf-8"), password.encode("utf-8"), hashlib.sha256).hexdigest()
