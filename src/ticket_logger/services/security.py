"""
Password hashing for stored users, plus the placeholder login token.

Hashes use werkzeug's "method$salt$hash" format (pbkdf2:sha256 by default).
"""

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

HASH_METHOD = "pbkdf2:sha256"


def hash_password(password: str, *, method: str = HASH_METHOD) -> str:
    return generate_password_hash(password, method=method)


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time check; malformed hashes simply do not verify."""
    try:
        return check_password_hash(hashed_password, password)
    except ValueError:
        return False


def generate_placeholder_token() -> str:
    """Opaque random token. Not signed and not verifiable; login is a stub."""
    return secrets.token_urlsafe(32)
