"""
API token primitives.

Plain-text tokens are "<id>|<secret>"; only the sha256 digest of the
secret is persisted.

Dependencies: hashlib, hmac, secrets (stdlib)
System role: Token generation and parsing for bearer authentication
"""

import hashlib
import hmac
import secrets
import string

TOKEN_LENGTH = 40
_ALPHABET = string.ascii_letters + string.digits


def generate_secret(length: int = TOKEN_LENGTH) -> str:
    """Random alphanumeric token secret."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def digest(secret: str) -> str:
    """sha256 hex digest stored in place of the secret."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def format_plain_token(token_id: int, secret: str) -> str:
    """Plain-text token handed to the client once."""
    return f"{token_id}|{secret}"


def parse_plain_token(value: str) -> tuple[int | None, str]:
    """
    Split a plain-text token into (id, secret).

    A value without "|" has no id and is matched by digest alone; a
    non-numeric id is treated the same way.
    """
    if "|" not in value:
        return None, value
    raw_id, secret = value.split("|", 1)
    if not raw_id.isdigit():
        return None, secret
    return int(raw_id), secret


def digests_match(secret: str, stored_digest: str) -> bool:
    """Constant-time comparison of a secret against a stored digest."""
    return hmac.compare_digest(digest(secret), stored_digest)
