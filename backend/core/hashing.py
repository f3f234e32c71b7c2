"""
Password hashing helpers.

Thin wrapper over bcrypt used by the user model's hashed password
attribute and by credential checks.

Dependencies: bcrypt
System role: Password hashing and verification
"""

import re

import bcrypt

DEFAULT_ROUNDS = 12

# $2a$/$2b$/$2y$, two-digit cost, 53 chars of salt+digest
_BCRYPT_PATTERN = re.compile(r"^\$2[aby]\$(\d{2})\$[./A-Za-z0-9]{53}$")


def make_hash(value: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text value with bcrypt.

    Args:
        value: Plain-text secret
        rounds: bcrypt cost factor (defaults to DEFAULT_ROUNDS)

    Returns:
        str: bcrypt hash ("$2b$..." form)
    """
    salt = bcrypt.gensalt(rounds=rounds or DEFAULT_ROUNDS)
    return bcrypt.hashpw(value.encode("utf-8"), salt).decode("utf-8")


def check_hash(value: str, hashed: str | None) -> bool:
    """
    Verify a plain-text value against a bcrypt hash.

    Returns False for empty or malformed hashes instead of raising.
    """
    if not hashed or not is_hashed(hashed):
        return False
    try:
        return bcrypt.checkpw(value.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def is_hashed(value: str | None) -> bool:
    """Whether the value already is a bcrypt hash."""
    return bool(value) and _BCRYPT_PATTERN.match(value) is not None


def hash_rounds(hashed: str) -> int | None:
    """Cost factor embedded in a bcrypt hash, None if not a bcrypt hash."""
    match = _BCRYPT_PATTERN.match(hashed or "")
    return int(match.group(1)) if match else None


def needs_rehash(hashed: str, rounds: int | None = None) -> bool:
    """Whether the hash was produced with a different cost factor."""
    return hash_rounds(hashed) != (rounds or DEFAULT_ROUNDS)
