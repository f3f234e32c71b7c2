"""
Test suite for API token primitives.

System role: Verification of bearer token generation and parsing
"""

import hashlib

import pytest

from backend.core import tokens


class TestGenerateSecret:
    """Test suite for generate_secret()."""

    def test_generate_secret_should_default_to_token_length(self) -> None:
        secret = tokens.generate_secret()

        assert len(secret) == tokens.TOKEN_LENGTH
        assert secret.isalnum()

    def test_generate_secret_should_be_random(self) -> None:
        assert tokens.generate_secret() != tokens.generate_secret()


class TestDigest:
    """Test suite for digest() and digests_match()."""

    def test_digest_should_be_sha256_hex(self) -> None:
        # Act
        result = tokens.digest("abc")

        # Assert
        assert result == hashlib.sha256(b"abc").hexdigest()
        assert len(result) == 64

    def test_digests_match_should_compare_against_stored_digest(self) -> None:
        stored = tokens.digest("abc")

        assert tokens.digests_match("abc", stored) is True
        assert tokens.digests_match("abd", stored) is False


class TestPlainToken:
    """Test suite for format_plain_token() and parse_plain_token()."""

    def test_format_plain_token_should_join_id_and_secret(self) -> None:
        assert tokens.format_plain_token(7, "s3cr3t") == "7|s3cr3t"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("7|s3cr3t", (7, "s3cr3t")),
            ("s3cr3t", (None, "s3cr3t")),
            ("abc|s3cr3t", (None, "s3cr3t")),
            ("7|a|b", (7, "a|b")),
            ("7|", (7, "")),
        ],
    )
    def test_parse_plain_token(self, value, expected) -> None:
        """Test id and secret are split on the first pipe only."""
        assert tokens.parse_plain_token(value) == expected
