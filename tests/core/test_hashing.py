"""
Test suite for bcrypt password hashing helpers.

System role: Verification of password storage primitives
"""

import pytest

from backend.core import hashing


class TestMakeHash:
    """Test suite for make_hash()."""

    def test_make_hash_should_produce_bcrypt_hash(self) -> None:
        """Test hash is a bcrypt string that differs from the input."""
        # Act
        hashed = hashing.make_hash("secret", rounds=4)

        # Assert
        assert hashed != "secret"
        assert hashed.startswith("$2b$04$")
        assert hashing.is_hashed(hashed)

    def test_make_hash_should_salt_every_call(self) -> None:
        """Test hashing the same value twice gives different hashes."""
        # Act
        first = hashing.make_hash("secret", rounds=4)
        second = hashing.make_hash("secret", rounds=4)

        # Assert
        assert first != second


class TestCheckHash:
    """Test suite for check_hash()."""

    def test_check_hash_should_accept_matching_value(self) -> None:
        hashed = hashing.make_hash("secret", rounds=4)

        assert hashing.check_hash("secret", hashed) is True

    def test_check_hash_should_reject_wrong_value(self) -> None:
        hashed = hashing.make_hash("secret", rounds=4)

        assert hashing.check_hash("Secret", hashed) is False

    @pytest.mark.parametrize("hashed", [None, "", "secret", "$2b$04$tooshort"])
    def test_check_hash_should_reject_malformed_hash(self, hashed) -> None:
        """Test empty or non-bcrypt hashes fail instead of raising."""
        assert hashing.check_hash("secret", hashed) is False


class TestRounds:
    """Test suite for hash_rounds() and needs_rehash()."""

    def test_hash_rounds_should_read_cost_factor(self) -> None:
        hashed = hashing.make_hash("secret", rounds=5)

        assert hashing.hash_rounds(hashed) == 5

    def test_hash_rounds_should_return_none_for_plain_text(self) -> None:
        assert hashing.hash_rounds("plain") is None

    def test_needs_rehash_should_compare_cost_factor(self) -> None:
        hashed = hashing.make_hash("secret", rounds=4)

        assert hashing.needs_rehash(hashed, rounds=4) is False
        assert hashing.needs_rehash(hashed, rounds=6) is True

    def test_needs_rehash_should_use_default_rounds(self) -> None:
        hashed = hashing.make_hash("secret", rounds=4)

        assert hashing.DEFAULT_ROUNDS == 12
        assert hashing.needs_rehash(hashed) is True
