# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing utilities.

Tests the PasswordHasher class and convenience functions.
"""

import pytest

from edconnect.domains.auth.password import (
    PasswordHasher,
    hash_password,
    verify_password,
)


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_password_returns_bcrypt_hash(self) -> None:
        """Test that hashing returns a bcrypt hash string."""
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("test_password_123")

        assert hashed.startswith("$2b$")
        assert len(hashed) == 60

    def test_hash_produces_different_hashes_for_same_password(self) -> None:
        """Test that hashing the same password produces different hashes (due to salt)."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.hash("same") != hasher.hash("same")

    def test_verify_correct_and_incorrect_password(self) -> None:
        """Test verification against the right and wrong password."""
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("correct_password")

        assert hasher.verify("correct_password", hashed) is True
        assert hasher.verify("wrong_password", hashed) is False

    def test_verify_empty_inputs_return_false(self) -> None:
        """Test that verification fails with empty password or hash."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("", hasher.hash("valid_password")) is False
        assert hasher.verify("password", "") is False

    def test_verify_invalid_hash_returns_false(self) -> None:
        """Test that verification fails with a malformed hash."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("password", "not-a-bcrypt-hash") is False

    def test_hash_empty_password_raises(self) -> None:
        """Test that empty passwords cannot be hashed."""
        with pytest.raises(ValueError, match="empty"):
            PasswordHasher(rounds=4).hash("")

    def test_needs_rehash_when_rounds_increase(self) -> None:
        """Test that hashes made with fewer rounds need rehashing."""
        weak = PasswordHasher(rounds=4).hash("password")

        assert PasswordHasher(rounds=5).needs_rehash(weak) is True
        assert PasswordHasher(rounds=4).needs_rehash(weak) is False
        assert PasswordHasher(rounds=4).needs_rehash("garbage") is True


class TestConvenienceFunctions:
    """Tests for module-level helpers."""

    def test_hash_and_verify_round_trip(self) -> None:
        """Test the default hasher functions work together."""
        hashed = hash_password("EdConnect2025!")

        assert verify_password("EdConnect2025!", hashed) is True
        assert verify_password("edconnect2025!", hashed) is False
