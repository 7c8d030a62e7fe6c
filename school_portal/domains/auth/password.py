# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

Account passwords need at least ``MIN_PASSWORD_LENGTH`` characters and
must fit in bcrypt's 72-byte input once UTF-8 encoded, which matters for
Vietnamese passwords where most letters take two or three bytes.

Example:
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_password")
    >>> hasher.verify("my_password", hashed)
    True
"""

import logging

import bcrypt

from school_portal.models.people import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class WeakPasswordError(ValueError):
    """Raised when a password cannot be used for an account."""

    pass


class PasswordHasher:
    """Password policy and bcrypt hashing for portal accounts.

    Attributes:
        _rounds: Number of bcrypt rounds for hashing.
        _min_length: Shortest accepted password, in characters.
    """

    def __init__(self, rounds: int = 12, min_length: int = MIN_PASSWORD_LENGTH) -> None:
        """Initialize the password hasher.

        Args:
            rounds: Number of bcrypt rounds. Higher is more secure but slower.
            min_length: Shortest accepted password.
        """
        self._rounds = rounds
        self._min_length = min_length

    def check(self, password: str) -> None:
        """Check a new password against the account policy.

        Raises:
            WeakPasswordError: If the password is empty, too short or too long.
        """
        if not password:
            raise WeakPasswordError("Password cannot be empty")
        if len(password) < self._min_length:
            raise WeakPasswordError(f"Password must be at least {self._min_length} characters")
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise WeakPasswordError(f"Password must not exceed {BCRYPT_MAX_BYTES} bytes")

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password to hash.

        Returns:
            Bcrypt hash string with salt embedded.

        Raises:
            WeakPasswordError: If the password fails the account policy.
        """
        self.check(password)

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password to verify.
            password_hash: Bcrypt hash to verify against.

        Returns:
            True if password matches the hash, False otherwise.
        """
        if not password or not password_hash:
            return False
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            return False

        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False
