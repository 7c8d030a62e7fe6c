# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management utilities.

This module provides JWT token creation and validation using python-jose.
Supports access tokens and refresh tokens with configurable expiration.

Example:
    >>> from school_portal.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> tokens = jwt_manager.create_token_pair(user_id="user-123", role="editor")
    >>> claims = jwt_manager.decode_token(tokens.access_token)
"""

import logging
import secrets
from datetime import timedelta
from typing import Literal

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel

from school_portal.core.config.settings import JWTSettings
from school_portal.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (user ID).
        type: Token type (access or refresh).
        role: Portal role of the user (admin, editor, member).
        email: User email, carried for display and audit logs.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID for token tracking.
    """

    sub: str
    type: Literal["access", "refresh"]
    role: str = "member"
    email: str | None = None
    exp: int
    iat: int
    jti: str


class TokenPair(BaseModel):
    """Access and refresh token pair.

    Attributes:
        access_token: JWT access token string.
        refresh_token: JWT refresh token string.
        token_type: Token type (always "bearer").
        expires_in: Access token expiration in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """JWT token creation and validation manager.

    Access tokens are short-lived and carry the role used for
    authorization. Refresh tokens only identify the user; the role is
    re-read from the database when they are exchanged.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    def _encode(self, payload: dict) -> str:
        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def create_token_pair(
        self,
        user_id: str,
        role: str,
        email: str | None = None,
    ) -> TokenPair:
        """Create an access and refresh token pair.

        Args:
            user_id: User identifier.
            role: Portal role of the user.
            email: User email.

        Returns:
            TokenPair with access and refresh tokens.
        """
        now = utc_now()
        access_exp = now + timedelta(minutes=self._settings.access_token_expire_minutes)
        refresh_exp = now + timedelta(days=self._settings.refresh_token_expire_days)

        access_token = self._encode(
            {
                "sub": str(user_id),
                "type": "access",
                "role": role,
                "email": email,
                "exp": int(access_exp.timestamp()),
                "iat": int(now.timestamp()),
                "jti": secrets.token_urlsafe(16),
            }
        )

        refresh_token = self._encode(
            {
                "sub": str(user_id),
                "type": "refresh",
                "exp": int(refresh_exp.timestamp()),
                "iat": int(now.timestamp()),
                "jti": secrets.token_urlsafe(16),
            }
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._settings.access_token_expire_minutes * 60,
        )

    def decode_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.
            expected_type: Expected token type (access or refresh).

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}") from e

        if expected_type and payload.get("type") != expected_type:
            raise InvalidTokenError(
                f"Expected {expected_type} token, got {payload.get('type')}"
            )

        try:
            return TokenPayload(
                sub=payload["sub"],
                type=payload["type"],
                role=payload.get("role", "member"),
                email=payload.get("email"),
                exp=payload["exp"],
                iat=payload["iat"],
                jti=payload["jti"],
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError(f"Invalid token claims: {str(e)}") from e

    def verify_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> bool:
        """Verify if a token is valid.

        Returns:
            True if token is valid, False otherwise.
        """
        try:
            self.decode_token(token, expected_type)
            return True
        except JWTError:
            return False
