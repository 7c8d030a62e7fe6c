# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for portal accounts.

This module provides the AuthService that orchestrates:
- Self-service registration with email and password
- Email/password sign-in issuing a JWT pair
- Token refresh
- Seeding the first administrator

Tokens are stateless: there is no server-side session or revocation list,
so signing out is handled by the client discarding its tokens.

Example:
    >>> auth_service = AuthService(db_session, jwt_manager, password_hasher)
    >>> login = await auth_service.login("admin@truonghoc.edu.vn", "secret")
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.domains.auth.jwt import JWTError, JWTManager, TokenPair
from school_portal.domains.auth.password import PasswordHasher, WeakPasswordError
from school_portal.infrastructure.database.models import UserProfile
from school_portal.models.people import LoginResponse, RegisterRequest, TokenResponse, UserResponse
from school_portal.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password do not match an active account."""

    pass


class EmailExistsError(AuthenticationError):
    """Raised when registering an email that already has an account."""

    pass


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    pass


def to_user_response(user: UserProfile) -> UserResponse:
    """Convert a user row to its API representation."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        avatar_url=user.avatar_url,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
        created_at=user.created_at,
    )


def to_token_response(tokens: TokenPair) -> TokenResponse:
    """Convert a token pair to its API representation."""
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
    )


class AuthService:
    """Authentication service for portal accounts.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            password_hasher: Password hasher; a default bcrypt hasher if omitted.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._hasher = password_hasher or PasswordHasher()

    async def register(self, request: RegisterRequest) -> UserResponse:
        """Create a member account.

        The username is the local part of the email, suffixed with a
        counter when already taken.

        Args:
            request: Validated sign-up form.

        Returns:
            The created profile.

        Raises:
            EmailExistsError: If the email is already registered.
            WeakPasswordError: If the password fails the account policy.
        """
        self._hasher.check(request.password)
        email = request.email.lower()
        if await self._get_by_email(email):
            raise EmailExistsError(f"Email '{email}' is already registered")

        user = UserProfile(
            username=await self._unique_username(email.split("@", 1)[0]),
            email=email,
            full_name=request.full_name.strip(),
            role="member",
            password_hash=self._hasher.hash(request.password),
            is_active=True,
        )
        self._db.add(user)
        await self._db.commit()
        await self._db.refresh(user)

        logger.info("User registered: %s (%s)", user.email, user.id)
        return to_user_response(user)

    async def login(self, email: str, password: str) -> LoginResponse:
        """Sign in with email and password.

        Args:
            email: Account email (case-insensitive).
            password: Plain text password.

        Returns:
            Token pair and profile.

        Raises:
            InvalidCredentialsError: For unknown, inactive or mismatched accounts.
        """
        user = await self._get_by_email(email.lower())
        if user is None or not user.is_active:
            raise InvalidCredentialsError("Invalid email or password")
        if not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError("Invalid email or password")

        user.last_login_at = utc_now()
        await self._db.commit()

        tokens = self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=user.role,
            email=user.email,
        )
        logger.info("User logged in: %s", user.id)
        return LoginResponse(tokens=to_token_response(tokens), user=to_user_response(user))

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new pair.

        The role is re-read from the database so demotions take effect on
        the next refresh.

        Raises:
            TokenRefreshError: If the token is invalid or the account is gone.
        """
        try:
            payload = self._jwt_manager.decode_token(refresh_token, expected_type="refresh")
        except JWTError as e:
            raise TokenRefreshError(f"Invalid refresh token: {str(e)}") from e

        user = await self._db.get(UserProfile, payload.sub)
        if user is None or not user.is_active:
            raise TokenRefreshError("User not found or inactive")

        tokens = self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=user.role,
            email=user.email,
        )
        logger.info("Tokens refreshed for user: %s", user.id)
        return to_token_response(tokens)

    async def ensure_default_admin(self, email: str, password: str, full_name: str) -> bool:
        """Create an administrator when the portal has none.

        Returns:
            True if an administrator was created.
        """
        result = await self._db.execute(
            select(func.count()).select_from(UserProfile).where(UserProfile.role == "admin")
        )
        if (result.scalar() or 0) > 0:
            return False

        email = email.lower()
        user = UserProfile(
            username=await self._unique_username(email.split("@", 1)[0]),
            email=email,
            full_name=full_name,
            role="admin",
            password_hash=self._hasher.hash(password),
            is_active=True,
        )
        self._db.add(user)
        await self._db.commit()
        logger.info("Default administrator created: %s", email)
        return True

    async def _get_by_email(self, email: str) -> UserProfile | None:
        result = await self._db.execute(select(UserProfile).where(UserProfile.email == email))
        return result.scalar_one_or_none()

    async def _unique_username(self, base: str) -> str:
        base = base or "user"
        result = await self._db.execute(
            select(UserProfile.username).where(UserProfile.username.like(f"{base}%"))
        )
        taken = set(result.scalars().all())
        if base not in taken:
            return base
        counter = 1
        while f"{base}{counter}" in taken:
            counter += 1
        return f"{base}{counter}"
