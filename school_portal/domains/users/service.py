# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account administration service.

Administrators list, edit and remove portal accounts. Accounts are created
through registration or the start-up seed, never here.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.domains.auth.service import to_user_response
from school_portal.infrastructure.database.models import UserProfile
from school_portal.models.people import UserResponse, UserUpdateRequest

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Base exception for user service errors."""

    pass


class UserNotFoundError(UserServiceError):
    """Raised when a user is not found."""

    pass


class UserValidationError(UserServiceError):
    """Raised when an account change is not allowed."""

    pass


class UserService:
    """Service for administering accounts.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_users(self) -> list[UserResponse]:
        """List accounts, newest first."""
        result = await self._db.execute(select(UserProfile).order_by(UserProfile.created_at.desc()))
        return [to_user_response(row) for row in result.scalars().all()]

    async def get_user(self, user_id: str) -> UserResponse:
        """Get an account.

        Raises:
            UserNotFoundError: If the account does not exist.
        """
        return to_user_response(await self._get_by_id(user_id))

    async def update_user(self, user_id: str, request: UserUpdateRequest) -> UserResponse:
        """Apply an administrator's changes to an account.

        Only fields present in the request are changed.

        Raises:
            UserNotFoundError: If the account does not exist.
        """
        user = await self._get_by_id(user_id)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(user, field, value)

        await self._db.commit()
        await self._db.refresh(user)

        logger.info("User updated: %s (fields=%s)", user_id, ",".join(sorted(changes)))
        return to_user_response(user)

    async def delete_user(self, user_id: str, acting_user_id: str) -> None:
        """Delete an account.

        Args:
            user_id: Account to delete.
            acting_user_id: Administrator performing the deletion.

        Raises:
            UserValidationError: If administrators try to delete themselves.
            UserNotFoundError: If the account does not exist.
        """
        if user_id == acting_user_id:
            raise UserValidationError("You cannot delete your own account")

        user = await self._get_by_id(user_id)
        await self._db.delete(user)
        await self._db.commit()
        logger.info("User deleted: %s by %s", user_id, acting_user_id)

    async def _get_by_id(self, user_id: str) -> UserProfile:
        user = await self._db.get(UserProfile, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
