# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for account administration."""

from uuid import uuid4

import pytest

from school_portal.domains.users import UserNotFoundError, UserService, UserValidationError
from school_portal.infrastructure.database.models import UserProfile
from school_portal.models.people import UserUpdateRequest


def make_user(**overrides) -> UserProfile:
    values = {
        "id": str(uuid4()),
        "username": "bientap",
        "email": "bientap@truonghoc.edu.vn",
        "full_name": "Biên tập viên",
        "role": "member",
        "password_hash": "x",
        "is_active": True,
    }
    values.update(overrides)
    return UserProfile(**values)


@pytest.fixture
def user_service(mock_db):
    return UserService(db=mock_db)


class TestUpdateUser:
    """Tests for UserService.update_user."""

    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, user_service, mock_db) -> None:
        user = make_user()
        mock_db.get.return_value = user

        response = await user_service.update_user(user.id, UserUpdateRequest(role="editor"))

        assert user.role == "editor"
        assert user.full_name == "Biên tập viên"
        assert user.is_active is True
        assert response.role == "editor"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_deactivate(self, user_service, mock_db) -> None:
        user = make_user()
        mock_db.get.return_value = user

        await user_service.update_user(user.id, UserUpdateRequest.model_validate({"isActive": False}))

        assert user.is_active is False

    @pytest.mark.asyncio
    async def test_missing_user(self, user_service, mock_db) -> None:
        mock_db.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await user_service.update_user(str(uuid4()), UserUpdateRequest(role="admin"))


class TestDeleteUser:
    """Tests for UserService.delete_user."""

    @pytest.mark.asyncio
    async def test_cannot_delete_self(self, user_service, mock_db) -> None:
        with pytest.raises(UserValidationError):
            await user_service.delete_user("admin-id", acting_user_id="admin-id")

        mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_other_user(self, user_service, mock_db) -> None:
        user = make_user()
        mock_db.get.return_value = user

        await user_service.delete_user(user.id, acting_user_id="admin-id")

        mock_db.delete.assert_awaited_once_with(user)
        mock_db.commit.assert_awaited_once()
