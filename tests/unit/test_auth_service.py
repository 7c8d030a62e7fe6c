# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the authentication service."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pydantic import SecretStr, ValidationError

from school_portal.domains.auth.jwt import JWTManager
from school_portal.domains.auth.password import PasswordHasher, WeakPasswordError
from school_portal.domains.auth.service import (
    AuthService,
    EmailExistsError,
    InvalidCredentialsError,
    TokenRefreshError,
)
from school_portal.infrastructure.database.models import UserProfile
from school_portal.models.people import RegisterRequest

HASHER = PasswordHasher(rounds=4)


def create_mock_result(one=None, values=None, scalar=None):
    """Create a mock result for scalar_one_or_none(), scalars().all() and scalar()."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = one
    result.scalars.return_value.all.return_value = values or []
    result.scalar.return_value = scalar
    return result


def make_user(role: str = "editor", is_active: bool = True, password: str = "secret123") -> UserProfile:
    return UserProfile(
        id=str(uuid4()),
        username="giaovien",
        email="giaovien@truonghoc.edu.vn",
        full_name="Giáo viên",
        role=role,
        password_hash=HASHER.hash(password),
        is_active=is_active,
    )


@pytest.fixture
def jwt_manager() -> JWTManager:
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    settings.refresh_token_expire_days = 7
    return JWTManager(settings)


@pytest.fixture
def auth_service(mock_db, jwt_manager):
    def assign_id(row):
        if row.id is None:
            row.id = str(uuid4())

    mock_db.refresh.side_effect = assign_id
    return AuthService(mock_db, jwt_manager, HASHER)


class TestRegisterRequest:
    """Tests for the sign-up form."""

    def test_passwords_must_match(self) -> None:
        with pytest.raises(ValidationError, match="Passwords do not match"):
            RegisterRequest(
                full_name="A",
                email="a@truonghoc.edu.vn",
                password="secret123",
                confirm_password="secret124",
            )

    def test_password_minimum_length(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(full_name="A", email="a@truonghoc.edu.vn", password="123", confirm_password="123")


class TestRegister:
    """Tests for AuthService.register."""

    @pytest.mark.asyncio
    async def test_register_creates_member(self, auth_service, mock_db) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(one=None),
            create_mock_result(values=["nguyenvana"]),
        ]
        request = RegisterRequest(
            full_name=" Nguyễn Văn A ",
            email="NguyenVanA@Truonghoc.edu.vn",
            password="secret123",
            confirm_password="secret123",
        )

        user = await auth_service.register(request)

        added = mock_db.add.call_args[0][0]
        assert added.email == "nguyenvana@truonghoc.edu.vn"
        assert added.username == "nguyenvana1"
        assert added.role == "member"
        assert HASHER.verify("secret123", added.password_hash)
        assert user.full_name == "Nguyễn Văn A"
        assert user.role == "member"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, auth_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=make_user())
        request = RegisterRequest(
            full_name="A",
            email="giaovien@truonghoc.edu.vn",
            password="secret123",
            confirm_password="secret123",
        )

        with pytest.raises(EmailExistsError):
            await auth_service.register(request)

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_rejects_password_over_bcrypt_limit(self, auth_service, mock_db) -> None:
        """Test that a long Vietnamese password is refused before any query."""
        password = "mật khẩu " * 8
        request = RegisterRequest(
            full_name="A",
            email="a@truonghoc.edu.vn",
            password=password,
            confirm_password=password,
        )

        with pytest.raises(WeakPasswordError, match="72 bytes"):
            await auth_service.register(request)

        mock_db.execute.assert_not_called()
        mock_db.add.assert_not_called()


class TestLogin:
    """Tests for AuthService.login."""

    @pytest.mark.asyncio
    async def test_login_success(self, auth_service, mock_db, jwt_manager) -> None:
        user = make_user(role="admin")
        mock_db.execute.return_value = create_mock_result(one=user)

        response = await auth_service.login("GiaoVien@truonghoc.edu.vn", "secret123")

        payload = jwt_manager.decode_token(response.tokens.access_token, expected_type="access")
        assert payload.sub == user.id
        assert payload.role == "admin"
        assert response.user.email == "giaovien@truonghoc.edu.vn"
        assert user.last_login_at is not None
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=make_user())

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("giaovien@truonghoc.edu.vn", "wrong")

    @pytest.mark.asyncio
    async def test_login_inactive_user(self, auth_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=make_user(is_active=False))

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("giaovien@truonghoc.edu.vn", "secret123")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, auth_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(one=None)

        with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
            await auth_service.login("nobody@truonghoc.edu.vn", "secret123")


class TestRefresh:
    """Tests for AuthService.refresh."""

    @pytest.mark.asyncio
    async def test_refresh_rereads_role(self, auth_service, mock_db, jwt_manager) -> None:
        user = make_user(role="editor")
        tokens = jwt_manager.create_token_pair(user_id=user.id, role="admin")
        mock_db.get.return_value = user

        response = await auth_service.refresh(tokens.refresh_token)

        payload = jwt_manager.decode_token(response.access_token)
        assert payload.role == "editor"

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, auth_service, jwt_manager) -> None:
        tokens = jwt_manager.create_token_pair(user_id="u1", role="admin")

        with pytest.raises(TokenRefreshError, match="Invalid refresh token"):
            await auth_service.refresh(tokens.access_token)

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_user(self, auth_service, mock_db, jwt_manager) -> None:
        tokens = jwt_manager.create_token_pair(user_id=str(uuid4()), role="admin")
        mock_db.get.return_value = None

        with pytest.raises(TokenRefreshError, match="not found"):
            await auth_service.refresh(tokens.refresh_token)


class TestEnsureDefaultAdmin:
    """Tests for seeding the first administrator."""

    @pytest.mark.asyncio
    async def test_creates_admin_when_none(self, auth_service, mock_db) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(scalar=0),
            create_mock_result(values=[]),
        ]

        created = await auth_service.ensure_default_admin("Admin@Truonghoc.edu.vn", "admin123", "Quản trị")

        assert created is True
        added = mock_db.add.call_args[0][0]
        assert added.role == "admin"
        assert added.username == "admin"
        assert added.email == "admin@truonghoc.edu.vn"

    @pytest.mark.asyncio
    async def test_skips_when_admin_exists(self, auth_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(scalar=1)

        created = await auth_service.ensure_default_admin("admin@truonghoc.edu.vn", "admin123", "Quản trị")

        assert created is False
        mock_db.add.assert_not_called()
