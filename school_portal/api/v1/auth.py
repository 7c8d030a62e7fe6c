# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /register - Self-service sign-up (member role)
- POST /login - Email/password sign-in
- POST /refresh - Refresh access token
- GET /me - Get current user info

Tokens are stateless; signing out means discarding them on the client.

Example:
    POST /api/v1/auth/login
    {"email": "admin@truonghoc.edu.vn", "password": "..."}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from school_portal.api.dependencies import get_auth_service, get_user_service, require_auth
from school_portal.api.middleware.auth import CurrentUser
from school_portal.api.middleware.rate_limit import RATE_LIMIT_AUTH, get_ip_only, limiter
from school_portal.domains.auth.service import (
    AuthService,
    EmailExistsError,
    InvalidCredentialsError,
    TokenRefreshError,
    WeakPasswordError,
)
from school_portal.domains.users import UserNotFoundError, UserService
from school_portal.models.people import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a member account. Passwords need at least 6 characters.",
)
@limiter.limit(RATE_LIMIT_AUTH, key_func=get_ip_only)
async def register(
    request: Request,
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Register a new member account.

    Raises:
        HTTPException: 400 for a refused password, 409 if the email is already registered.
    """
    try:
        return await auth_service.register(data)
    except WeakPasswordError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EmailExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign in",
    description="Exchange email and password for a JWT pair.",
)
@limiter.limit(RATE_LIMIT_AUTH, key_func=get_ip_only)
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Sign in with email and password.

    Raises:
        HTTPException: 401 for unknown, inactive or mismatched accounts.
    """
    try:
        return await auth_service.login(data.email, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Get a new token pair using a refresh token.",
)
@limiter.limit(RATE_LIMIT_AUTH, key_func=get_ip_only)
async def refresh_token(
    request: Request,
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Refresh access token.

    Raises:
        HTTPException: 401 if the refresh token is invalid.
    """
    try:
        return await auth_service.refresh(data.refresh_token)
    except TokenRefreshError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    description="Profile of the signed-in user.",
)
async def get_me(
    current_user: CurrentUser = Depends(require_auth),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get the current user's profile.

    Raises:
        HTTPException: 401 if the account no longer exists.
    """
    try:
        return await user_service.get_user(current_user.id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account no longer exists",
        )
