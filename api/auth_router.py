#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Authentication API Router

- Registration
- Login / Logout
- Token refresh
- Password change
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.rate_limiter import limiter, rate_limit_config
from core.auth import AuthService, User, get_auth_service, get_current_active_user
from core.auth.models import (
    LoginRequest,
    PasswordChange,
    RefreshRequest,
    TokenPair,
    UserCreate,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        status=user.status,
        created_at=user.created_at,
        last_login=user.last_login,
    )


# ============================================================================
# Public Endpoints (No Auth Required)
# ============================================================================

@router.post("/register", response_model=dict, status_code=status.HTTP_201_CREATED)
@limiter.limit(rate_limit_config.get_limit("auth_register"))
async def register(
    request: Request,
    data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user account.

    Returns access and refresh tokens on success.
    """
    try:
        user, tokens = auth_service.register_user(data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return {
        "message": "Registration successful",
        "user": _user_response(user).model_dump(mode="json"),
        "tokens": tokens.model_dump()
    }


@router.post("/login", response_model=dict)
@limiter.limit(rate_limit_config.get_limit("auth_login"))
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and return tokens.
    """
    try:
        user, tokens = auth_service.login(data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )
    return {
        "message": "Login successful",
        "user": _user_response(user).model_dump(mode="json"),
        "tokens": tokens.model_dump()
    }


@router.post("/refresh", response_model=TokenPair)
@limiter.limit(rate_limit_config.get_limit("auth_refresh"))
async def refresh_token(
    request: Request,
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Exchange a refresh token for a new token pair (the old one is revoked).
    """
    try:
        return auth_service.refresh_tokens(data.refresh_token)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )


# ============================================================================
# Protected Endpoints (Auth Required)
# ============================================================================

@router.post("/logout")
async def logout(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
    user: User = Depends(get_current_active_user)
):
    """
    Logout current session (revoke refresh token).
    """
    auth_service.logout(data.refresh_token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_active_user)):
    """
    Get current user profile.
    """
    return _user_response(user)


@router.post("/password/change")
@limiter.limit(rate_limit_config.get_limit("auth_password"))
async def change_password(
    request: Request,
    data: PasswordChange,
    user: User = Depends(get_current_active_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Change current user's password. All refresh tokens are revoked.
    """
    try:
        auth_service.change_password(
            user.id,
            data.current_password,
            data.new_password
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return {"message": "Password changed successfully. Please login again."}
