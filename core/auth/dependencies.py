#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Dependencies for Authentication

Every resume and skill endpoint depends on get_current_active_user.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .models import TokenPayload, User, UserStatus
from .service import AuthService, get_auth_service

logger = logging.getLogger(__name__)

# Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenPayload:
    """
    Extract and verify JWT token from Authorization header.

    Raises:
        HTTPException 401: If token is missing or invalid
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        return auth_service.verify_access_token(credentials.credentials)
    except ValueError as e:
        logger.debug(f"Rejected token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )


async def get_current_user(
    payload: TokenPayload = Depends(get_token_payload),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user.

    Usage:
        @router.get("/me")
        async def get_me(user: User = Depends(get_current_user)):
            return user
    """
    user = auth_service.get_user(int(payload.sub))

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user


async def get_current_active_user(
    user: User = Depends(get_current_user)
) -> User:
    """
    Get current user and verify they are active.

    Raises:
        HTTPException 403: If user is not active
    """
    if user.status != UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account is {user.status.value}"
        )

    return user
