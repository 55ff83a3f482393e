#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Authentication Models

User and token models for resume owners.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserStatus(str, Enum):
    """User account status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class User(BaseModel):
    """User model."""
    id: Optional[int] = None
    email: EmailStr
    name: Optional[str] = None
    password_hash: str = ""   # Never expose in API responses

    status: UserStatus = UserStatus.ACTIVE

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    """Schema for user registration."""
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    name: Optional[str] = Field(None, max_length=100)


class UserResponse(BaseModel):
    """User response schema (excludes sensitive data)."""
    id: int
    email: EmailStr
    name: Optional[str] = None
    status: UserStatus
    created_at: datetime
    last_login: Optional[datetime] = None


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenPair(BaseModel):
    """JWT token pair."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class TokenPayload(BaseModel):
    """JWT access token payload."""
    sub: str          # user_id
    email: str
    exp: datetime
    iat: datetime
    type: str         # "access" or "refresh"


class PasswordChange(BaseModel):
    """Password change request."""
    current_password: str
    new_password: str = Field(min_length=8, max_length=100)
