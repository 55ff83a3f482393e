#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Authentication Module

Provides:
- User storage in SQLite
- Password hashing with bcrypt
- JWT access/refresh tokens with revocation
"""

from .models import User, UserStatus, TokenPair
from .database import UserDatabase, get_user_db
from .service import AuthService, get_auth_service
from .dependencies import get_current_user, get_current_active_user

__all__ = [
    # Models
    'User',
    'UserStatus',
    'TokenPair',
    # Database
    'UserDatabase',
    'get_user_db',
    # Service
    'AuthService',
    'get_auth_service',
    # Dependencies
    'get_current_user',
    'get_current_active_user',
]
