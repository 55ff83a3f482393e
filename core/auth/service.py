#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Authentication Service

- Registration and login
- Password hashing with bcrypt (passlib)
- JWT access/refresh tokens (PyJWT) with refresh-token revocation
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

import jwt
from passlib.context import CryptContext

from config.settings import settings

from .database import UserDatabase, get_user_db
from .models import LoginRequest, TokenPair, TokenPayload, User, UserCreate, UserStatus

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12
)


class AuthService:
    """Authentication service."""

    def __init__(
        self,
        db: Optional[UserDatabase] = None,
        secret_key: Optional[str] = None,
        access_minutes: Optional[int] = None,
        refresh_days: Optional[int] = None,
    ):
        """Initialize auth service."""
        self.db = db or get_user_db()
        self.secret_key = secret_key or settings.jwt_secret_key
        self.access_minutes = access_minutes or settings.access_token_expire_minutes
        self.refresh_days = refresh_days or settings.refresh_token_expire_days

    # ========================================================================
    # Password Operations
    # ========================================================================

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # ========================================================================
    # Registration / Login / Logout
    # ========================================================================

    def register_user(self, data: UserCreate) -> Tuple[User, TokenPair]:
        """
        Register a new user.

        Raises:
            ValueError: If the email is already registered
        """
        if self.db.get_user_by_email(data.email):
            raise ValueError("Email already registered")

        user = User(
            email=data.email.lower(),
            name=data.name,
            password_hash=self.hash_password(data.password),
            status=UserStatus.ACTIVE
        )
        user = self.db.create_user(user)
        logger.info(f"User registered: {user.email}")

        return user, self.create_tokens(user)

    def login(self, data: LoginRequest) -> Tuple[User, TokenPair]:
        """
        Authenticate user and return tokens.

        Raises:
            ValueError: If credentials are invalid or the account is not active
        """
        user = self.db.get_user_by_email(data.email.lower())

        if not user or not self.verify_password(data.password, user.password_hash):
            logger.warning(f"Failed login for {data.email}")
            raise ValueError("Invalid email or password")

        if user.status != UserStatus.ACTIVE:
            raise ValueError(f"Account is {user.status.value}")

        self.db.update_last_login(user.id)
        tokens = self.create_tokens(user)

        logger.info(f"User logged in: {user.email}")
        return user, tokens

    def logout(self, refresh_token: str) -> bool:
        """Revoke a refresh token; True if it was active."""
        revoked = self.db.revoke_refresh_token(self._hash_token(refresh_token))
        if revoked:
            logger.info("Refresh token revoked")
        return revoked

    def logout_all(self, user_id: int) -> int:
        count = self.db.revoke_all_user_tokens(user_id)
        logger.info(f"Revoked {count} tokens for user {user_id}")
        return count

    # ========================================================================
    # Token Operations
    # ========================================================================

    def create_tokens(self, user: User) -> TokenPair:
        """Create access and refresh tokens for user."""
        now = datetime.utcnow()

        access_expires = now + timedelta(minutes=self.access_minutes)
        access_payload = {
            "sub": str(user.id),
            "email": user.email,
            "exp": access_expires,
            "iat": now,
            "type": "access"
        }
        access_token = jwt.encode(access_payload, self.secret_key, algorithm=JWT_ALGORITHM)

        refresh_expires = now + timedelta(days=self.refresh_days)
        refresh_payload = {
            "sub": str(user.id),
            "exp": refresh_expires,
            "iat": now,
            "type": "refresh",
            "jti": secrets.token_urlsafe(16)
        }
        refresh_token = jwt.encode(refresh_payload, self.secret_key, algorithm=JWT_ALGORITHM)

        self.db.store_refresh_token(
            user_id=user.id,
            token_hash=self._hash_token(refresh_token),
            expires_at=datetime.now() + timedelta(days=self.refresh_days)
        )

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.access_minutes * 60
        )

    def verify_access_token(self, token: str) -> TokenPayload:
        """
        Verify access token and return payload.

        Raises:
            ValueError: If token is invalid or expired
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {e}")

        if payload.get("type") != "access":
            raise ValueError("Invalid token type")

        return TokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            exp=datetime.utcfromtimestamp(payload["exp"]),
            iat=datetime.utcfromtimestamp(payload["iat"]),
            type=payload["type"]
        )

    def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Rotate a refresh token: the old one is revoked, a new pair issued.

        Raises:
            ValueError: If refresh token is invalid, expired or revoked
        """
        try:
            payload = jwt.decode(refresh_token, self.secret_key, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise ValueError("Refresh token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid refresh token: {e}")

        if payload.get("type") != "refresh":
            raise ValueError("Invalid token type")

        token_hash = self._hash_token(refresh_token)
        stored_token = self.db.get_refresh_token(token_hash)
        if not stored_token:
            raise ValueError("Token not found or revoked")
        if stored_token["expires_at"] < datetime.now():
            raise ValueError("Refresh token expired")

        user = self.db.get_user_by_id(int(payload["sub"]))
        if not user:
            raise ValueError("User not found")
        if user.status != UserStatus.ACTIVE:
            raise ValueError(f"Account is {user.status.value}")

        self.db.revoke_refresh_token(token_hash)
        return self.create_tokens(user)

    def _hash_token(self, token: str) -> str:
        """Hash a token for storage."""
        return hashlib.sha256(token.encode()).hexdigest()

    # ========================================================================
    # Account Operations
    # ========================================================================

    def change_password(self, user_id: int, current_password: str, new_password: str) -> bool:
        """
        Change user password and revoke every refresh token.

        Raises:
            ValueError: If current password is wrong
        """
        user = self.db.get_user_by_id(user_id)
        if not user:
            raise ValueError("User not found")

        if not self.verify_password(current_password, user.password_hash):
            raise ValueError("Current password is incorrect")

        self.db.update_password(user_id, self.hash_password(new_password))
        self.logout_all(user_id)

        logger.info(f"Password changed for user {user_id}")
        return True

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get_user_by_id(user_id)


# Global instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get global auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
