#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
User Database - SQLite-based user storage

Users plus hashed refresh tokens for revocation.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional, Union
from datetime import datetime

from config.settings import settings

from .models import User, UserStatus

logger = logging.getLogger(__name__)


class UserDatabase:
    """SQLite-based user storage."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """Initialize user database."""
        self.db_path = Path(db_path or settings.users_db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = None
        self._init_database()

    def _init_database(self):
        """Initialize database schema."""
        self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.row_factory = sqlite3.Row

        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT UNIQUE NOT NULL,
                name TEXT,
                password_hash TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'active',
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL,
                last_login REAL
            )
        """)

        # Refresh tokens table (for token invalidation)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS refresh_tokens (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                token_hash TEXT UNIQUE NOT NULL,
                created_at REAL NOT NULL,
                expires_at REAL NOT NULL,
                revoked BOOLEAN DEFAULT 0,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_refresh_tokens_user ON refresh_tokens(user_id)")

        self.conn.commit()
        logger.info(f"User database initialized at {self.db_path}")

    # ========================================================================
    # User Operations
    # ========================================================================

    def create_user(self, user: User) -> User:
        """Create a new user."""
        cursor = self.conn.cursor()
        now = datetime.now().timestamp()

        cursor.execute("""
            INSERT INTO users (email, name, password_hash, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (
            user.email.lower(),
            user.name,
            user.password_hash,
            user.status.value,
            now,
            now,
        ))

        self.conn.commit()
        user.id = cursor.lastrowid
        user.created_at = datetime.fromtimestamp(now)
        user.updated_at = datetime.fromtimestamp(now)

        logger.info(f"Created user: {user.email} (id={user.id})")
        return user

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM users WHERE email = ?", (email.lower(),))
        row = cursor.fetchone()
        return self._row_to_user(row) if row else None

    def update_password(self, user_id: int, password_hash: str) -> bool:
        cursor = self.conn.cursor()
        cursor.execute("""
            UPDATE users SET password_hash = ?, updated_at = ?
            WHERE id = ?
        """, (password_hash, datetime.now().timestamp(), user_id))
        self.conn.commit()
        return cursor.rowcount > 0

    def update_last_login(self, user_id: int) -> bool:
        cursor = self.conn.cursor()
        cursor.execute(
            "UPDATE users SET last_login = ? WHERE id = ?",
            (datetime.now().timestamp(), user_id),
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def set_status(self, user_id: int, status: UserStatus) -> bool:
        cursor = self.conn.cursor()
        cursor.execute("""
            UPDATE users SET status = ?, updated_at = ?
            WHERE id = ?
        """, (status.value, datetime.now().timestamp(), user_id))
        self.conn.commit()
        return cursor.rowcount > 0

    # ========================================================================
    # Refresh Token Operations
    # ========================================================================

    def store_refresh_token(self, user_id: int, token_hash: str, expires_at: datetime) -> int:
        """Store a refresh token hash."""
        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT INTO refresh_tokens (user_id, token_hash, created_at, expires_at)
            VALUES (?, ?, ?, ?)
        """, (user_id, token_hash, datetime.now().timestamp(), expires_at.timestamp()))
        self.conn.commit()
        return cursor.lastrowid

    def get_refresh_token(self, token_hash: str) -> Optional[dict]:
        """Unrevoked refresh token by hash."""
        cursor = self.conn.cursor()
        cursor.execute("""
            SELECT * FROM refresh_tokens
            WHERE token_hash = ? AND revoked = 0
        """, (token_hash,))
        row = cursor.fetchone()

        if row:
            return {
                "id": row["id"],
                "user_id": row["user_id"],
                "created_at": datetime.fromtimestamp(row["created_at"]),
                "expires_at": datetime.fromtimestamp(row["expires_at"]),
            }
        return None

    def revoke_refresh_token(self, token_hash: str) -> bool:
        cursor = self.conn.cursor()
        cursor.execute(
            "UPDATE refresh_tokens SET revoked = 1 WHERE token_hash = ? AND revoked = 0",
            (token_hash,),
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def revoke_all_user_tokens(self, user_id: int) -> int:
        """Revoke all refresh tokens for a user (logout everywhere)."""
        cursor = self.conn.cursor()
        cursor.execute("""
            UPDATE refresh_tokens SET revoked = 1
            WHERE user_id = ? AND revoked = 0
        """, (user_id,))
        self.conn.commit()
        return cursor.rowcount

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password_hash=row["password_hash"],
            status=UserStatus(row["status"]),
            created_at=datetime.fromtimestamp(row["created_at"]),
            updated_at=datetime.fromtimestamp(row["updated_at"]),
            last_login=datetime.fromtimestamp(row["last_login"]) if row["last_login"] else None,
        )

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()


# Global instance
_user_db: Optional[UserDatabase] = None


def get_user_db() -> UserDatabase:
    """Get global user database instance."""
    global _user_db
    if _user_db is None:
        _user_db = UserDatabase()
    return _user_db
