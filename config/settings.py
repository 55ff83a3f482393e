#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Application ==========
    app_name: str = "Resume Builder API"
    app_version: str = "1.0.0"

    # ========== Security ==========
    # Security mode: development | production
    security_mode: str = "development"

    # ⚠️ SECURITY: MUST be changed via JWT_SECRET_KEY env var in production!
    jwt_secret_key: str = "INSECURE-DEV-JWT-CHANGE-IN-PRODUCTION"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 7

    # CORS origins (comma-separated in env, parsed to list)
    cors_origins: str = ""  # Empty = use default dev origins

    # ========== Rate Limiting ==========
    rate_limit_enabled: bool = True
    rate_limit: str = "60/minute"
    auth_rate_limit: str = "5/minute"  # Prevent brute force
    export_rate_limit: str = "10/minute"

    # ========== Database ==========
    database_dir: Path = BASE_DIR / "data"
    resume_db_name: str = "resumes.db"
    skills_db_name: str = "skills.db"
    users_db_path: Path = BASE_DIR / "data" / "users" / "users.db"

    # ========== Object Storage (Google Cloud Storage) ==========
    gcp_project_id: Optional[str] = None
    gcp_service_account_key: Optional[str] = None  # base64-encoded JSON
    gcp_bucket_name: Optional[str] = None
    storage_timeout_seconds: float = 30.0

    # ========== Export ==========
    export_scale: int = 2  # raster oversampling factor
    export_background: str = "#ffffff"
    fonts_dir: Optional[Path] = None

    # ========== Logging ==========
    log_level: str = "INFO"
    log_json: bool = False

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / "data" / "output"
    logs_dir: Path = BASE_DIR / "data" / "logs"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Create directories
        for dir_path in [
            self.database_dir,
            self.output_dir,
            self.logs_dir,
            self.users_db_path.parent,
        ]:
            dir_path.mkdir(exist_ok=True, parents=True)

        # Security validation for production mode
        self._validate_security_settings()

    @property
    def resume_db_path(self) -> Path:
        return self.database_dir / self.resume_db_name

    @property
    def skills_db_path(self) -> Path:
        return self.database_dir / self.skills_db_name

    @property
    def storage_configured(self) -> bool:
        """True when every Google Cloud Storage setting is present."""
        return bool(
            self.gcp_project_id
            and self.gcp_service_account_key
            and self.gcp_bucket_name
        )

    def _validate_security_settings(self):
        """Validate security settings for production mode."""
        import warnings

        insecure_secrets = [
            "INSECURE-DEV-JWT-CHANGE-IN-PRODUCTION",
            "change-this-in-production",
        ]

        if self.security_mode == "production":
            errors = []

            if self.jwt_secret_key in insecure_secrets:
                errors.append(
                    "JWT_SECRET_KEY must be set to a secure value in production! "
                    "Generate with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )

            if len(self.jwt_secret_key) < 32:
                errors.append(
                    "JWT_SECRET_KEY must be at least 32 characters in production!"
                )

            # Check CORS origins are explicitly set
            if not self.cors_origins:
                errors.append(
                    "CORS_ORIGINS must be explicitly set in production! "
                    "Example: CORS_ORIGINS=https://yourdomain.com,https://app.yourdomain.com"
                )

            if errors:
                raise ValueError(
                    "SECURITY ERROR - Production mode requires secure configuration:\n"
                    + "\n".join(f"  - {e}" for e in errors)
                )

        elif self.jwt_secret_key in insecure_secrets:
            warnings.warn(
                "Running with default insecure JWT secret. "
                "Set JWT_SECRET_KEY env var for production.",
                UserWarning
            )

    def get_cors_origins(self) -> list:
        """Get CORS origins as a list. Falls back to dev defaults if empty."""
        if self.cors_origins:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        # Dev defaults
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "="*70)
        print("⚙️  CONFIGURATION")
        print("="*70)
        print(f"Security Mode:   {self.security_mode}")
        print(f"Database Dir:    {self.database_dir}")
        print(f"Storage:         {'gcs:' + self.gcp_bucket_name if self.storage_configured else 'not configured'}")
        print(f"Export Scale:    {self.export_scale}x")
        print(f"Log Level:       {self.log_level}")
        print("="*70 + "\n")


# Global settings instance
settings = Settings()
