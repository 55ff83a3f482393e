"""
Resume Database Models
SQLAlchemy model for stored resume versions.
"""
from datetime import datetime
from typing import Any, Dict, Optional
import uuid

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from .schemas import DEFAULT_LAYOUT

Base = declarative_base()


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Resume(Base):
    """
    Resume model - one stored version of a user's resume.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Owner (auth user id)
        title: Display title, also the download filename
        version_name: Optional label for this version ("Backend roles", ...)
        data: The full document as camelCase JSON
        layout: Chosen layout, mirrored from data for listing
        pdf_url: Public URL of the last uploaded export
        is_active: Soft delete flag
    """

    __tablename__ = "resumes"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )

    # Ownership
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Content
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    version_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    layout: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_LAYOUT.value, nullable=False
    )

    # Export
    pdf_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # Flags
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        Index("ix_resumes_user_active", "user_id", "is_active"),
    )

    def __repr__(self):
        return f"<Resume {self.title} ({self.id})>"

    def to_dict(self) -> dict:
        """Convert to dictionary for API response (camelCase)."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "versionName": self.version_name,
            "data": self.data,
            "pdfUrl": self.pdf_url,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
