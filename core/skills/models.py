"""
Skill Catalog Database Models
SQLAlchemy models for skill categories and skills.
"""
from datetime import datetime
from typing import List, Optional
import uuid

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

Base = declarative_base()


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class SkillCategory(Base):
    """
    Skill category - one autocomplete list ("languages", "cloud", ...).

    Attributes:
        key: Document skills key (unique)
        name: Display name
        display_order: Sort position in the catalog
        is_active: Soft delete flag
    """

    __tablename__ = "skill_categories"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, default=99)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    skills: Mapped[List["Skill"]] = relationship(
        "Skill",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<SkillCategory {self.key} ({self.name})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "display_order": self.display_order,
            "is_active": self.is_active,
        }


class Skill(Base):
    """A skill name inside one category; names are unique per category."""

    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("skill_categories.id", ondelete="CASCADE"), nullable=False
    )
    usage_count: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    category: Mapped["SkillCategory"] = relationship(
        "SkillCategory", back_populates="skills"
    )

    # Table indexes
    __table_args__ = (
        Index("idx_skills_category", "category_id"),
        Index("idx_skills_unique", "category_id", "name", unique=True),
    )

    def __repr__(self):
        return f"<Skill {self.name}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "usage_count": self.usage_count,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
