"""
Resume Pydantic Schemas
Document model and API validation schemas for resume operations.

JSON uses camelCase keys (fullName, startDate, versionName, ...);
Python attributes are snake_case. Both spellings are accepted on input.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


# ==================== CONSTANTS ====================

class LayoutType(str, Enum):
    """The six visual layouts."""
    CLASSIC = "classic"
    MODERN = "modern"
    PROFESSIONAL = "professional"
    MINIMAL = "minimal"
    EXECUTIVE = "executive"
    COMPACT = "compact"


DEFAULT_LAYOUT = LayoutType.CLASSIC

DEFAULT_SKILL_CATEGORIES = [
    "languages",
    "frameworks",
    "databases",
    "tools",
    "cloud",
    "methodologies",
]

_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s/$.?#][^\s]*$")


def coerce_layout(value: Any) -> LayoutType:
    """Map any value onto a LayoutType, falling back to classic."""
    if isinstance(value, LayoutType):
        return value
    try:
        return LayoutType(str(value).strip().lower())
    except ValueError:
        return DEFAULT_LAYOUT


def _validate_link(value: Optional[str]) -> str:
    """Links must be absolute URLs or empty."""
    value = (value or "").strip()
    if value and not _URL_RE.match(value):
        raise ValueError("Invalid URL")
    return value


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ==================== DOCUMENT MODEL ====================

class Contact(CamelModel):
    """Contact block shown in every header."""
    full_name: str = Field(..., min_length=1, description="Full name")
    title: str = ""
    phone: str = ""
    email: EmailStr
    location: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""

    @field_validator("linkedin", "github", "portfolio", mode="before")
    @classmethod
    def validate_links(cls, v):
        return _validate_link(v)

    def social_links(self) -> List[Dict[str, str]]:
        """Present social links in display order."""
        links = [
            ("LinkedIn", self.linkedin),
            ("GitHub", self.github),
            ("Portfolio", self.portfolio),
        ]
        return [{"label": label, "url": url} for label, url in links if url]


class Experience(CamelModel):
    """A position held."""
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = ""
    start_date: str = Field(..., min_length=1)
    end_date: str = "Present"
    achievements: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)

    @field_validator("end_date", mode="before")
    @classmethod
    def default_present(cls, v):
        return v or "Present"

    @field_validator("achievements", "technologies")
    @classmethod
    def drop_blank_items(cls, v):
        return [item.strip() for item in v if item and item.strip()]


class Project(CamelModel):
    """A project entry."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    technologies: List[str] = Field(default_factory=list)
    link: str = ""

    @field_validator("link", mode="before")
    @classmethod
    def validate_link(cls, v):
        return _validate_link(v)

    @field_validator("technologies")
    @classmethod
    def drop_blank_items(cls, v):
        return [item.strip() for item in v if item and item.strip()]


class Education(CamelModel):
    """A degree."""
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)


class Certification(CamelModel):
    """A certification with an optional credential reference."""
    name: str = Field(..., min_length=1)
    authority: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    credential_id: str = ""
    link: str = ""

    @property
    def issuer_line(self) -> str:
        """Authority, followed by the credential id when there is one."""
        if self.credential_id:
            return f"{self.authority} (ID: {self.credential_id})"
        return self.authority

    @field_validator("link", mode="before")
    @classmethod
    def validate_link(cls, v):
        return _validate_link(v)


class Document(CamelModel):
    """
    Complete resume content.

    Every list may be empty; renderers omit the matching section.
    Skills is a free-form ordered map of category key -> skill names.
    """
    layout: LayoutType = DEFAULT_LAYOUT
    contact: Contact
    summary: str = ""
    skills: Dict[str, List[str]] = Field(default_factory=dict)
    experience: List[Experience] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)

    @field_validator("layout", mode="before")
    @classmethod
    def fallback_layout(cls, v):
        return coerce_layout(v)

    @field_validator("summary", mode="before")
    @classmethod
    def strip_summary(cls, v):
        return (v or "").strip()

    @field_validator("skills", mode="before")
    @classmethod
    def clean_skills(cls, v):
        if not v:
            return {}
        return {
            key: [s.strip() for s in (values or []) if s and s.strip()]
            for key, values in v.items()
        }

    def has_skills(self) -> bool:
        return any(self.skills.values())

    def skill_groups(self) -> List[Dict[str, Any]]:
        """Non-empty skill categories with humanized labels, in input order."""
        return [
            {"key": key, "label": humanize_category(key), "skills": values}
            for key, values in self.skills.items()
            if values
        ]


def humanize_category(key: str) -> str:
    """'dataScience' -> 'Data Science', 'languages' -> 'Languages'."""
    spaced = re.sub(r"([A-Z])", r" \1", key)
    if spaced:
        spaced = spaced[0].upper() + spaced[1:]
    return spaced.strip()


# ==================== API SCHEMAS ====================

class ResumeCreate(CamelModel):
    """Schema for creating a resume."""
    title: str = Field(..., min_length=1, max_length=255)
    version_name: Optional[str] = Field(None, max_length=255)
    data: Document


class ResumeUpdate(CamelModel):
    """Schema for updating a resume (partial update)."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    version_name: Optional[str] = Field(None, max_length=255)
    data: Optional[Document] = None


class ResumeResponse(CamelModel):
    """Resume record as returned by the API."""
    id: str
    user_id: int
    title: str
    version_name: Optional[str] = None
    data: Document
    pdf_url: Optional[str] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class ExportRequest(CamelModel):
    """Client-rendered PDF upload."""
    pdf_base64: Optional[str] = None


class ExportResponse(CamelModel):
    """Result of a successful upload."""
    message: str
    pdf_url: str
    resume: ResumeResponse
