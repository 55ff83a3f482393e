"""
Skill Catalog Pydantic Schemas
"""
import re
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# ==================== CONSTANTS ====================

# Fixed display names; position + 1 is the display order of a new category.
CATEGORY_NAMES = {
    "languages": "Programming Languages",
    "frameworks": "Frameworks & Libraries",
    "databases": "Databases & ORMs",
    "tools": "Tools & Technologies",
    "cloud": "Cloud Platforms",
    "methodologies": "Methodologies & Practices",
    "dataScience": "Data Science & ML",
    "blockchain": "Blockchain",
    "security": "Security",
    "mobile": "Mobile Development",
    "uiux": "UI/UX Design",
}

UNLISTED_ORDER = 99


def category_name(key: str) -> str:
    """Display name for a category key: fixed map, else 'dataOps' -> 'Data Ops'."""
    if key in CATEGORY_NAMES:
        return CATEGORY_NAMES[key]
    spaced = re.sub(r"([A-Z])", r" \1", key)
    return (spaced[:1].upper() + spaced[1:]).strip()


def category_order(key: str) -> int:
    keys = list(CATEGORY_NAMES)
    return keys.index(key) + 1 if key in keys else UNLISTED_ORDER


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ==================== REQUESTS ====================

class SkillAdd(CamelModel):
    """Both fields are checked in the router so a missing one answers 400."""
    skill_name: Optional[str] = None
    category_key: Optional[str] = None


class SkillUsage(CamelModel):
    skills: List[str] = Field(default_factory=list)
    category_key: Optional[str] = None


# ==================== RESPONSES ====================

class SkillResponse(CamelModel):
    id: str
    name: str
    category_id: str
    usage_count: int = 0
    is_active: bool = True


class SkillAddResponse(CamelModel):
    skill: SkillResponse
    message: str


class CategorySkills(CamelModel):
    """A category with its active skill names."""
    id: str
    name: str
    key: str
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    count: int = 0


class CategoryListResponse(CamelModel):
    categories: List[CategorySkills]


class SkillListResponse(CamelModel):
    skills: List[str]
    count: int
