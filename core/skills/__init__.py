"""
Skill Catalog Module

Categories of skill names used for autocomplete in the resume editor.
An empty database is seeded from prebuilt/catalog.json at start-up.

Usage:
    from core.skills import get_skill_service

    service = get_skill_service()
    await service.list_skills("languages")
"""

from .models import Skill, SkillCategory
from .schemas import CATEGORY_NAMES, category_name, category_order
from .service import SkillExistsError, SkillService, get_skill_service

__all__ = [
    "CATEGORY_NAMES",
    "Skill",
    "SkillCategory",
    "SkillExistsError",
    "SkillService",
    "category_name",
    "category_order",
    "get_skill_service",
]
