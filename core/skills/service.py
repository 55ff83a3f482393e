"""
Skill Catalog Service
Business logic for the autocomplete catalog.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .repository import SkillRepository, get_repository
from .schemas import (
    CategoryListResponse,
    CategorySkills,
    SkillAddResponse,
    SkillListResponse,
    SkillResponse,
    category_name,
    category_order,
)

logger = logging.getLogger(__name__)

# Path to the pre-built catalog
PREBUILT_DIR = Path(__file__).parent / "prebuilt"
CATALOG_FILE = PREBUILT_DIR / "catalog.json"


class SkillExistsError(ValueError):
    """An active skill with this name already exists in the category."""


class SkillService:
    """Service layer for the skill catalog."""

    def __init__(self, repository: Optional[SkillRepository] = None):
        """Initialize service."""
        self.repository = repository or get_repository()

    async def list_categories(self) -> CategoryListResponse:
        """All active categories with their active skills."""
        categories = [
            CategorySkills(
                id=category.id,
                name=category.name,
                key=category.key,
                description=category.description,
                skills=[s.name for s in skills],
                count=len(skills),
            )
            for category, skills in self.repository.list_categories_with_skills()
        ]
        return CategoryListResponse(categories=categories)

    async def list_skills(self, category_key: str) -> SkillListResponse:
        skills = self.repository.list_skills(category_key)
        return SkillListResponse(skills=[s.name for s in skills], count=len(skills))

    async def add_skill(self, skill_name: str, category_key: str) -> SkillAddResponse:
        """
        Add a skill, creating its category when needed.

        Raises:
            SkillExistsError: the skill is already active in the category
        """
        skill_name = skill_name.strip()
        category = self.repository.get_category(category_key)
        if not category:
            name = category_name(category_key)
            category = self.repository.create_category(
                key=category_key,
                name=name,
                description=f"Skills related to {name.lower()}",
                display_order=category_order(category_key),
            )

        existing = self.repository.find_skill(category.id, skill_name)
        if existing:
            if not existing.is_active:
                skill = self.repository.reactivate_skill(existing.id)
                return SkillAddResponse(
                    skill=SkillResponse.model_validate(skill.to_dict()),
                    message="Skill reactivated",
                )
            raise SkillExistsError("Skill already exists in this category")

        skill = self.repository.create_skill(category.id, skill_name)
        return SkillAddResponse(
            skill=SkillResponse.model_validate(skill.to_dict()),
            message="Skill added successfully",
        )

    async def record_usage(self, skills: List[str], category_key: Optional[str] = None) -> int:
        updated = self.repository.increment_usage(skills, category_key)
        logger.debug(f"Incremented usage for {updated} skills")
        return updated

    # ==================== PRE-BUILT CATALOG ====================

    def seed_if_empty(self, path: Union[str, Path] = CATALOG_FILE) -> int:
        """Load the prebuilt catalog into an empty database; returns skills added."""
        if self.repository.count_categories() > 0:
            return 0
        path = Path(path)
        if not path.exists():
            logger.warning(f"Skill catalog not found: {path}")
            return 0
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return self.repository.bulk_seed(data.get("categories", {}))


# ==================== SINGLETON ====================

_service: Optional[SkillService] = None


def get_skill_service() -> SkillService:
    """Get or create the global service instance."""
    global _service
    if _service is None:
        _service = SkillService()
    return _service
