"""
Skills API Router
Autocomplete catalog of skill names by category.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from api.rate_limiter import limiter, rate_limit_config
from core.auth import User, get_current_active_user
from core.skills.schemas import (
    SkillAdd,
    SkillAddResponse,
    SkillUsage,
)
from core.skills.service import SkillExistsError, SkillService, get_skill_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["Skills"])


def get_service() -> SkillService:
    """Get skill service instance."""
    return get_skill_service()


@router.get("", response_model=None)
@limiter.limit(rate_limit_config.get_limit("skills"))
async def list_skills(
    request: Request,
    category: Optional[str] = Query(None, description="Category key, e.g. languages"),
    service: SkillService = Depends(get_service),
):
    """
    Skills for autocomplete.

    - **category**: when given, that category's skills (most used first);
      otherwise every category with its skills
    """
    try:
        if category:
            result = await service.list_skills(category)
        else:
            result = await service.list_categories()
        return result.model_dump(by_alias=True)
    except Exception as e:
        logger.exception(f"Error fetching skills: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch skills")


@router.post("/add", response_model=SkillAddResponse)
async def add_skill(
    data: SkillAdd,
    user: User = Depends(get_current_active_user),
    service: SkillService = Depends(get_service),
):
    """
    Add a skill to the catalog.

    - **skillName**: Skill to add
    - **categoryKey**: Category key; unknown keys create a new category
    """
    if not (data.skill_name or "").strip() or not (data.category_key or "").strip():
        raise HTTPException(status_code=400, detail="Skill name and category are required")
    try:
        return await service.add_skill(data.skill_name, data.category_key.strip())
    except SkillExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception(f"Error adding skill: {e}")
        raise HTTPException(status_code=500, detail="Failed to add skill")


@router.post("/usage")
async def record_usage(
    data: SkillUsage,
    user: User = Depends(get_current_active_user),
    service: SkillService = Depends(get_service),
):
    """Count one use of each named skill."""
    updated = await service.record_usage(data.skills, data.category_key)
    return {"updated": updated}
