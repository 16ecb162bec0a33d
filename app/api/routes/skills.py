"""
Skill catalog routes.

The catalog is static reference data, so these need no database or auth.
"""
from typing import Dict, List

from fastapi import APIRouter

from app.core.skills import AVAILABLE_SKILLS, SKILL_CATEGORIES

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("", response_model=List[str])
async def list_skills():
    """All predefined skills, in category order."""
    return AVAILABLE_SKILLS


@router.get("/categories", response_model=Dict[str, List[str]])
async def list_categories():
    """Predefined skills grouped by category."""
    return SKILL_CATEGORIES
