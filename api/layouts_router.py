"""
Layouts API Router
"""
from fastapi import APIRouter

from core.layouts import list_layouts
from core.resume.schemas import DEFAULT_LAYOUT

router = APIRouter(prefix="/api/layouts", tags=["Layouts"])


@router.get("")
async def get_layouts():
    """The six resume layouts with display metadata."""
    return {"layouts": list_layouts(), "default": DEFAULT_LAYOUT.value}
