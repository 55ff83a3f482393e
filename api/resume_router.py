"""
Resume API Router
FastAPI endpoints for resume versions, previews and PDF export.

Every route is scoped to the authenticated user.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, Response

from api.rate_limiter import limiter, rate_limit_config
from core.auth import User, get_current_active_user
from core.export import ExportError
from core.resume.schemas import (
    ExportRequest,
    ExportResponse,
    LayoutType,
    ResumeCreate,
    ResumeResponse,
    ResumeUpdate,
)
from core.resume.service import (
    ExportInProgressError,
    ResumeNotFoundError,
    ResumeService,
    StorageError,
    StorageNotConfiguredError,
    get_resume_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume", tags=["Resume"])

NOT_FOUND = "Resume not found"


def get_service() -> ResumeService:
    """Get resume service instance."""
    return get_resume_service()


def _raise_for(e: Exception, action: str):
    """Map service exceptions onto HTTP errors."""
    if isinstance(e, HTTPException):
        raise e
    if isinstance(e, ResumeNotFoundError):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    if isinstance(e, ExportInProgressError):
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, StorageNotConfiguredError):
        logger.error(f"Error {action}: storage not configured")
        raise HTTPException(status_code=500, detail=str(e))
    if isinstance(e, ExportError):
        raise HTTPException(status_code=500, detail=e.message)
    if isinstance(e, StorageError):
        logger.error(f"Error {action}: {e}")
        raise HTTPException(status_code=500, detail="Failed to upload PDF")
    if isinstance(e, ValueError):
        raise HTTPException(status_code=400, detail=str(e))
    logger.exception(f"Error {action}: {e}")
    raise HTTPException(status_code=500, detail=f"Failed to {action}")


# =============================================================================
# Resume CRUD
# =============================================================================

@router.get("", response_model=List[ResumeResponse])
async def list_resumes(
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """List the user's resumes, most recently updated first."""
    try:
        return await service.list_resumes(user.id)
    except Exception as e:
        _raise_for(e, "fetch resumes")


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def create_resume(
    data: ResumeCreate,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """
    Create a resume version.

    - **title**: Resume title (also the download filename)
    - **versionName**: Optional label for this version
    - **data**: The full resume document
    """
    try:
        return await service.create_resume(user.id, data)
    except Exception as e:
        _raise_for(e, "create resume")


@router.get("/{resume_id}", response_model=ResumeResponse)
async def get_resume(
    resume_id: str,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """Get resume by ID."""
    resume = await service.get_resume(user.id, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return resume


@router.patch("/{resume_id}", response_model=ResumeResponse)
async def update_resume(
    resume_id: str,
    data: ResumeUpdate,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """
    Update a resume. Only the fields sent are changed.

    - **title**: New title
    - **versionName**: New version label (null clears it)
    - **data**: Replacement document
    """
    try:
        resume = await service.update_resume(user.id, resume_id, data)
    except Exception as e:
        _raise_for(e, "update resume")
    if not resume:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return resume


@router.delete("/{resume_id}")
async def delete_resume(
    resume_id: str,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """Soft delete a resume."""
    success = await service.delete_resume(user.id, resume_id)
    if not success:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Resume deleted successfully"}


@router.post("/{resume_id}/duplicate", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_resume(
    resume_id: str,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """Copy a resume as a new version."""
    resume = await service.duplicate_resume(user.id, resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return resume


# =============================================================================
# Preview & PDF
# =============================================================================

@router.get("/{resume_id}/preview", response_class=HTMLResponse)
async def preview_resume(
    resume_id: str,
    layout: Optional[LayoutType] = Query(None, description="Layout override"),
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """HTML preview in the resume's layout, or in `layout`."""
    try:
        html = await service.preview_html(user.id, resume_id, layout)
    except Exception as e:
        _raise_for(e, "render preview")
    return HTMLResponse(content=html)


@router.get("/{resume_id}/pdf")
@limiter.limit(rate_limit_config.get_limit("export"))
async def download_pdf(
    request: Request,
    resume_id: str,
    mode: str = Query("vector", description="vector (direct-draw) or raster (bitmap)"),
    layout: Optional[LayoutType] = Query(None, description="Layout override"),
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """
    Render the resume server-side and download it.

    - **mode**: `vector` draws text and shapes directly; `raster` captures the
      HTML layout as one bitmap page with clickable links
    - **layout**: Layout override (defaults to the resume's own)
    """
    try:
        data, filename = await service.render_pdf(user.id, resume_id, mode, layout)
    except Exception as e:
        _raise_for(e, "export PDF")
    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Export & Share
# =============================================================================

@router.post("/{resume_id}/export", response_model=ExportResponse)
@limiter.limit(rate_limit_config.get_limit("export"))
async def export_resume(
    request: Request,
    resume_id: str,
    data: ExportRequest,
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """
    Upload a client-rendered PDF and store its public URL.

    - **pdfBase64**: The PDF file, base64 encoded (a data: URI is accepted)
    """
    try:
        return await service.export_upload(user.id, resume_id, data.pdf_base64)
    except Exception as e:
        _raise_for(e, "export PDF")


@router.post("/{resume_id}/share", response_model=ExportResponse)
@limiter.limit(rate_limit_config.get_limit("export"))
async def share_resume(
    request: Request,
    resume_id: str,
    mode: str = Query("raster", description="vector or raster"),
    layout: Optional[LayoutType] = Query(None, description="Layout override"),
    user: User = Depends(get_current_active_user),
    service: ResumeService = Depends(get_service),
):
    """Render server-side, upload, and store the public URL."""
    try:
        return await service.share_resume(user.id, resume_id, mode, layout)
    except Exception as e:
        _raise_for(e, "share resume")
