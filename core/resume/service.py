"""
Resume Service
Business logic layer for resume operations.

Coordinates the repository, the HTML layouts, both PDF paths (direct-draw
vector generators and the raster exporter) and object storage.
"""
import asyncio
import base64
import binascii
import logging
import threading
import time
from contextlib import contextmanager
from typing import List, Optional, Tuple

from core.export import ExportError, export_document
from core.layouts import render_html
from core.pdf_generators import generate_pdf
from core.storage import StorageError, get_storage

from .repository import ResumeRepository, get_repository
from .schemas import (
    Document,
    ExportResponse,
    ResumeCreate,
    ResumeResponse,
    ResumeUpdate,
)

logger = logging.getLogger(__name__)

PDF_MODES = ("vector", "raster")
COPY_SUFFIX = " (Copy)"

STORAGE_NOT_CONFIGURED = "Failed to upload PDF. Storage not configured."
EXPORT_IN_PROGRESS = "An export for this resume is already in progress"


class ResumeNotFoundError(LookupError):
    """Resume missing, deleted or owned by someone else."""


class ExportInProgressError(RuntimeError):
    """A second export was requested while one is running."""


class StorageNotConfiguredError(RuntimeError):
    """Upload attempted without storage credentials."""


class ResumeService:
    """
    Service layer for resume operations.

    Every call is scoped to the owning user id.
    """

    def __init__(self, repository: Optional[ResumeRepository] = None, storage=None):
        """Initialize service."""
        self.repository = repository or get_repository()
        self._storage = storage
        self._exporting: set = set()
        self._lock = threading.Lock()

    @property
    def storage(self):
        if self._storage is None:
            self._storage = get_storage()
        return self._storage

    # ==================== CRUD ====================

    async def list_resumes(self, user_id: int) -> List[ResumeResponse]:
        """The user's active resumes, most recently updated first."""
        resumes = self.repository.list_resumes(user_id)
        return [ResumeResponse.model_validate(r.to_dict()) for r in resumes]

    async def create_resume(self, user_id: int, data: ResumeCreate) -> ResumeResponse:
        """Create a resume version."""
        resume = self.repository.create_resume(
            user_id=user_id,
            title=data.title,
            version_name=data.version_name,
            data=data.data.model_dump(mode="json", by_alias=True),
            layout=data.data.layout.value,
        )
        return ResumeResponse.model_validate(resume.to_dict())

    async def get_resume(self, user_id: int, resume_id: str) -> Optional[ResumeResponse]:
        """Get resume by ID."""
        resume = self.repository.get_resume(resume_id, user_id)
        if resume:
            return ResumeResponse.model_validate(resume.to_dict())
        return None

    async def update_resume(
        self,
        user_id: int,
        resume_id: str,
        data: ResumeUpdate,
    ) -> Optional[ResumeResponse]:
        """Partial update; only the fields present in the request change."""
        fields = data.model_fields_set
        kwargs = {}
        if "title" in fields and data.title is not None:
            kwargs["title"] = data.title
        if "version_name" in fields:
            kwargs["version_name"] = data.version_name
        if "data" in fields and data.data is not None:
            kwargs["data"] = data.data.model_dump(mode="json", by_alias=True)

        resume = self.repository.update_resume(resume_id, user_id, **kwargs)
        if resume:
            return ResumeResponse.model_validate(resume.to_dict())
        return None

    async def delete_resume(self, user_id: int, resume_id: str) -> bool:
        """Soft delete a resume."""
        return self.repository.delete_resume(resume_id, user_id)

    async def duplicate_resume(self, user_id: int, resume_id: str) -> Optional[ResumeResponse]:
        """Copy a resume as a new version with a " (Copy)" title."""
        source = self.repository.get_resume(resume_id, user_id)
        if not source:
            return None
        copy = self.repository.create_resume(
            user_id=user_id,
            title=f"{source.title}{COPY_SUFFIX}",
            version_name=source.version_name,
            data=dict(source.data),
            layout=source.layout,
        )
        logger.info(f"Duplicated resume {resume_id} as {copy.id}")
        return ResumeResponse.model_validate(copy.to_dict())

    # ==================== RENDERING ====================

    def _document(self, user_id: int, resume_id: str) -> Tuple[ResumeResponse, Document]:
        resume = self.repository.get_resume(resume_id, user_id)
        if not resume:
            raise ResumeNotFoundError(resume_id)
        response = ResumeResponse.model_validate(resume.to_dict())
        return response, response.data

    async def preview_html(self, user_id: int, resume_id: str, layout: Optional[str] = None) -> str:
        """HTML of the resume in its own layout or `layout`."""
        _, document = self._document(user_id, resume_id)
        return render_html(document, layout)

    def build_pdf(self, document: Document, mode: str = "vector", layout: Optional[str] = None) -> bytes:
        """
        Produce PDF bytes for a document.

        Args:
            document: Resume content
            mode: "vector" (direct-draw generators) or "raster" (bitmap export)
            layout: Layout override

        Raises:
            ValueError: unknown mode
            ExportError: raster export failed
        """
        if mode not in PDF_MODES:
            raise ValueError(f"Unknown PDF mode: {mode}. Use one of: {', '.join(PDF_MODES)}")
        if mode == "raster":
            return export_document(document, layout).pdf_bytes
        return generate_pdf(document, layout).to_bytes()

    async def render_pdf(
        self,
        user_id: int,
        resume_id: str,
        mode: str = "vector",
        layout: Optional[str] = None,
    ) -> Tuple[bytes, str]:
        """Render a stored resume; returns (pdf_bytes, download filename)."""
        resume, document = self._document(user_id, resume_id)
        with self._exclusive(resume_id):
            start = time.time()
            data = await self._in_executor(self.build_pdf, document, mode, layout)
        logger.info(
            f"Rendered {mode} PDF for resume {resume_id} "
            f"({len(data)} bytes in {time.time() - start:.2f}s)"
        )
        return data, download_filename(resume.title)

    # ==================== EXPORT / SHARE ====================

    async def export_upload(self, user_id: int, resume_id: str, pdf_base64: Optional[str]) -> ExportResponse:
        """
        Store a client-rendered PDF and remember its public URL.

        Raises:
            ResumeNotFoundError, ValueError (missing/invalid data),
            StorageNotConfiguredError, StorageError, ExportInProgressError
        """
        self._document(user_id, resume_id)
        if not pdf_base64:
            raise ValueError("PDF data is required")
        try:
            data = base64.b64decode(_strip_data_uri(pdf_base64), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("PDF data is not valid base64") from e

        with self._exclusive(resume_id):
            url = await self._in_executor(self._upload, resume_id, data)
        resume = self.repository.update_resume(resume_id, user_id, pdf_url=url)
        if not resume:
            raise ResumeNotFoundError(resume_id)
        logger.info(f"Exported resume {resume_id} to {url}")
        return ExportResponse(
            message="PDF exported successfully",
            pdf_url=url,
            resume=ResumeResponse.model_validate(resume.to_dict()),
        )

    async def share_resume(
        self,
        user_id: int,
        resume_id: str,
        mode: str = "raster",
        layout: Optional[str] = None,
    ) -> ExportResponse:
        """Render server-side, upload, and store the public URL."""
        _, document = self._document(user_id, resume_id)
        with self._exclusive(resume_id):
            data = await self._in_executor(self.build_pdf, document, mode, layout)
            url = await self._in_executor(self._upload, resume_id, data)
        resume = self.repository.update_resume(resume_id, user_id, pdf_url=url)
        if not resume:
            raise ResumeNotFoundError(resume_id)
        logger.info(f"Shared resume {resume_id} ({mode}) at {url}")
        return ExportResponse(
            message="PDF exported successfully",
            pdf_url=url,
            resume=ResumeResponse.model_validate(resume.to_dict()),
        )

    @staticmethod
    async def _in_executor(func, *args):
        # Rendering and uploads block; keep them off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def _upload(self, resume_id: str, data: bytes) -> str:
        filename = upload_filename(resume_id)
        url = self.storage.upload_pdf(data, filename)
        if url is None:
            raise StorageNotConfiguredError(STORAGE_NOT_CONFIGURED)
        return url

    @contextmanager
    def _exclusive(self, resume_id: str):
        with self._lock:
            if resume_id in self._exporting:
                raise ExportInProgressError(EXPORT_IN_PROGRESS)
            self._exporting.add(resume_id)
        try:
            yield
        finally:
            with self._lock:
                self._exporting.discard(resume_id)

    def is_exporting(self, resume_id: str) -> bool:
        with self._lock:
            return resume_id in self._exporting


def upload_filename(resume_id: str) -> str:
    """Object name for an upload: `{id}-{timestamp_ms}.pdf`."""
    return f"{resume_id}-{int(time.time() * 1000)}.pdf"


def download_filename(title: str) -> str:
    cleaned = "".join(c for c in (title or "") if c not in '\\/:*?"<>|\r\n').strip()
    return f"{cleaned or 'resume'}.pdf"


def _strip_data_uri(value: str) -> str:
    if value.startswith("data:"):
        return value.partition(",")[2]
    return value


# ==================== SINGLETON ====================

_service: Optional[ResumeService] = None


def get_resume_service() -> ResumeService:
    """Get or create the global service instance."""
    global _service
    if _service is None:
        _service = ResumeService()
    return _service


__all__ = [
    "ResumeService",
    "ResumeNotFoundError",
    "ExportInProgressError",
    "StorageNotConfiguredError",
    "StorageError",
    "ExportError",
    "get_resume_service",
    "upload_filename",
    "download_filename",
]
