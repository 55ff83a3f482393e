"""
Resume Repository
Database access layer for resume records.

Every query is scoped to the owning user and to active (not soft-deleted)
rows.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings

from .models import Base, Resume, generate_uuid

logger = logging.getLogger(__name__)

_UNSET = object()


class ResumeRepository:
    """
    Repository for resume database operations.

    Handles CRUD, soft delete and PDF URL bookkeeping.
    """

    def __init__(self, db_path: Optional[str] = None):
        """Initialize repository with database path."""
        self.db_path = str(db_path or settings.resume_db_path)
        self._engine = None
        self._session_factory = None

    @property
    def engine(self):
        """Get or create SQLAlchemy engine."""
        if self._engine is None:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False}
            )
            Base.metadata.create_all(self._engine)
        return self._engine

    @property
    def session_factory(self):
        """Get session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.session_factory()

    # ==================== RESUME OPERATIONS ====================

    def create_resume(
        self,
        user_id: int,
        title: str,
        data: Dict[str, Any],
        version_name: Optional[str] = None,
        layout: Optional[str] = None,
    ) -> Resume:
        """Create a new resume."""
        with self.get_session() as session:
            resume = Resume(
                id=generate_uuid(),
                user_id=user_id,
                title=title,
                version_name=version_name,
                data=data,
                layout=layout or data.get("layout", "classic"),
            )
            session.add(resume)
            session.commit()
            session.refresh(resume)
            logger.info(f"Created resume: {resume.title} ({resume.id}) for user {user_id}")
            return resume

    def get_resume(self, resume_id: str, user_id: int) -> Optional[Resume]:
        """Get an active resume owned by user_id."""
        with self.get_session() as session:
            return session.query(Resume).filter(
                Resume.id == resume_id,
                Resume.user_id == user_id,
                Resume.is_active == True
            ).first()

    def list_resumes(self, user_id: int) -> List[Resume]:
        """Active resumes of a user, most recently updated first."""
        with self.get_session() as session:
            return session.query(Resume).filter(
                Resume.user_id == user_id,
                Resume.is_active == True
            ).order_by(Resume.updated_at.desc()).all()

    def update_resume(
        self,
        resume_id: str,
        user_id: int,
        title: Optional[str] = None,
        version_name: Any = _UNSET,
        data: Optional[Dict[str, Any]] = None,
        pdf_url: Optional[str] = None,
    ) -> Optional[Resume]:
        """Update the given fields; None arguments are left unchanged."""
        with self.get_session() as session:
            resume = session.query(Resume).filter(
                Resume.id == resume_id,
                Resume.user_id == user_id,
                Resume.is_active == True
            ).first()
            if not resume:
                return None

            if title is not None:
                resume.title = title
            if version_name is not _UNSET:
                resume.version_name = version_name
            if data is not None:
                resume.data = data
                resume.layout = data.get("layout", resume.layout)
            if pdf_url is not None:
                resume.pdf_url = pdf_url
            resume.updated_at = datetime.utcnow()

            session.commit()
            session.refresh(resume)
            logger.info(f"Updated resume: {resume.id}")
            return resume

    def delete_resume(self, resume_id: str, user_id: int) -> bool:
        """Soft delete a resume."""
        with self.get_session() as session:
            resume = session.query(Resume).filter(
                Resume.id == resume_id,
                Resume.user_id == user_id,
                Resume.is_active == True
            ).first()
            if not resume:
                return False

            resume.is_active = False
            resume.updated_at = datetime.utcnow()
            session.commit()
            logger.info(f"Deleted resume: {resume_id}")
            return True

    def count_resumes(self, user_id: int) -> int:
        with self.get_session() as session:
            return session.query(Resume).filter(
                Resume.user_id == user_id,
                Resume.is_active == True
            ).count()


# ==================== SINGLETON ====================

_repository: Optional[ResumeRepository] = None


def get_repository() -> ResumeRepository:
    """Get or create the global repository instance."""
    global _repository
    if _repository is None:
        _repository = ResumeRepository()
    return _repository
