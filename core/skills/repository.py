"""
Skill Catalog Repository
Database access layer for skill categories and skills.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings

from .models import Base, Skill, SkillCategory

logger = logging.getLogger(__name__)


class SkillRepository:
    """Repository for skill catalog operations."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize repository with database path."""
        self.db_path = str(db_path or settings.skills_db_path)
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

    # ==================== CATEGORY OPERATIONS ====================

    def get_category(self, key: str) -> Optional[SkillCategory]:
        """Category by key, active or not."""
        with self.get_session() as session:
            return session.query(SkillCategory).filter(SkillCategory.key == key).first()

    def create_category(
        self,
        key: str,
        name: str,
        description: Optional[str] = None,
        display_order: int = 99,
    ) -> SkillCategory:
        with self.get_session() as session:
            category = SkillCategory(
                key=key,
                name=name,
                description=description,
                display_order=display_order,
            )
            session.add(category)
            session.commit()
            session.refresh(category)
            logger.info(f"Created skill category: {key} ({name})")
            return category

    def list_categories_with_skills(self) -> List[Tuple[SkillCategory, List[Skill]]]:
        """Active categories by display order, each with its active skills."""
        with self.get_session() as session:
            categories = session.query(SkillCategory).filter(
                SkillCategory.is_active == True
            ).order_by(SkillCategory.display_order.asc(), SkillCategory.name.asc()).all()

            result = []
            for category in categories:
                skills = session.query(Skill).filter(
                    Skill.category_id == category.id,
                    Skill.is_active == True
                ).order_by(Skill.usage_count.desc(), Skill.name.asc()).all()
                result.append((category, skills))
            return result

    def count_categories(self) -> int:
        with self.get_session() as session:
            return session.query(SkillCategory).count()

    # ==================== SKILL OPERATIONS ====================

    def list_skills(self, category_key: str) -> List[Skill]:
        """Active skills of a category, most used first, then by name."""
        with self.get_session() as session:
            return session.query(Skill).join(SkillCategory).filter(
                SkillCategory.key == category_key,
                Skill.is_active == True
            ).order_by(Skill.usage_count.desc(), Skill.name.asc()).all()

    def find_skill(self, category_id: str, name: str) -> Optional[Skill]:
        with self.get_session() as session:
            return session.query(Skill).filter(
                Skill.category_id == category_id,
                Skill.name == name
            ).first()

    def create_skill(self, category_id: str, name: str, usage_count: int = 0) -> Skill:
        with self.get_session() as session:
            skill = Skill(category_id=category_id, name=name, usage_count=usage_count)
            session.add(skill)
            session.commit()
            session.refresh(skill)
            logger.info(f"Added skill: {name} ({category_id})")
            return skill

    def reactivate_skill(self, skill_id: str) -> Optional[Skill]:
        with self.get_session() as session:
            skill = session.query(Skill).filter(Skill.id == skill_id).first()
            if not skill:
                return None
            skill.is_active = True
            session.commit()
            session.refresh(skill)
            logger.info(f"Reactivated skill: {skill.name}")
            return skill

    def increment_usage(self, names: Iterable[str], category_key: Optional[str] = None) -> int:
        """Bump usage_count of matching active skills; returns rows updated."""
        names = [n for n in names if n]
        if not names:
            return 0
        with self.get_session() as session:
            query = session.query(Skill).join(SkillCategory).filter(
                Skill.name.in_(names),
                Skill.is_active == True
            )
            if category_key:
                query = query.filter(SkillCategory.key == category_key)
            skills = query.all()
            for skill in skills:
                skill.usage_count = (skill.usage_count or 0) + 1
            session.commit()
            return len(skills)

    def bulk_seed(self, catalog: Dict[str, Dict]) -> int:
        """
        Insert categories and skills from a catalog mapping in one transaction.

        catalog: {key: {"name": ..., "description": ..., "skills": [...]}}
        """
        added = 0
        with self.get_session() as session:
            for order, (key, entry) in enumerate(catalog.items(), start=1):
                category = SkillCategory(
                    key=key,
                    name=entry.get("name", key),
                    description=entry.get("description"),
                    display_order=entry.get("displayOrder", order),
                )
                session.add(category)
                session.flush()
                seen = set()
                for name in entry.get("skills", []):
                    if name in seen:
                        continue
                    seen.add(name)
                    session.add(Skill(category_id=category.id, name=name))
                    added += 1
            session.commit()
        logger.info(f"Seeded {len(catalog)} skill categories with {added} skills")
        return added


# ==================== SINGLETON ====================

_repository: Optional[SkillRepository] = None


def get_repository() -> SkillRepository:
    """Get or create the global repository instance."""
    global _repository
    if _repository is None:
        _repository = SkillRepository()
    return _repository
