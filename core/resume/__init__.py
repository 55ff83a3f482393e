"""
Resume domain: document model, section rules, persistence and service.

The service and repository are imported from their modules directly
(core.resume.service, core.resume.repository) since they depend on the
renderers, which themselves depend on the schemas exported here.
"""

from .schemas import (
    DEFAULT_LAYOUT,
    Certification,
    Contact,
    Document,
    Education,
    Experience,
    LayoutType,
    Project,
    coerce_layout,
    humanize_category,
)

__all__ = [
    "DEFAULT_LAYOUT",
    "Certification",
    "Contact",
    "Document",
    "Education",
    "Experience",
    "LayoutType",
    "Project",
    "coerce_layout",
    "humanize_category",
]
