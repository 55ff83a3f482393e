"""
Section presence rules shared by every HTML layout and PDF generator.

A section is drawn only when it has content; an empty list never produces
an empty heading.
"""
from typing import Iterable, List

from .schemas import Document

SUMMARY = "summary"
SKILLS = "skills"
EXPERIENCE = "experience"
PROJECTS = "projects"
EDUCATION = "education"
CERTIFICATIONS = "certifications"

SECTION_KEYS = (SUMMARY, SKILLS, EXPERIENCE, PROJECTS, EDUCATION, CERTIFICATIONS)


def section_present(document: Document, key: str) -> bool:
    """True if the section has anything to show."""
    if key == SUMMARY:
        return bool(document.summary)
    if key == SKILLS:
        return document.has_skills()
    if key in (EXPERIENCE, PROJECTS, EDUCATION, CERTIFICATIONS):
        return bool(getattr(document, key))
    raise ValueError(f"Unknown section: {key}")


def present_sections(document: Document, order: Iterable[str] = SECTION_KEYS) -> List[str]:
    """Keys of the non-empty sections, in the given order."""
    return [key for key in order if section_present(document, key)]
