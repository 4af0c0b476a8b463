"""Pydantic models for the resume wizard's working document."""

from .resume import (
    CEFR_LEVELS,
    CertificateItem,
    EducationItem,
    ExperienceItem,
    LanguageItem,
    LinkItem,
    PersonalInfo,
    PersonalProjectItem,
    SkillItem,
    WorkingDocument,
    new_item_id,
)

__all__ = [
    "CEFR_LEVELS",
    "CertificateItem",
    "EducationItem",
    "ExperienceItem",
    "LanguageItem",
    "LinkItem",
    "PersonalInfo",
    "PersonalProjectItem",
    "SkillItem",
    "WorkingDocument",
    "new_item_id",
]
