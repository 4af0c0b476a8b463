"""Pydantic models for the resume wizard's working document."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Final, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CEFR_LEVELS: Final[tuple[str, ...]] = ("A1", "A2", "B1", "B2", "C1", "C2")


def new_item_id() -> str:
    """Return a fresh client-side identifier for a list entry."""

    return uuid4().hex


def _coerce_text(value: object) -> object:
    """Turn numbers into strings so free-text widgets never fail validation."""

    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


Text = Annotated[Optional[str], BeforeValidator(_coerce_text)]
ItemId = Union[str, int]
YearsValue = Union[int, float, str, None]


class WizardModel(BaseModel):
    """Base model: snake_case attributes, camelCase working shape, extras kept."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def extras(self) -> dict[str, Any]:
        """Return fields the wizard does not model explicitly."""

        return dict(self.model_extra or {})


class PersonalInfo(WizardModel):
    """Contact and headline data shown on the first wizard step."""

    first_name: Text = None
    last_name: Text = None
    email: Text = None
    phone: Text = None
    birth_date: Text = None
    city: Text = None
    country: Text = None
    linkedin_url: Text = None
    website_url: Text = None
    current_position: Text = None
    profile_summary: Text = None
    seniority_level: Text = None
    work_field: Text = None
    years_of_experience: YearsValue = None


class ExperienceItem(WizardModel):
    """A career or volunteering position; ``is_volunteer`` tells them apart."""

    id: ItemId = Field(default_factory=new_item_id)
    title: Text = None
    company: Text = None
    seniority_level: Text = None
    city: Text = None
    country: Text = None
    start_date: Text = None
    end_date: Text = None
    currently_working: Optional[bool] = None
    description: Text = None
    is_volunteer: bool = False
    work_type: Text = None
    work_model: Text = None


class EducationItem(WizardModel):
    id: ItemId = Field(default_factory=new_item_id)
    institution: Text = None
    degree: Text = None
    field: Text = None
    start_date: Text = None
    end_date: Text = None
    currently_studying: Optional[bool] = None
    description: Text = None


class SkillItem(WizardModel):
    """A technical or soft skill; ``is_soft_skill`` tells them apart."""

    id: ItemId = Field(default_factory=new_item_id)
    name: Text = None
    level: Optional[int] = None
    proficiency: Text = None
    is_soft_skill: bool = False


class LanguageItem(WizardModel):
    id: ItemId = Field(default_factory=new_item_id)
    name: Text = None
    proficiency: Text = None
    is_native: Optional[bool] = None


class CertificateItem(WizardModel):
    id: ItemId = Field(default_factory=new_item_id)
    name: Text = None
    organization: Text = None
    issue_date: Text = None
    certificate_url: Text = None
    description: Text = None


class LinkItem(WizardModel):
    id: ItemId = Field(default_factory=new_item_id)
    website_name: Text = None
    website_url: Text = None


class PersonalProjectItem(WizardModel):
    id: ItemId = Field(default_factory=new_item_id)
    title: Text = None
    description: Text = None
    technologies: List[str] = Field(default_factory=list)
    start_date: Text = None
    end_date: Text = None
    is_ongoing: Optional[bool] = None
    live_url: Text = None
    project_url: Text = None

    @field_validator("technologies", mode="before")
    @classmethod
    def _coerce_technologies(cls, value: object) -> object:
        """Accept a comma separated string or ``None`` for the technology list."""

        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class WorkingDocument(WizardModel):
    """The UI-shaped resume draft the wizard edits step by step."""

    personal_info: Optional[PersonalInfo] = None
    experience: List[ExperienceItem] = Field(default_factory=list)
    education: List[EducationItem] = Field(default_factory=list)
    skills: List[SkillItem] = Field(default_factory=list)
    languages: List[LanguageItem] = Field(default_factory=list)
    certificates: List[CertificateItem] = Field(default_factory=list)
    links: List[LinkItem] = Field(default_factory=list)
    personal_projects: List[PersonalProjectItem] = Field(default_factory=list)
    selected_template: Text = None
    resume_name: Text = None

    @field_validator(
        "experience",
        "education",
        "skills",
        "languages",
        "certificates",
        "links",
        "personal_projects",
        mode="before",
    )
    @classmethod
    def _none_as_empty_list(cls, value: object) -> object:
        """Absent and empty lists are the same thing for the wizard."""

        if value is None:
            return []
        return value

    @classmethod
    def field_name_for(cls, key: str) -> str:
        """Resolve a camelCase alias or snake_case name to the attribute name."""

        for name, info in cls.model_fields.items():
            if key == name or key == info.alias:
                return name
        return key

    def merged(self, partial: Mapping[str, Any] | "WorkingDocument") -> "WorkingDocument":
        """Return a copy of the document with ``partial`` applied on top."""

        if isinstance(partial, WorkingDocument):
            updates: dict[str, Any] = {name: getattr(partial, name) for name in partial.model_fields_set}
        else:
            updates = {self.field_name_for(str(key)): value for key, value in partial.items()}
        current: dict[str, Any] = {name: getattr(self, name) for name in type(self).model_fields}
        current.update(self.extras())
        current.update(updates)
        return type(self).model_validate(current)

    def touched_fields(self, partial: Mapping[str, Any] | "WorkingDocument") -> tuple[str, ...]:
        """Return the attribute names ``partial`` would change."""

        if isinstance(partial, WorkingDocument):
            return tuple(sorted(partial.model_fields_set))
        return tuple(self.field_name_for(str(key)) for key in partial)


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
    "Text",
    "WizardModel",
    "WorkingDocument",
    "new_item_id",
]
