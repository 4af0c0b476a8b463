"""Per-step validators for the resume working document.

Every validator is a pure function ``(WorkingDocument) -> list[Violation]``.
Violations come out in document order (list entries first to last, then the
field order of each entry) and carry the step they belong to, so nothing
downstream has to guess the step from the message text.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from pydantic import EmailStr, ValidationError
from pydantic.type_adapter import TypeAdapter

import config
from constants.keys import StepIds
from models.resume import CEFR_LEVELS, WizardModel, WorkingDocument
from wizard.date_utils import is_valid_date_value

_EMAIL_ADAPTER: Final[TypeAdapter[EmailStr]] = TypeAdapter(EmailStr)

LOCAL_SOURCE: Final[str] = "local"
SERVER_SOURCE: Final[str] = "server"


@dataclass(frozen=True)
class Violation:
    """One unmet validation rule, tagged with the step it belongs to.

    ``step_id`` is ``None`` only for server errors whose field path could not
    be attributed to any step.
    """

    step_id: str | None
    field: str | None
    message: str
    source: str = LOCAL_SOURCE
    field_path: str | None = None

    def __str__(self) -> str:
        return self.message


DocumentValidator = Callable[[WorkingDocument], list[Violation]]


def is_blank(value: Any) -> bool:
    """Return ``True`` when ``value`` should be treated as missing."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _whole_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return int(parsed) if parsed.is_integer() else None
    return None


def _require(
    violations: list[Violation],
    item: WizardModel | None,
    *,
    step_id: str,
    fields: Sequence[tuple[str, str]],
    prefix: str = "",
) -> None:
    for name, label in fields:
        value = getattr(item, name, None) if item is not None else None
        if is_blank(value):
            text = f"{prefix}{label} is required" if prefix else f"{label[:1].upper()}{label[1:]} is required"
            violations.append(Violation(step_id=step_id, field=name, message=text))


def _check_date(
    violations: list[Violation],
    item: WizardModel,
    name: str,
    label: str,
    *,
    step_id: str,
    prefix: str,
) -> None:
    value = getattr(item, name, None)
    if not is_blank(value) and not is_valid_date_value(value):
        violations.append(Violation(step_id=step_id, field=name, message=f"{prefix}{label} must be a valid date"))


_PERSONAL_REQUIRED: Final[tuple[tuple[str, str], ...]] = (
    ("first_name", "first name"),
    ("last_name", "last name"),
    ("email", "email"),
    ("phone", "phone"),
    ("birth_date", "birth date"),
)


def validate_personal_info(document: WorkingDocument) -> list[Violation]:
    """Require the contact basics and sanity-check the optional numbers."""

    step_id = StepIds.PERSONAL
    info = document.personal_info
    violations: list[Violation] = []
    _require(violations, info, step_id=step_id, fields=_PERSONAL_REQUIRED)
    if info is None:
        return violations

    if not is_blank(info.email):
        try:
            _EMAIL_ADAPTER.validate_python(str(info.email).strip())
        except (ValidationError, TypeError):
            violations.append(Violation(step_id=step_id, field="email", message="Email must be a valid email address"))
    if not is_blank(info.birth_date) and not is_valid_date_value(info.birth_date):
        violations.append(Violation(step_id=step_id, field="birth_date", message="Birth date must be a valid date"))
    if not is_blank(info.years_of_experience):
        years = _whole_number(info.years_of_experience)
        low, high = config.MIN_YEARS_OF_EXPERIENCE, config.MAX_YEARS_OF_EXPERIENCE
        if years is None or not low <= years <= high:
            violations.append(
                Violation(
                    step_id=step_id,
                    field="years_of_experience",
                    message=f"Years of experience must be a whole number between {low} and {high}",
                )
            )
    return violations


def validate_experience(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.EXPERIENCE
    if not document.experience:
        return [Violation(step_id=step_id, field=None, message="At least one experience entry is required")]
    violations: list[Violation] = []
    for index, item in enumerate(document.experience, start=1):
        prefix = f"Experience {index}: "
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=prefix,
            fields=(
                ("title", "job title"),
                ("company", "company"),
                ("seniority_level", "seniority level"),
                ("start_date", "start date"),
            ),
        )
        _check_date(violations, item, "start_date", "start date", step_id=step_id, prefix=prefix)
        if item.currently_working is None:
            violations.append(
                Violation(
                    step_id=step_id,
                    field="currently_working",
                    message=f"{prefix}specify whether you currently work here",
                )
            )
        elif not item.currently_working:
            _require(
                violations,
                item,
                step_id=step_id,
                prefix=prefix,
                fields=(("end_date", "end date"),),
            )
            _check_date(violations, item, "end_date", "end date", step_id=step_id, prefix=prefix)
    return violations


def validate_education(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.EDUCATION
    if not document.education:
        return [Violation(step_id=step_id, field=None, message="At least one education entry is required")]
    violations: list[Violation] = []
    for index, item in enumerate(document.education, start=1):
        prefix = f"Education {index}: "
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=prefix,
            fields=(
                ("institution", "institution"),
                ("degree", "degree"),
                ("field", "field of study"),
                ("start_date", "start date"),
            ),
        )
        _check_date(violations, item, "start_date", "start date", step_id=step_id, prefix=prefix)
        if not item.currently_studying:
            if is_blank(item.end_date):
                violations.append(
                    Violation(
                        step_id=step_id,
                        field="end_date",
                        message=f"{prefix}end date is required unless you are currently studying",
                    )
                )
            else:
                _check_date(violations, item, "end_date", "end date", step_id=step_id, prefix=prefix)
    return violations


def validate_skills(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.SKILLS
    if not document.skills:
        return [Violation(step_id=step_id, field=None, message="At least one skill is required")]
    violations: list[Violation] = []
    for index, item in enumerate(document.skills, start=1):
        _require(violations, item, step_id=step_id, prefix=f"Skill {index}: ", fields=(("name", "name"),))
    return violations


def validate_languages(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.LANGUAGES
    if not document.languages:
        return [Violation(step_id=step_id, field=None, message="At least one language is required")]
    violations: list[Violation] = []
    for index, item in enumerate(document.languages, start=1):
        prefix = f"Language {index}: "
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=prefix,
            fields=(("name", "name"), ("proficiency", "proficiency")),
        )
        if not is_blank(item.proficiency) and str(item.proficiency).strip().upper() not in CEFR_LEVELS:
            violations.append(
                Violation(
                    step_id=step_id,
                    field="proficiency",
                    message=f"{prefix}proficiency must be one of {', '.join(CEFR_LEVELS)}",
                )
            )
    return violations


def validate_certificates(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.CERTIFICATES
    violations: list[Violation] = []
    for index, item in enumerate(document.certificates, start=1):
        prefix = f"Certificate {index}: "
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=prefix,
            fields=(
                ("name", "name"),
                ("organization", "issuing organization"),
                ("issue_date", "issue date"),
            ),
        )
        _check_date(violations, item, "issue_date", "issue date", step_id=step_id, prefix=prefix)
    return violations


def validate_links(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.LINKS
    violations: list[Violation] = []
    for index, item in enumerate(document.links, start=1):
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=f"Link {index}: ",
            fields=(("website_name", "website name"), ("website_url", "website URL")),
        )
    return violations


def validate_personal_projects(document: WorkingDocument) -> list[Violation]:
    step_id = StepIds.PERSONAL_PROJECTS
    violations: list[Violation] = []
    for index, item in enumerate(document.personal_projects, start=1):
        _require(
            violations,
            item,
            step_id=step_id,
            prefix=f"Project {index}: ",
            fields=(("title", "title"), ("description", "description")),
        )
    return violations


def validate_template(document: WorkingDocument) -> list[Violation]:
    if is_blank(document.selected_template):
        return [
            Violation(
                step_id=StepIds.TEMPLATE,
                field="selected_template",
                message="Please select a resume template",
            )
        ]
    return []


DOMAIN_VALIDATORS: Final[dict[str, DocumentValidator]] = {
    StepIds.PERSONAL: validate_personal_info,
    StepIds.EXPERIENCE: validate_experience,
    StepIds.EDUCATION: validate_education,
    StepIds.SKILLS: validate_skills,
    StepIds.LANGUAGES: validate_languages,
    StepIds.CERTIFICATES: validate_certificates,
    StepIds.LINKS: validate_links,
    StepIds.PERSONAL_PROJECTS: validate_personal_projects,
    StepIds.TEMPLATE: validate_template,
}


__all__ = [
    "DOMAIN_VALIDATORS",
    "DocumentValidator",
    "LOCAL_SOURCE",
    "SERVER_SOURCE",
    "Violation",
    "is_blank",
    "validate_certificates",
    "validate_education",
    "validate_experience",
    "validate_languages",
    "validate_links",
    "validate_personal_info",
    "validate_personal_projects",
    "validate_skills",
    "validate_template",
]
