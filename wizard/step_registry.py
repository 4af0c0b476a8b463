"""Registry for wizard steps, metadata, and canonical order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from constants.keys import StepIds


class StepDomain(StrEnum):
    """Data slice of the working document a step edits."""

    PERSONAL = StepIds.PERSONAL
    EXPERIENCE = StepIds.EXPERIENCE
    EDUCATION = StepIds.EDUCATION
    SKILLS = StepIds.SKILLS
    LANGUAGES = StepIds.LANGUAGES
    CERTIFICATES = StepIds.CERTIFICATES
    LINKS = StepIds.LINKS
    PERSONAL_PROJECTS = StepIds.PERSONAL_PROJECTS
    TEMPLATE = StepIds.TEMPLATE
    PREVIEW = StepIds.PREVIEW


@dataclass(frozen=True)
class StepDescriptor:
    """Metadata for an individual wizard step. ``ordinal`` is also its index."""

    id: str
    title: str
    domain: StepDomain
    ordinal: int
    description: str = ""


def _build_registry(*entries: tuple[StepDomain, str, str]) -> tuple[StepDescriptor, ...]:
    return tuple(
        StepDescriptor(id=str(domain), title=title, domain=domain, ordinal=index, description=description)
        for index, (domain, title, description) in enumerate(entries)
    )


WIZARD_STEPS: Final[tuple[StepDescriptor, ...]] = _build_registry(
    (StepDomain.PERSONAL, "Personal Info", "Add your personal information"),
    (StepDomain.EXPERIENCE, "Experience", "Add your work experience"),
    (StepDomain.EDUCATION, "Education", "Add your educational background"),
    (StepDomain.SKILLS, "Skills", "List your technical and soft skills"),
    (StepDomain.LANGUAGES, "Languages", "Add languages you speak"),
    (StepDomain.CERTIFICATES, "Certificates", "Add your certifications"),
    (StepDomain.LINKS, "Links", "Add your online profiles and websites"),
    (StepDomain.PERSONAL_PROJECTS, "Personal Projects", "Showcase your projects"),
    (StepDomain.TEMPLATE, "Choose Template", "Select your resume template"),
    (StepDomain.PREVIEW, "Preview & Generate", "Review and generate your resume"),
)

_STEPS_BY_ID: Final[dict[str, StepDescriptor]] = {step.id: step for step in WIZARD_STEPS}


def step_ids() -> tuple[str, ...]:
    """Return wizard step ids in canonical order."""

    return tuple(step.id for step in WIZARD_STEPS)


def get_step(step_id: str) -> StepDescriptor | None:
    """Lookup step metadata by id."""

    return _STEPS_BY_ID.get(step_id)


def get_step_by_ordinal(ordinal: int) -> StepDescriptor:
    """Return the descriptor at ``ordinal`` after clamping it into range."""

    return WIZARD_STEPS[clamp_ordinal(ordinal)]


def last_ordinal() -> int:
    return len(WIZARD_STEPS) - 1


def clamp_ordinal(ordinal: int) -> int:
    """Clamp ``ordinal`` to ``[0, last_ordinal()]``."""

    return max(0, min(int(ordinal), last_ordinal()))


__all__ = [
    "StepDescriptor",
    "StepDomain",
    "WIZARD_STEPS",
    "clamp_ordinal",
    "get_step",
    "get_step_by_ordinal",
    "last_ordinal",
    "step_ids",
]
