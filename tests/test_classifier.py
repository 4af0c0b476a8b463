from __future__ import annotations

import pytest

from constants.keys import StepIds
from core.validation import validate_all
from core.validators import SERVER_SOURCE, Violation
from models.resume import WorkingDocument
from wizard.classifier import (
    classify_local_message,
    classify_server_field_path,
    classify_step_id,
    classify_violation,
    find_first_step_with_errors,
    group_errors_by_step,
    normalize_classifier_text,
    violation_from_field_error,
)
from wizard.step_registry import get_step


def _ordinal(step_id: str) -> int:
    step = get_step(step_id)
    assert step is not None
    return step.ordinal


def test_normalize_classifier_text() -> None:
    assert normalize_classifier_text("career_experiences[0].startDate") == "career experiences start date"
    assert normalize_classifier_text("  Personal-Info/Email ") == "personal info email"


@pytest.mark.parametrize(
    ("path", "step_id"),
    [
        ("career_experiences[0].title", StepIds.EXPERIENCE),
        ("career_experiences[0].company", StepIds.EXPERIENCE),
        ("volunteering_experiences[1].start_date", StepIds.EXPERIENCE),
        ("personal_info.first_name", StepIds.PERSONAL),
        ("personal_info.years_of_experience", StepIds.PERSONAL),
        ("education[0].institution", StepIds.EDUCATION),
        ("technical_skills[2].name", StepIds.SKILLS),
        ("soft_skills[0].name", StepIds.SKILLS),
        ("languages[0].proficiency", StepIds.LANGUAGES),
        ("certifications[0].issuing_organization", StepIds.CERTIFICATES),
        ("personal_links[0].website_url", StepIds.LINKS),
        ("personal_projects[0].title", StepIds.PERSONAL_PROJECTS),
        ("title", StepIds.EXPERIENCE),
        ("email", StepIds.PERSONAL),
    ],
)
def test_classify_server_field_path(path: str, step_id: str) -> None:
    assert classify_server_field_path(path) == _ordinal(step_id)


def test_unknown_paths_are_unclassified() -> None:
    assert classify_server_field_path("general") is None
    assert classify_server_field_path("") is None
    assert classify_step_id("something odd happened") is None


@pytest.mark.parametrize(
    ("message", "step_id"),
    [
        ("First name is required", StepIds.PERSONAL),
        ("Years of experience must be a whole number between 0 and 50", StepIds.PERSONAL),
        ("Experience 2: seniority level is required", StepIds.EXPERIENCE),
        ("Education 1: field of study is required", StepIds.EDUCATION),
        ("Project 1: description is required", StepIds.PERSONAL_PROJECTS),
        ("Certificate 1: issue date is required", StepIds.CERTIFICATES),
        ("Link 1: website URL is required", StepIds.LINKS),
        ("Language 1: proficiency is required", StepIds.LANGUAGES),
        ("At least one skill is required", StepIds.SKILLS),
        ("Please select a resume template", StepIds.TEMPLATE),
    ],
)
def test_classify_local_message(message: str, step_id: str) -> None:
    assert classify_local_message(message) == _ordinal(step_id)


def test_every_local_violation_message_classifies_to_its_own_step() -> None:
    report = validate_all(WorkingDocument())

    for violation in report.violations:
        assert violation.step_id is not None
        assert classify_local_message(violation.message) == _ordinal(violation.step_id)


def test_tagged_violation_wins_over_message_text() -> None:
    violation = Violation(step_id=StepIds.LINKS, field="x", message="Experience looks wrong")

    assert classify_violation(violation) == _ordinal(StepIds.LINKS)


def test_find_first_step_with_errors_uses_lowest_ordinal() -> None:
    errors = [
        "Please select a resume template",
        "Experience 1: company is required",
        "Skill 1: name is required",
    ]

    first = find_first_step_with_errors(errors)

    assert first == _ordinal(StepIds.EXPERIENCE)
    assert find_first_step_with_errors(list(reversed(errors))) == first
    assert find_first_step_with_errors(errors) == first


def test_find_first_step_with_errors_handles_unclassifiable() -> None:
    assert find_first_step_with_errors(["Something went wrong"]) is None
    assert find_first_step_with_errors([]) is None


def test_group_errors_by_step() -> None:
    grouped, unclassified = group_errors_by_step(
        [
            "Skill 1: name is required",
            "First name is required",
            "Mystery failure",
            "Skill 2: name is required",
        ]
    )

    assert list(grouped) == [_ordinal(StepIds.PERSONAL), _ordinal(StepIds.SKILLS)]
    assert grouped[_ordinal(StepIds.SKILLS)] == ["Skill 1: name is required", "Skill 2: name is required"]
    assert unclassified == ["Mystery failure"]


def test_violation_from_field_error() -> None:
    violation = violation_from_field_error("career_experiences[0].company", "Field required")

    assert violation.step_id == StepIds.EXPERIENCE
    assert violation.field == "company"
    assert violation.message == "Company: Field required"
    assert violation.source == SERVER_SOURCE
    assert violation.field_path == "career_experiences[0].company"


def test_general_field_error_keeps_raw_message() -> None:
    violation = violation_from_field_error("general", "Resume limit reached")

    assert violation.step_id is None
    assert violation.message == "Resume limit reached"
    assert classify_violation(violation) is None
