from __future__ import annotations

import copy
from typing import Any

import pytest

import config
from core.resume_mapper import (
    cv_result_to_working_document,
    default_resume_name,
    to_persistence_payload,
    to_working_document,
)
from core.validation import validate_all
from models.resume import ExperienceItem, PersonalInfo, SkillItem, WorkingDocument


def _persisted_resume() -> dict[str, Any]:
    return {
        "resume_name": "Ada's Resume",
        "user_id": "u-42",
        "personal_info": {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone": "+44 20 7946 0000",
            "birth_date": "1990-12-10",
            "address": {"city": "London", "country": "United Kingdom", "postal_code": "NW1"},
            "country_of_residence": "United Kingdom",
            "linkedin_url": "https://linkedin.com/in/ada",
            "current_position": "Engineer",
            "current_seniority_level": "senior",
            "years_of_experience": 8,
        },
        "career_experiences": [
            {
                "id": "exp-1",
                "title": "Backend Engineer",
                "company": "Analytical Engines Ltd",
                "seniority_level": "senior",
                "location": {"city": "London", "country": "United Kingdom"},
                "start_date": "2019-03-01",
                "currently_working": True,
                "work_model": "hybrid",
                "is_volunteer": False,
                "team_size": 6,
            }
        ],
        "volunteering_experiences": [
            {
                "id": "vol-1",
                "title": "Mentor",
                "company": "Code Club",
                "seniority_level": "junior",
                "start_date": "2015-01-01",
                "end_date": "2016-06-01",
                "currently_working": False,
                "is_volunteer": True,
            }
        ],
        "education": [
            {
                "id": "edu-1",
                "institution": "University of London",
                "degree": "BSc",
                "field": "Mathematics",
                "start_date": "2009-09-01",
                "end_date": "2012-06-30",
                "currently_studying": False,
            }
        ],
        "technical_skills": [{"id": "s-1", "name": "Python", "level": 5, "is_soft_skill": False}],
        "soft_skills": [{"id": "s-2", "name": "Mentoring", "is_soft_skill": True}],
        "languages": [{"id": "l-1", "name": "English", "proficiency": "C2", "is_native": True}],
        "certifications": [
            {
                "id": "c-1",
                "name": "AWS SA",
                "issuing_organization": "Amazon",
                "issue_date": "2021-05-01",
                "certificate_url": "https://aws.example/cert",
            }
        ],
        "personal_projects": [
            {
                "id": "p-1",
                "title": "Difference Engine",
                "description": "A mechanical calculator",
                "technologies": ["brass", "gears"],
                "url": "https://engine.example",
                "repository_url": "https://git.example/engine",
            }
        ],
        "personal_links": [{"id": "k-1", "website_name": "GitHub", "website_url": "https://github.com/ada"}],
    }


def test_round_trip_preserves_persisted_shape() -> None:
    persisted = _persisted_resume()

    payload = to_persistence_payload(to_working_document(copy.deepcopy(persisted)), include_ids=True)

    assert payload == persisted


def test_to_working_document_merges_with_discriminators() -> None:
    document = to_working_document(_persisted_resume())

    assert [(item.title, item.is_volunteer) for item in document.experience] == [
        ("Backend Engineer", False),
        ("Mentor", True),
    ]
    assert [(skill.name, skill.is_soft_skill) for skill in document.skills] == [
        ("Python", False),
        ("Mentoring", True),
    ]
    assert document.experience[0].city == "London"
    assert document.experience[0].extras() == {"team_size": 6}
    assert document.certificates[0].organization == "Amazon"
    assert document.personal_projects[0].live_url == "https://engine.example"
    assert document.personal_info is not None
    assert document.personal_info.seniority_level == "senior"
    assert document.personal_info.country == "United Kingdom"
    assert document.extras() == {"user_id": "u-42"}
    assert validate_all(document.merged({"selected_template": "moey"})).is_valid


def test_partial_dates_are_expanded() -> None:
    persisted = {
        "career_experiences": [{"title": "Dev", "start_date": "2020-3", "end_date": "2021-11"}],
        "education": [{"institution": "MIT", "start_date": "2016-09"}],
    }

    document = to_working_document(persisted)

    assert document.experience[0].start_date == "2020-03-01"
    assert document.experience[0].end_date == "2021-11-01"
    assert document.education[0].start_date == "2016-09-01"


def test_missing_ids_are_generated_client_side() -> None:
    document = to_working_document({"technical_skills": [{"name": "Go"}, {"name": "Rust"}]})

    ids = [skill.id for skill in document.skills]
    assert all(isinstance(item_id, str) and item_id for item_id in ids)
    assert len(set(ids)) == 2


def test_payload_omits_ids_unless_updating(valid_document: WorkingDocument) -> None:
    create_payload = to_persistence_payload(valid_document)
    update_payload = to_persistence_payload(valid_document, include_ids=True)

    assert "id" not in create_payload["career_experiences"][0]
    assert update_payload["career_experiences"][0]["id"] == valid_document.experience[0].id


def test_payload_drops_blank_optional_fields() -> None:
    document = WorkingDocument(
        personal_info=PersonalInfo(first_name="Ada", phone="  ", website_url="", city=None),
        experience=[ExperienceItem(title="Dev", description="   ", currently_working=False)],
    )

    payload = to_persistence_payload(document)

    assert payload["personal_info"] == {"first_name": "Ada"}
    assert payload["career_experiences"] == [{"title": "Dev", "currently_working": False, "is_volunteer": False}]
    assert payload["volunteering_experiences"] == []
    assert "resume_name" not in payload


def test_payload_splits_skills_in_order() -> None:
    document = WorkingDocument(
        skills=[
            SkillItem(name="Listening", is_soft_skill=True),
            SkillItem(name="SQL", level=4),
            SkillItem(name="Python"),
        ]
    )

    payload = to_persistence_payload(document)

    assert payload["technical_skills"] == [
        {"name": "SQL", "level": 4, "is_soft_skill": False},
        {"name": "Python", "is_soft_skill": False},
    ]
    assert payload["soft_skills"] == [{"name": "Listening", "is_soft_skill": True}]


def test_month_granularity() -> None:
    document = WorkingDocument(experience=[ExperienceItem(title="Dev", start_date="2020-03-15")])

    payload = to_persistence_payload(document, date_granularity="month")

    assert payload["career_experiences"][0]["start_date"] == "2020-03"


def test_personal_address_payload() -> None:
    document = WorkingDocument(personal_info=PersonalInfo(city="Berlin", country="Germany", years_of_experience="4"))

    personal = to_persistence_payload(document)["personal_info"]

    assert personal["address"] == {"city": "Berlin", "country": "Germany"}
    assert personal["country_of_residence"] == "Germany"
    assert personal["years_of_experience"] == 4


def test_residence_only_personal_info_gains_no_address() -> None:
    persisted = {"personal_info": {"first_name": "Ada", "country_of_residence": "UK"}}

    payload = to_persistence_payload(to_working_document(persisted))

    assert payload["personal_info"] == {"first_name": "Ada", "country_of_residence": "UK"}


def test_country_only_address_survives_round_trip() -> None:
    persisted = {"personal_info": {"first_name": "Ada", "address": {"country": "UK"}, "country_of_residence": "UK"}}

    payload = to_persistence_payload(to_working_document(copy.deepcopy(persisted)))

    assert payload["personal_info"] == persisted["personal_info"]


def test_missing_personal_info_is_omitted() -> None:
    payload = to_persistence_payload(WorkingDocument(skills=[SkillItem(name="SQL")]))

    assert "personal_info" not in payload
    assert payload["technical_skills"] == [{"name": "SQL", "is_soft_skill": False}]


@pytest.mark.parametrize(
    ("first_name", "expected"),
    [("Ada", "Ada's Resume"), ("  ", "My Resume"), (None, "My Resume")],
)
def test_default_resume_name(first_name: str | None, expected: str) -> None:
    document = WorkingDocument(personal_info=PersonalInfo(first_name=first_name))

    assert default_resume_name(document) == expected
    assert default_resume_name(WorkingDocument()) == "My Resume"


def test_cv_result_to_working_document() -> None:
    cv_data = {
        "personal_info": {
            "first_name": "Grace",
            "address": {"city": "Arlington"},
            "country_of_residence": "USA",
            "current_seniority_level": "lead",
        },
        "career_experiences": [
            {"position": "Rear Admiral", "company_name": "US Navy", "start_date": "1943-12", "is_current": True}
        ],
        "volunteering_experiences": [{"title": "Speaker", "organization": "ACM"}],
        "education": [
            {
                "institution_name": "Yale",
                "degree": "PhD",
                "field_of_study": "Mathematics",
                "graduation_date": "1934-06",
            }
        ],
        "technical_skills": [{"name": "COBOL", "proficiency_level": "Expert"}, {"name": "FLOW-MATIC"}],
        "soft_skills": [{"name": "Teaching", "proficiency_level": "beginner"}],
        "languages": [
            {"name": "English", "proficiency_level": "native", "is_native": True},
            {"name": "German", "proficiency_level": "conversational"},
            {"name": "Latin"},
        ],
        "certifications": [{"name": "Hall of Fame", "issuing_organization": "NIHF", "credential_url": "https://x"}],
        "personal_projects": [{"name": "Compiler", "is_current": True}],
    }

    document = cv_result_to_working_document(cv_data)

    assert document.personal_info is not None
    assert document.personal_info.city == "Arlington"
    assert document.personal_info.country == "USA"
    assert document.personal_info.seniority_level == "lead"
    assert document.experience[0].title == "Rear Admiral"
    assert document.experience[0].company == "US Navy"
    assert document.experience[0].start_date == "1943-12-01"
    assert document.experience[0].currently_working is True
    assert document.experience[1].company == "ACM"
    assert document.experience[1].is_volunteer
    assert document.education[0].institution == "Yale"
    assert document.education[0].end_date == "1934-06-01"
    assert [skill.level for skill in document.skills] == [5, 3, 1]
    assert [language.proficiency for language in document.languages] == ["C2", "B1", "A2"]
    assert document.certificates[0].certificate_url == "https://x"
    assert document.personal_projects[0].title == "Compiler"
    assert document.personal_projects[0].is_ongoing is True
    assert document.selected_template == config.DEFAULT_IMPORT_TEMPLATE
    assert document.resume_name == config.DEFAULT_IMPORT_RESUME_NAME
