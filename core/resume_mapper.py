"""Translate between the persisted resume shape and the wizard's working document.

The backend stores experience and skills in separate collections
(``career_experiences`` / ``volunteering_experiences``, ``technical_skills`` /
``soft_skills``) while the wizard edits one list per concern. The merge is
kept explicit here through the ``is_volunteer`` and ``is_soft_skill``
discriminators so the controller and validators never assume homogeneity.
Keys the wizard does not model are carried along untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Final

import config
from constants.keys import PayloadKeys
from models.resume import (
    CertificateItem,
    EducationItem,
    ExperienceItem,
    LanguageItem,
    LinkItem,
    PersonalInfo,
    PersonalProjectItem,
    SkillItem,
    WizardModel,
    WorkingDocument,
    new_item_id,
)
from wizard.date_utils import format_payload_date, normalize_iso_date

logger = logging.getLogger(__name__)

DEFAULT_RESUME_NAME: Final[str] = "My Resume"

_PERSONAL_RENAMES: Final[dict[str, str]] = {"current_seniority_level": "seniority_level"}
_CERTIFICATE_RENAMES: Final[dict[str, str]] = {"issuing_organization": "organization"}
_PROJECT_RENAMES: Final[dict[str, str]] = {"url": "live_url", "repository_url": "project_url"}

_SKILL_LEVELS: Final[dict[str, int]] = {"beginner": 1, "intermediate": 3, "advanced": 4, "expert": 5}
_DEFAULT_SKILL_LEVEL: Final[int] = 3
_LANGUAGE_LEVELS: Final[dict[str, str]] = {
    "basic": "A1",
    "conversational": "B1",
    "fluent": "C1",
    "native": "C2",
}
_DEFAULT_LANGUAGE_LEVEL: Final[str] = "A2"


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: object) -> list[Mapping[str, Any]]:
    if not isinstance(value, Iterable) or isinstance(value, (str, bytes, Mapping)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _renamed(source: Mapping[str, Any], renames: Mapping[str, str]) -> dict[str, Any]:
    return {renames.get(key, key): value for key, value in source.items()}


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _stripped(value: str | None) -> str | None:
    return value.strip() or None if value else None


def _compact(data: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None``, whitespace-only strings and empty mappings instead of sending empty values."""

    return {
        key: value
        for key, value in data.items()
        if not _is_blank(value) and not (isinstance(value, Mapping) and not value)
    }


def _with_dates(data: dict[str, Any], *fields: str) -> dict[str, Any]:
    for name in fields:
        if name in data and not _is_blank(data[name]):
            data[name] = normalize_iso_date(data[name]) or data[name]
    return data


# -- persisted -> working -----------------------------------------------------


def _personal_info_from_persisted(raw: Mapping[str, Any]) -> PersonalInfo | None:
    if not raw:
        return None
    data = _renamed(raw, _PERSONAL_RENAMES)
    carries_address = "address" in data
    address = dict(_mapping(data.pop("address", None)))
    residence = data.pop("country_of_residence", None)
    data["city"] = address.pop("city", None) or data.get("city")
    data["country"] = address.pop("country", None) or residence or data.get("country")
    if carries_address:
        # Remaining address parts (street, postal code ...) ride along as an extra.
        data["address"] = address
    return PersonalInfo.model_validate(_with_dates(data, "birth_date"))


def _experience_from_persisted(raw: Mapping[str, Any], *, is_volunteer: bool) -> ExperienceItem:
    data = dict(raw)
    location = dict(_mapping(data.pop("location", None)))
    data["city"] = location.pop("city", None) or data.get("city")
    data["country"] = location.pop("country", None) or data.get("country")
    if location:
        data["location"] = location
    data["id"] = data.get("id") or new_item_id()
    data["is_volunteer"] = is_volunteer
    return ExperienceItem.model_validate(_with_dates(data, "start_date", "end_date"))


def _item_from_persisted(
    model: type[WizardModel],
    raw: Mapping[str, Any],
    *,
    renames: Mapping[str, str] | None = None,
    dates: tuple[str, ...] = (),
    **overrides: Any,
) -> Any:
    data = _renamed(raw, renames or {})
    data["id"] = data.get("id") or new_item_id()
    data.update(overrides)
    return model.model_validate(_with_dates(data, *dates))


def to_working_document(persisted: Mapping[str, Any]) -> WorkingDocument:
    """Expand a persisted resume into the wizard's working document.

    Career and volunteering experience are merged into ``experience`` and
    technical and soft skills into ``skills``; month dates become full ISO
    dates. Unknown top-level keys are kept as document extras.
    """

    source = dict(persisted)
    known = {
        PayloadKeys.PERSONAL_INFO,
        PayloadKeys.CAREER_EXPERIENCES,
        PayloadKeys.VOLUNTEERING_EXPERIENCES,
        PayloadKeys.EDUCATION,
        PayloadKeys.TECHNICAL_SKILLS,
        PayloadKeys.SOFT_SKILLS,
        PayloadKeys.CERTIFICATIONS,
        PayloadKeys.LANGUAGES,
        PayloadKeys.PERSONAL_PROJECTS,
        PayloadKeys.PERSONAL_LINKS,
        PayloadKeys.RESUME_NAME,
    }
    extras = {key: value for key, value in source.items() if key not in known}

    experience = [
        _experience_from_persisted(item, is_volunteer=False) for item in _items(source.get(PayloadKeys.CAREER_EXPERIENCES))
    ] + [
        _experience_from_persisted(item, is_volunteer=True)
        for item in _items(source.get(PayloadKeys.VOLUNTEERING_EXPERIENCES))
    ]
    skills = [
        _item_from_persisted(SkillItem, item, is_soft_skill=False)
        for item in _items(source.get(PayloadKeys.TECHNICAL_SKILLS))
    ] + [
        _item_from_persisted(SkillItem, item, is_soft_skill=True) for item in _items(source.get(PayloadKeys.SOFT_SKILLS))
    ]

    document = WorkingDocument.model_validate(
        {
            **extras,
            "personal_info": _personal_info_from_persisted(_mapping(source.get(PayloadKeys.PERSONAL_INFO))),
            "experience": experience,
            "education": [
                _item_from_persisted(EducationItem, item, dates=("start_date", "end_date"))
                for item in _items(source.get(PayloadKeys.EDUCATION))
            ],
            "skills": skills,
            "languages": [_item_from_persisted(LanguageItem, item) for item in _items(source.get(PayloadKeys.LANGUAGES))],
            "certificates": [
                _item_from_persisted(CertificateItem, item, renames=_CERTIFICATE_RENAMES, dates=("issue_date",))
                for item in _items(source.get(PayloadKeys.CERTIFICATIONS))
            ],
            "links": [_item_from_persisted(LinkItem, item) for item in _items(source.get(PayloadKeys.PERSONAL_LINKS))],
            "personal_projects": [
                _item_from_persisted(
                    PersonalProjectItem,
                    item,
                    renames=_PROJECT_RENAMES,
                    dates=("start_date", "end_date"),
                )
                for item in _items(source.get(PayloadKeys.PERSONAL_PROJECTS))
            ],
            "resume_name": source.get(PayloadKeys.RESUME_NAME),
        }
    )
    logger.debug(
        "Hydrated working document with %d experience and %d skill entries",
        len(document.experience),
        len(document.skills),
    )
    return document


# -- working -> persisted -----------------------------------------------------


def _years_value(value: object) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _item_payload(
    item: WizardModel,
    fields: Mapping[str, str],
    *,
    include_ids: bool,
    dates: tuple[str, ...] = (),
    granularity: str,
) -> dict[str, Any]:
    """Build one backend entry from ``item``.

    ``fields`` maps backend keys to model attribute names; extras are emitted
    first so modelled fields always win.
    """

    data: dict[str, Any] = dict(item.extras())
    for backend_key, attribute in fields.items():
        value = getattr(item, attribute)
        if attribute in dates:
            value = format_payload_date(value, granularity=granularity)
        data[backend_key] = value
    if include_ids:
        data["id"] = getattr(item, "id")
    return _compact(data)


def _personal_info_payload(info: PersonalInfo | None, *, granularity: str) -> dict[str, Any]:
    if info is None:
        return {}
    data: dict[str, Any] = dict(info.extras())
    carries_address = "address" in data
    address = dict(_mapping(data.pop("address", None)))
    city = _stripped(info.city)
    country = _stripped(info.country)
    if city or carries_address:
        address.update(_compact({"city": city, "country": country}))
    data.update(
        {
            "first_name": info.first_name,
            "last_name": info.last_name,
            "email": info.email,
            "phone": info.phone,
            "birth_date": format_payload_date(info.birth_date, granularity=granularity),
            "linkedin_url": _stripped(info.linkedin_url),
            "website_url": _stripped(info.website_url),
            "current_position": info.current_position,
            "profile_summary": info.profile_summary,
            "current_seniority_level": info.seniority_level,
            "work_field": info.work_field,
            "years_of_experience": _years_value(info.years_of_experience),
            "country_of_residence": country,
            "address": address or None,
        }
    )
    return _compact(data)


def _experience_payload(item: ExperienceItem, *, include_ids: bool, granularity: str) -> dict[str, Any]:
    data = _item_payload(
        item,
        {
            "title": "title",
            "company": "company",
            "seniority_level": "seniority_level",
            "start_date": "start_date",
            "end_date": "end_date",
            "currently_working": "currently_working",
            "description": "description",
            "work_type": "work_type",
            "work_model": "work_model",
            "is_volunteer": "is_volunteer",
        },
        include_ids=include_ids,
        dates=("start_date", "end_date"),
        granularity=granularity,
    )
    location = dict(_mapping(data.pop("location", None)))
    location.update(_compact({"city": item.city, "country": item.country}))
    if location:
        data["location"] = location
    return data


def to_persistence_payload(
    document: WorkingDocument,
    *,
    include_ids: bool = False,
    date_granularity: str = config.PAYLOAD_DATE_GRANULARITY,
) -> dict[str, Any]:
    """Build the snake_case request body for the create/update endpoints.

    Args:
        document: The working document to persist.
        include_ids: Emit each entry's ``id`` (update requests only).
        date_granularity: ``"day"`` for ``YYYY-MM-DD`` or ``"month"`` for
            ``YYYY-MM`` dates.

    Returns:
        A JSON-serialisable mapping with merged lists split back into their
        backend collections and blank optional values omitted.
    """

    granularity = date_granularity

    def _entries(
        items: Iterable[WizardModel], fields: Mapping[str, str], dates: tuple[str, ...] = ()
    ) -> list[dict[str, Any]]:
        return [
            _item_payload(item, fields, include_ids=include_ids, dates=dates, granularity=granularity)
            for item in items
        ]

    skill_fields = {"name": "name", "level": "level", "proficiency": "proficiency", "is_soft_skill": "is_soft_skill"}
    payload: dict[str, Any] = dict(document.extras())
    payload.update(
        {
            PayloadKeys.RESUME_NAME: document.resume_name,
            PayloadKeys.PERSONAL_INFO: _personal_info_payload(document.personal_info, granularity=granularity),
            PayloadKeys.CAREER_EXPERIENCES: [
                _experience_payload(item, include_ids=include_ids, granularity=granularity)
                for item in document.experience
                if not item.is_volunteer
            ],
            PayloadKeys.VOLUNTEERING_EXPERIENCES: [
                _experience_payload(item, include_ids=include_ids, granularity=granularity)
                for item in document.experience
                if item.is_volunteer
            ],
            PayloadKeys.EDUCATION: _entries(
                document.education,
                {
                    "institution": "institution",
                    "degree": "degree",
                    "field": "field",
                    "start_date": "start_date",
                    "end_date": "end_date",
                    "currently_studying": "currently_studying",
                    "description": "description",
                },
                ("start_date", "end_date"),
            ),
            PayloadKeys.TECHNICAL_SKILLS: _entries(
                (skill for skill in document.skills if not skill.is_soft_skill), skill_fields
            ),
            PayloadKeys.SOFT_SKILLS: _entries((skill for skill in document.skills if skill.is_soft_skill), skill_fields),
            PayloadKeys.CERTIFICATIONS: _entries(
                document.certificates,
                {
                    "name": "name",
                    "issuing_organization": "organization",
                    "issue_date": "issue_date",
                    "certificate_url": "certificate_url",
                    "description": "description",
                },
                ("issue_date",),
            ),
            PayloadKeys.LANGUAGES: _entries(
                document.languages,
                {"name": "name", "proficiency": "proficiency", "is_native": "is_native"},
            ),
            PayloadKeys.PERSONAL_PROJECTS: _entries(
                document.personal_projects,
                {
                    "title": "title",
                    "description": "description",
                    "technologies": "technologies",
                    "start_date": "start_date",
                    "end_date": "end_date",
                    "is_ongoing": "is_ongoing",
                    "url": "live_url",
                    "repository_url": "project_url",
                },
                ("start_date", "end_date"),
            ),
            PayloadKeys.PERSONAL_LINKS: _entries(
                document.links,
                {"website_name": "website_name", "website_url": "website_url"},
            ),
        }
    )
    return _compact(payload)


def default_resume_name(document: WorkingDocument) -> str:
    """Return ``"<first name>'s Resume"`` or a generic fallback."""

    first_name = (document.personal_info.first_name or "").strip() if document.personal_info else ""
    return f"{first_name}'s Resume" if first_name else DEFAULT_RESUME_NAME


# -- CV import ----------------------------------------------------------------


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if not _is_blank(value):
            return value
    return None


def _skill_level(value: object) -> int:
    return _SKILL_LEVELS.get(str(value or "").strip().lower(), _DEFAULT_SKILL_LEVEL)


def _language_level(value: object) -> str:
    return _LANGUAGE_LEVELS.get(str(value or "").strip().lower(), _DEFAULT_LANGUAGE_LEVEL)


def _imported_experience(raw: Mapping[str, Any], *, is_volunteer: bool) -> ExperienceItem:
    location = _mapping(raw.get("location"))
    company_keys = ("organization", "company") if is_volunteer else ("company_name", "company")
    return ExperienceItem(
        title=_first(raw, "title", "position"),
        company=_first(raw, *company_keys),
        seniority_level=raw.get("seniority_level"),
        city=location.get("city"),
        country=location.get("country"),
        start_date=normalize_iso_date(raw.get("start_date")),
        end_date=normalize_iso_date(raw.get("end_date")),
        currently_working=bool(raw.get("is_current")),
        description=raw.get("description"),
        is_volunteer=is_volunteer,
        work_type=raw.get("work_type"),
        work_model=raw.get("work_model"),
    )


def cv_result_to_working_document(cv_data: Mapping[str, Any]) -> WorkingDocument:
    """Seed a working document from a CV-extraction result (import mode)."""

    personal = _mapping(cv_data.get(PayloadKeys.PERSONAL_INFO))
    address = _mapping(personal.get("address"))
    personal_info = PersonalInfo(
        first_name=personal.get("first_name"),
        last_name=personal.get("last_name"),
        email=personal.get("email"),
        phone=personal.get("phone"),
        birth_date=normalize_iso_date(personal.get("birth_date")),
        city=address.get("city"),
        country=_first(address, "country") or personal.get("country_of_residence"),
        linkedin_url=personal.get("linkedin_url"),
        website_url=personal.get("website_url"),
        current_position=personal.get("current_position"),
        profile_summary=personal.get("profile_summary"),
        seniority_level=personal.get("current_seniority_level"),
        work_field=personal.get("work_field"),
        years_of_experience=personal.get("years_of_experience"),
    )
    experience = [
        _imported_experience(item, is_volunteer=False) for item in _items(cv_data.get(PayloadKeys.CAREER_EXPERIENCES))
    ] + [
        _imported_experience(item, is_volunteer=True)
        for item in _items(cv_data.get(PayloadKeys.VOLUNTEERING_EXPERIENCES))
    ]
    education = [
        EducationItem(
            institution=_first(item, "institution_name", "institution"),
            degree=item.get("degree"),
            field=_first(item, "field_of_study", "field"),
            start_date=normalize_iso_date(item.get("start_date")),
            end_date=normalize_iso_date(_first(item, "graduation_date", "end_date")),
            currently_studying=bool(item.get("is_current")),
            description=item.get("description"),
        )
        for item in _items(cv_data.get(PayloadKeys.EDUCATION))
    ]
    skills = [
        SkillItem(name=item.get("name"), level=_skill_level(item.get("proficiency_level")), is_soft_skill=False)
        for item in _items(cv_data.get(PayloadKeys.TECHNICAL_SKILLS))
    ] + [
        SkillItem(name=item.get("name"), level=_skill_level(item.get("proficiency_level")), is_soft_skill=True)
        for item in _items(cv_data.get(PayloadKeys.SOFT_SKILLS))
    ]
    languages = [
        LanguageItem(
            name=item.get("name"),
            proficiency=_language_level(item.get("proficiency_level")),
            is_native=bool(item.get("is_native")),
        )
        for item in _items(cv_data.get(PayloadKeys.LANGUAGES))
    ]
    certificates = [
        CertificateItem(
            name=item.get("name"),
            organization=item.get("issuing_organization"),
            issue_date=normalize_iso_date(item.get("issue_date")),
            certificate_url=_first(item, "credential_url", "certificate_url"),
            description=item.get("description"),
        )
        for item in _items(cv_data.get(PayloadKeys.CERTIFICATIONS))
    ]
    projects = [
        PersonalProjectItem(
            title=_first(item, "title", "name"),
            description=item.get("description"),
            technologies=item.get("technologies") if isinstance(item.get("technologies"), list) else [],
            start_date=normalize_iso_date(item.get("start_date")),
            end_date=normalize_iso_date(item.get("end_date")),
            is_ongoing=bool(item.get("is_current") or item.get("is_ongoing")),
            live_url=item.get("url"),
            project_url=item.get("repository_url"),
        )
        for item in _items(cv_data.get(PayloadKeys.PERSONAL_PROJECTS))
    ]
    resume_name = cv_data.get(PayloadKeys.RESUME_NAME)
    return WorkingDocument(
        personal_info=personal_info,
        experience=experience,
        education=education,
        skills=skills,
        languages=languages,
        certificates=certificates,
        personal_projects=projects,
        selected_template=config.DEFAULT_IMPORT_TEMPLATE,
        resume_name=resume_name if not _is_blank(resume_name) else config.DEFAULT_IMPORT_RESUME_NAME,
    )


__all__ = [
    "DEFAULT_RESUME_NAME",
    "cv_result_to_working_document",
    "default_resume_name",
    "to_persistence_payload",
    "to_working_document",
]
