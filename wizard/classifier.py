"""Map violation messages and server field paths back to wizard steps.

Matching runs in three passes, each walking ``CLASSIFIER_PRECEDENCE``:

1. ``KEYWORD_OVERRIDES``: phrases that would otherwise be captured by a
   broader domain noun (``years of experience`` lives on the personal step).
2. Domain nouns (``experience``, ``project``, ``certificate`` ...). Local
   messages are prefixed with these, and backend collection names contain
   them, so this pass settles almost everything.
3. Field keywords for bare paths such as ``title`` or ``start_date``.

Experience is checked before personal projects and personal info so that
shared field names (``title``, ``description``) resolve to experience.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Final, Union

from constants.keys import StepIds
from core.errors import GENERAL_FIELD_PATH
from core.validators import SERVER_SOURCE, Violation
from wizard.step_registry import WIZARD_STEPS, get_step

ClassifiableError = Union[str, Violation]

CLASSIFIER_PRECEDENCE: Final[tuple[str, ...]] = (
    StepIds.EXPERIENCE,
    StepIds.PERSONAL_PROJECTS,
    StepIds.EDUCATION,
    StepIds.CERTIFICATES,
    StepIds.LINKS,
    StepIds.LANGUAGES,
    StepIds.SKILLS,
    StepIds.TEMPLATE,
    StepIds.PERSONAL,
)

KEYWORD_OVERRIDES: Final[dict[str, str]] = {
    r"\byears of experience\b": StepIds.PERSONAL,
    r"\bpersonal info\b": StepIds.PERSONAL,
}

DOMAIN_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    StepIds.EXPERIENCE: (r"\bexperiences?\b", r"\bcareer\b", r"\bvolunteer"),
    StepIds.PERSONAL_PROJECTS: (r"\bprojects?\b",),
    StepIds.EDUCATION: (r"\beducation\b",),
    StepIds.CERTIFICATES: (r"\bcertificat",),
    StepIds.LINKS: (r"\blinks?\b",),
    StepIds.LANGUAGES: (r"\blanguages?\b",),
    StepIds.SKILLS: (r"\bskills?\b",),
    StepIds.TEMPLATE: (r"\btemplates?\b",),
}

FIELD_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    StepIds.EXPERIENCE: (
        r"\bjob title\b",
        r"\btitle\b",
        r"\bcompany\b",
        r"\bseniority\b",
        r"\bcurrently working\b",
        r"\bwork (?:type|model)\b",
        r"\bstart date\b",
        r"\bend date\b",
        r"\bdescription\b",
        r"\blocation\b",
    ),
    StepIds.PERSONAL_PROJECTS: (r"\btechnologies\b", r"\brepository\b", r"\blive url\b", r"\bongoing\b"),
    StepIds.EDUCATION: (
        r"\binstitution\b",
        r"\bdegree\b",
        r"\bfield of study\b",
        r"\bcurrently studying\b",
        r"\bgraduation\b",
    ),
    StepIds.CERTIFICATES: (r"\bissuing organi[sz]ation\b", r"\bissue date\b", r"\bcredential\b"),
    StepIds.LINKS: (r"\bwebsite name\b",),
    StepIds.LANGUAGES: (r"\bproficiency\b", r"\bnative\b", r"\bcefr\b"),
    StepIds.SKILLS: (),
    StepIds.TEMPLATE: (r"\bselected template\b",),
    StepIds.PERSONAL: (
        r"\bfirst name\b",
        r"\blast name\b",
        r"\be ?mail\b",
        r"\bphone\b",
        r"\bbirth",
        r"\bcurrent position\b",
        r"\bprofile summary\b",
        r"\bwork field\b",
        r"\bcountry of residence\b",
        r"\baddress\b",
        r"\blinked ?in\b",
    ),
}

_SEPARATORS_RE = re.compile(r"[_.\-\[\]/]+")
_INDEX_RE = re.compile(r"\[\d+\]")
_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_RE = re.compile(r"(?<=[a-z])(?=[A-Z])")


def normalize_classifier_text(text: str) -> str:
    """Lower-case ``text`` and turn path punctuation into single spaces."""

    spaced = _CAMEL_RE.sub(" ", _INDEX_RE.sub(" ", text))
    spaced = _SEPARATORS_RE.sub(" ", spaced)
    return _WHITESPACE_RE.sub(" ", spaced).strip().lower()


def _match_table(text: str, table: dict[str, tuple[str, ...]]) -> str | None:
    for step_id in CLASSIFIER_PRECEDENCE:
        for pattern in table.get(step_id, ()):
            if re.search(pattern, text):
                return step_id
    return None


def classify_step_id(text: str) -> str | None:
    """Return the step id ``text`` refers to, or ``None`` when undecidable."""

    normalized = normalize_classifier_text(text or "")
    if not normalized:
        return None
    for pattern, step_id in KEYWORD_OVERRIDES.items():
        if re.search(pattern, normalized):
            return step_id
    return _match_table(normalized, DOMAIN_KEYWORDS) or _match_table(normalized, FIELD_KEYWORDS)


def _ordinal_for(step_id: str | None) -> int | None:
    if step_id is None:
        return None
    step = get_step(step_id)
    return step.ordinal if step is not None else None


def classify_local_message(message: str) -> int | None:
    """Return the step ordinal a free-text violation message belongs to."""

    return _ordinal_for(classify_step_id(message))


def classify_server_field_path(path: str) -> int | None:
    """Return the step ordinal for a backend path like ``career_experiences[0].title``."""

    return _ordinal_for(classify_step_id(path))


def classify_violation(error: ClassifiableError) -> int | None:
    """Return the step ordinal for a tagged violation or a plain message."""

    if isinstance(error, Violation):
        if error.step_id is not None:
            return _ordinal_for(error.step_id)
        if error.field_path:
            return classify_server_field_path(error.field_path)
        return None
    return classify_local_message(str(error))


def find_first_step_with_errors(errors: Iterable[ClassifiableError]) -> int | None:
    """Return the lowest step ordinal any error classifies to, else ``None``."""

    classified = {classify_violation(error) for error in errors}
    for step in WIZARD_STEPS:
        if step.ordinal in classified:
            return step.ordinal
    return None


def group_errors_by_step(errors: Sequence[ClassifiableError]) -> tuple[dict[int, list[str]], list[str]]:
    """Split ``errors`` into per-ordinal message lists plus unclassified ones."""

    grouped: dict[int, list[str]] = {}
    unclassified: list[str] = []
    for error in errors:
        ordinal = classify_violation(error)
        if ordinal is None:
            unclassified.append(str(error))
            continue
        grouped.setdefault(ordinal, []).append(str(error))
    return dict(sorted(grouped.items())), unclassified


def violation_from_field_error(field_path: str, message: str) -> Violation:
    """Build a tagged violation for a server-reported field error."""

    step_id = classify_step_id(field_path)
    leaf = _INDEX_RE.sub("", field_path).rsplit(".", 1)[-1]
    label = leaf.replace("_", " ").strip().title() or "Field"
    text = message if leaf == GENERAL_FIELD_PATH else f"{label}: {message}"
    return Violation(
        step_id=step_id,
        field=leaf or None,
        message=text,
        source=SERVER_SOURCE,
        field_path=field_path,
    )


__all__ = [
    "CLASSIFIER_PRECEDENCE",
    "DOMAIN_KEYWORDS",
    "FIELD_KEYWORDS",
    "KEYWORD_OVERRIDES",
    "classify_local_message",
    "classify_server_field_path",
    "classify_step_id",
    "classify_violation",
    "find_first_step_with_errors",
    "group_errors_by_step",
    "normalize_classifier_text",
    "violation_from_field_error",
]
