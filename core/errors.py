"""Exception hierarchy for the resume persistence collaborator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

GENERAL_FIELD_PATH: Final[str] = "general"
SERVER_ERROR_MESSAGE: Final[str] = "The server encountered an error. Please try again later."
UNEXPECTED_ERROR_MESSAGE: Final[str] = "An unexpected error occurred. Please try again."
NOT_FOUND_MESSAGE: Final[str] = "The requested resume could not be found."


@dataclass
class ResumeWizardError(Exception):
    """Base exception for resume wizard failures."""

    message: str
    details: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class SubmissionError(ResumeWizardError):
    """Raised when the persistence collaborator fails without field detail."""

    status_code: int | None = None


@dataclass(frozen=True)
class FieldError:
    """One server-reported validation problem for a dotted field path."""

    field_path: str
    message: str


@dataclass
class ServerValidationError(SubmissionError):
    """Raised when the backend rejects the payload with per-field detail."""

    field_errors: list[FieldError] = field(default_factory=list)


@dataclass
class ResumeNotFoundError(SubmissionError):
    """Raised when a resume requested for editing does not exist."""


def field_path_from_loc(loc: Sequence[object]) -> str:
    """Join a REST ``loc`` sequence into ``career_experiences[0].company`` form."""

    parts = list(loc)
    if parts and parts[0] == "body":
        parts = parts[1:]
    path = ""
    for part in parts:
        if isinstance(part, int) and not isinstance(part, bool):
            path += f"[{part}]"
            continue
        text = str(part).strip()
        if not text:
            continue
        path = f"{path}.{text}" if path else text
    return path or GENERAL_FIELD_PATH


def _field_errors_from_detail(detail: Sequence[object]) -> list[FieldError]:
    errors: list[FieldError] = []
    for entry in detail:
        if not isinstance(entry, Mapping):
            continue
        raw_loc = entry.get("loc")
        if isinstance(raw_loc, Sequence) and not isinstance(raw_loc, str):
            path = field_path_from_loc(raw_loc)
        elif isinstance(entry.get("field_path"), str):
            path = str(entry["field_path"]) or GENERAL_FIELD_PATH
        else:
            path = GENERAL_FIELD_PATH
        message = entry.get("msg") or entry.get("message") or "Field is required"
        errors.append(FieldError(field_path=path, message=str(message)))
    return errors


def parse_error_response(status_code: int | None, body: object) -> SubmissionError:
    """Translate a REST error response into the matching exception.

    Args:
        status_code: HTTP status of the failed request, when known.
        body: Decoded JSON body (or ``None`` when the response had none).

    Returns:
        ``ServerValidationError`` when the body carries per-field detail,
        otherwise a generic ``SubmissionError`` subclass.
    """

    payload: Mapping[str, Any] = body if isinstance(body, Mapping) else {}
    if status_code == 500:
        return SubmissionError(SERVER_ERROR_MESSAGE, status_code=status_code)

    detail = payload.get("detail")
    field_errors: list[FieldError] = []
    if isinstance(detail, Sequence) and not isinstance(detail, str):
        field_errors.extend(_field_errors_from_detail(detail))
    critical = payload.get("critical_errors")
    if isinstance(critical, Sequence) and not isinstance(critical, str):
        field_errors.extend(
            FieldError(field_path=GENERAL_FIELD_PATH, message=str(item)) for item in critical if str(item).strip()
        )
    if field_errors:
        return ServerValidationError(
            "The resume was rejected by the server.",
            details=payload,
            status_code=status_code,
            field_errors=field_errors,
        )

    if status_code == 404:
        return ResumeNotFoundError(NOT_FOUND_MESSAGE, details=payload, status_code=status_code)

    for key in ("detail", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return SubmissionError(value.strip(), details=payload, status_code=status_code)
    return SubmissionError(UNEXPECTED_ERROR_MESSAGE, details=payload or None, status_code=status_code)


__all__ = [
    "FieldError",
    "GENERAL_FIELD_PATH",
    "ResumeNotFoundError",
    "ResumeWizardError",
    "ServerValidationError",
    "SubmissionError",
    "field_path_from_loc",
    "parse_error_response",
]
