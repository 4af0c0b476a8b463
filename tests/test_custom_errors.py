from __future__ import annotations

from core.errors import (
    GENERAL_FIELD_PATH,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    FieldError,
    ResumeNotFoundError,
    ServerValidationError,
    SubmissionError,
    field_path_from_loc,
    parse_error_response,
)


def test_field_path_from_loc() -> None:
    assert field_path_from_loc(["body", "career_experiences", 0, "company"]) == "career_experiences[0].company"
    assert field_path_from_loc(["personal_info", "email"]) == "personal_info.email"
    assert field_path_from_loc(["body"]) == GENERAL_FIELD_PATH


def test_422_detail_becomes_server_validation_error() -> None:
    error = parse_error_response(
        422,
        {
            "detail": [
                {"loc": ["body", "career_experiences", 0, "company"], "msg": "Field required"},
                {"field_path": "personal_info.email", "message": "value is not a valid email address"},
            ]
        },
    )

    assert isinstance(error, ServerValidationError)
    assert error.status_code == 422
    assert error.field_errors == [
        FieldError("career_experiences[0].company", "Field required"),
        FieldError("personal_info.email", "value is not a valid email address"),
    ]


def test_critical_errors_map_to_general_path() -> None:
    error = parse_error_response(400, {"critical_errors": ["Resume limit reached", " "]})

    assert isinstance(error, ServerValidationError)
    assert error.field_errors == [FieldError(GENERAL_FIELD_PATH, "Resume limit reached")]


def test_500_never_leaks_details() -> None:
    error = parse_error_response(500, {"detail": "Traceback: db password=..."})

    assert type(error) is SubmissionError
    assert str(error) == SERVER_ERROR_MESSAGE


def test_404_and_generic_messages() -> None:
    not_found = parse_error_response(404, {})
    assert isinstance(not_found, ResumeNotFoundError)
    assert str(not_found) == NOT_FOUND_MESSAGE

    generic = parse_error_response(409, {"detail": "  Resume is locked  "})
    assert type(generic) is SubmissionError
    assert str(generic) == "Resume is locked"

    fallback = parse_error_response(None, None)
    assert str(fallback) == UNEXPECTED_ERROR_MESSAGE
    assert fallback.details is None
