"""Central configuration for the resume wizard.

Values are read once from the environment (``.env`` files are honoured via
``python-dotenv``). Invalid overrides fall back to the defaults and emit a
``RuntimeWarning`` rather than failing at import time, so a misconfigured
deployment still renders the wizard.
"""

import os
import warnings
from typing import Final

from dotenv import load_dotenv

load_dotenv()

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DATE_GRANULARITIES: Final[tuple[str, ...]] = ("day", "month")


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_non_negative_int_env(value: object | None, *, env_var: str, default: int) -> int:
    """Return a non-negative integer parsed from ``value`` or ``default``."""

    if value is None:
        return default
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return default
        try:
            parsed = int(candidate)
        except ValueError:
            warnings.warn(
                "%s is not a whole number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return default
    elif isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using %s." % (env_var, value, default),
            RuntimeWarning,
        )
        return default
    if parsed < 0:
        warnings.warn(
            "%s must not be negative; using %s." % (env_var, default),
            RuntimeWarning,
        )
        return default
    return parsed


def normalise_log_level(value: object | None, *, default: str = "INFO") -> str:
    """Return a supported logging level name or ``default`` when invalid."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().upper()
    if not candidate:
        return default
    if candidate in _LOG_LEVELS:
        return candidate
    warnings.warn(
        "Unsupported RESUME_WIZARD_LOG_LEVEL '%s'; falling back to '%s'." % (candidate, default),
        RuntimeWarning,
    )
    return default


def normalise_date_granularity(value: object | None, *, default: str = "day") -> str:
    """Return ``day`` or ``month``; anything else resolves to ``default``."""

    if not isinstance(value, str):
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    if candidate in DATE_GRANULARITIES:
        return candidate
    warnings.warn(
        "Unsupported RESUME_WIZARD_DATE_GRANULARITY '%s'; falling back to '%s'." % (candidate, default),
        RuntimeWarning,
    )
    return default


LOG_LEVEL = normalise_log_level(os.getenv("RESUME_WIZARD_LOG_LEVEL", "INFO"))
DEBUG = _is_truthy_flag(os.getenv("RESUME_WIZARD_DEBUG"))

MIN_YEARS_OF_EXPERIENCE: Final[int] = 0
MAX_YEARS_OF_EXPERIENCE = _parse_non_negative_int_env(
    os.getenv("RESUME_WIZARD_MAX_YEARS"),
    env_var="RESUME_WIZARD_MAX_YEARS",
    default=50,
)

RESUME_NAME_MIN_LENGTH: Final[int] = 2
RESUME_NAME_MAX_LENGTH: Final[int] = 100
RESUME_NAME_FORBIDDEN_CHARACTERS: Final[tuple[str, ...]] = ("<", ">", ":", '"', "|", "?", "*", "\\", "/")

DEFAULT_IMPORT_TEMPLATE = os.getenv("RESUME_WIZARD_IMPORT_TEMPLATE", "moey").strip() or "moey"
DEFAULT_IMPORT_RESUME_NAME: Final[str] = "Imported Resume"

PAYLOAD_DATE_GRANULARITY = normalise_date_granularity(os.getenv("RESUME_WIZARD_DATE_GRANULARITY", "day"))


__all__ = [
    "DATE_GRANULARITIES",
    "DEBUG",
    "DEFAULT_IMPORT_RESUME_NAME",
    "DEFAULT_IMPORT_TEMPLATE",
    "LOG_LEVEL",
    "MAX_YEARS_OF_EXPERIENCE",
    "MIN_YEARS_OF_EXPERIENCE",
    "PAYLOAD_DATE_GRANULARITY",
    "RESUME_NAME_FORBIDDEN_CHARACTERS",
    "RESUME_NAME_MAX_LENGTH",
    "RESUME_NAME_MIN_LENGTH",
    "normalise_date_granularity",
    "normalise_log_level",
]
