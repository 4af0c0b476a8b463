"""Resume name suggestions and checks used before creating a resume."""

from __future__ import annotations

from collections.abc import Collection

import config


def suggest_resume_name(requested: str, existing: Collection[str]) -> str:
    """Return ``requested`` or the first ``"<requested> (n)"`` not in ``existing``."""

    base = requested.strip()
    taken = {name.strip() for name in existing}
    if base not in taken:
        return base
    counter = 1
    while f"{base} ({counter})" in taken:
        counter += 1
    return f"{base} ({counter})"


def validate_resume_name(name: str | None, existing: Collection[str] = ()) -> list[str]:
    """Return the problems with ``name``; an empty list means it can be used."""

    candidate = (name or "").strip()
    if not candidate:
        return ["Resume name is required"]
    if len(candidate) < config.RESUME_NAME_MIN_LENGTH:
        return [f"Resume name must be at least {config.RESUME_NAME_MIN_LENGTH} characters long"]
    if len(candidate) > config.RESUME_NAME_MAX_LENGTH:
        return [f"Resume name cannot exceed {config.RESUME_NAME_MAX_LENGTH} characters"]
    if any(char in candidate for char in config.RESUME_NAME_FORBIDDEN_CHARACTERS):
        return ["Resume name contains invalid characters"]
    if candidate in {existing_name.strip() for existing_name in existing}:
        return ["A resume with this name already exists"]
    return []


__all__ = ["suggest_resume_name", "validate_resume_name"]
