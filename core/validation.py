"""Whole-document validation in wizard step order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from core.validators import DOMAIN_VALIDATORS, Violation
from models.resume import WorkingDocument
from wizard.step_registry import WIZARD_STEPS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """Structured validation outcome for a working document."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    violations: list[Violation] = field(default_factory=list)


def validate_all(document: WorkingDocument) -> ValidationReport:
    """Run every step validator over ``document`` in registry order."""

    violations: list[Violation] = []
    for step in WIZARD_STEPS:
        validator = DOMAIN_VALIDATORS.get(step.id)
        if validator is None:
            continue
        violations.extend(validator(document))
    if violations:
        logger.debug("Document has %d violation(s)", len(violations))
    return ValidationReport(
        is_valid=not violations,
        errors=[violation.message for violation in violations],
        violations=violations,
    )


__all__ = ["ValidationReport", "validate_all"]
