"""Step-aware grouping of violations for the submission error summary."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from core.validators import Violation
from wizard.classifier import classify_violation
from wizard.step_registry import WIZARD_STEPS


@dataclass(frozen=True)
class StepErrorGroup:
    """Messages belonging to one step other than the current one."""

    ordinal: int
    step_id: str
    title: str
    messages: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ErrorSummary:
    """Violations split into the current step, other steps and unattributed ones.

    ``other_steps`` is ordered by step ordinal and is what the UI renders as
    jump shortcuts. ``general`` holds server errors that could not be tied
    to any step.
    """

    current_step_errors: list[str] = field(default_factory=list)
    other_steps: list[StepErrorGroup] = field(default_factory=list)
    general: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.current_step_errors)
            + sum(len(group.messages) for group in self.other_steps)
            + len(self.general)
        )

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def build_error_summary(violations: Iterable[Violation], current_ordinal: int) -> ErrorSummary:
    current: list[str] = []
    general: list[str] = []
    by_ordinal: dict[int, list[str]] = {}
    for violation in violations:
        ordinal = classify_violation(violation)
        if ordinal is None:
            general.append(violation.message)
        elif ordinal == current_ordinal:
            current.append(violation.message)
        else:
            by_ordinal.setdefault(ordinal, []).append(violation.message)

    groups = [
        StepErrorGroup(ordinal=step.ordinal, step_id=step.id, title=step.title, messages=by_ordinal[step.ordinal])
        for step in WIZARD_STEPS
        if step.ordinal in by_ordinal
    ]
    return ErrorSummary(current_step_errors=current, other_steps=groups, general=general)


__all__ = ["ErrorSummary", "StepErrorGroup", "build_error_summary"]
