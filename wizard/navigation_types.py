from __future__ import annotations

from dataclasses import dataclass

from wizard.step_registry import StepDescriptor


@dataclass(frozen=True)
class StepView:
    """Per-step flags the rendering layer needs for the step strip."""

    step: StepDescriptor
    is_current: bool
    completed: bool
    has_errors: bool
    error_count: int
