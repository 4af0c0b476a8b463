"""Resume wizard package."""

from __future__ import annotations

import importlib
from typing import Any

from .step_registry import WIZARD_STEPS, StepDescriptor, StepDomain

_LAZY_EXPORTS: dict[str, str] = {
    "WizardController": "wizard.navigation.router",
    "SubmissionOrchestrator": "wizard.submission",
    "SubmissionResult": "wizard.submission",
    "SubmissionStatus": "wizard.submission",
    "ErrorSummary": "wizard.error_summary",
    "build_error_summary": "wizard.error_summary",
    "find_first_step_with_errors": "wizard.classifier",
    "suggest_resume_name": "wizard.naming",
}

__all__ = ["WIZARD_STEPS", "StepDescriptor", "StepDomain", *_LAZY_EXPORTS]


def __getattr__(name: str) -> Any:
    """Import heavier submodules on first access to avoid circular imports."""

    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__} has no attribute {name}")
    value: Any = getattr(importlib.import_module(module_name), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - convenience for REPLs
    return sorted(set(__all__))
