from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import Any, cast

import streamlit as st

from constants.keys import StateKeys
from core.validators import Violation
from models.resume import WorkingDocument
from utils.logging_context import set_wizard_step
from wizard.classifier import classify_violation
from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation_types import StepView
from wizard.step_registry import WIZARD_STEPS, StepDescriptor

logger = logging.getLogger(__name__)


class WizardController:
    """Hold the wizard's step position, working document and active violations.

    State lives in a session mapping (``st.session_state`` unless another
    mapping is injected) under a key namespaced by ``wizard_id``, so each edit
    session owns an independent controller state. Navigation is never gated:
    only the final submission checks validity.
    """

    def __init__(
        self,
        *,
        steps: Sequence[StepDescriptor] = WIZARD_STEPS,
        wizard_id: str = "default",
        session_state: MutableMapping[str, object] | None = None,
    ) -> None:
        if not steps:
            raise ValueError("A wizard needs at least one step")
        self._steps: tuple[StepDescriptor, ...] = tuple(steps)
        self._session_state = cast(
            MutableMapping[str, object],
            session_state if session_state is not None else st.session_state,
        )
        self._wizard_id = wizard_id
        self._session_keys = WizardSessionKeys(wizard_id=wizard_id)
        self.ensure_state_defaults()

    @property
    def wizard_id(self) -> str:
        return self._wizard_id

    @property
    def steps(self) -> tuple[StepDescriptor, ...]:
        return self._steps

    @property
    def state(self) -> dict[str, Any]:
        raw_state = self._session_state.get(self._session_keys.wizard_state)
        if isinstance(raw_state, dict):
            return raw_state
        if isinstance(raw_state, Mapping):
            coerced: dict[str, Any] = dict(raw_state)
        else:
            coerced = {}
        self._session_state[self._session_keys.wizard_state] = coerced
        return coerced

    def ensure_state_defaults(self) -> None:
        state = self.state
        state.setdefault(StateKeys.CURRENT_STEP, 0)
        if not isinstance(state.get(StateKeys.DOCUMENT), WorkingDocument):
            state[StateKeys.DOCUMENT] = WorkingDocument()
        if not isinstance(state.get(StateKeys.COMPLETED_STEPS), set):
            state[StateKeys.COMPLETED_STEPS] = set()
        if not isinstance(state.get(StateKeys.VIOLATIONS), list):
            state[StateKeys.VIOLATIONS] = []
        state.setdefault(StateKeys.BANNER, None)
        state.setdefault(StateKeys.RESUME_ID, None)
        state.setdefault(StateKeys.CLOSED, False)

    # -- read side -----------------------------------------------------

    @property
    def last_ordinal(self) -> int:
        return len(self._steps) - 1

    @property
    def current_step(self) -> int:
        raw = self.state.get(StateKeys.CURRENT_STEP)
        if isinstance(raw, int) and 0 <= raw <= self.last_ordinal:
            return raw
        self.state[StateKeys.CURRENT_STEP] = 0
        return 0

    @property
    def current_step_descriptor(self) -> StepDescriptor:
        return self._steps[self.current_step]

    @property
    def is_first_step(self) -> bool:
        return self.current_step == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.last_ordinal

    @property
    def progress(self) -> float:
        """Completion percentage shown next to the step strip."""

        return (self.current_step + 1) / len(self._steps) * 100

    @property
    def document(self) -> WorkingDocument:
        return cast(WorkingDocument, self.state[StateKeys.DOCUMENT])

    @property
    def completed_steps(self) -> frozenset[int]:
        return frozenset(cast(set[int], self.state[StateKeys.COMPLETED_STEPS]))

    @property
    def violations(self) -> list[Violation]:
        return list(cast(list[Violation], self.state[StateKeys.VIOLATIONS]))

    @property
    def banner(self) -> str | None:
        return cast(str | None, self.state.get(StateKeys.BANNER))

    @property
    def resume_id(self) -> str | None:
        return cast(str | None, self.state.get(StateKeys.RESUME_ID))

    @property
    def is_closed(self) -> bool:
        return bool(self.state.get(StateKeys.CLOSED))

    def violations_for_step(self, ordinal: int) -> list[Violation]:
        return [violation for violation in self.violations if classify_violation(violation) == ordinal]

    def errors_for_step(self, ordinal: int) -> list[str]:
        """Return the active violation messages that belong to ``ordinal``."""

        return [violation.message for violation in self.violations_for_step(ordinal)]

    def step_views(self) -> list[StepView]:
        counts: dict[int, int] = {}
        for violation in self.violations:
            ordinal = classify_violation(violation)
            if ordinal is not None:
                counts[ordinal] = counts.get(ordinal, 0) + 1
        completed = self.completed_steps
        current = self.current_step
        return [
            StepView(
                step=step,
                is_current=step.ordinal == current,
                completed=step.ordinal in completed,
                has_errors=counts.get(step.ordinal, 0) > 0,
                error_count=counts.get(step.ordinal, 0),
            )
            for step in self._steps
        ]

    # -- transitions ---------------------------------------------------

    def _set_current_step(self, ordinal: int) -> None:
        self.state[StateKeys.CURRENT_STEP] = ordinal
        set_wizard_step(self._steps[ordinal].id)

    def next(self) -> None:
        """Mark the current step completed and advance; a no-op on the last step."""

        current = self.current_step
        self.state[StateKeys.COMPLETED_STEPS].add(current)
        if current < self.last_ordinal:
            self._set_current_step(current + 1)

    def previous(self) -> None:
        current = self.current_step
        if current > 0:
            self._set_current_step(current - 1)

    def jump_to(self, ordinal: int) -> None:
        """Move to ``ordinal`` (clamped into range); never raises."""

        try:
            target = int(ordinal)
        except OverflowError:
            target = self.last_ordinal if ordinal > 0 else 0
        except (TypeError, ValueError):
            logger.warning("Ignoring jump to non-numeric step %r", ordinal)
            return
        self._set_current_step(max(0, min(target, self.last_ordinal)))

    def update_domain(self, partial: Mapping[str, Any] | WorkingDocument) -> WorkingDocument:
        """Merge ``partial`` into the document and drop the active violations."""

        document = self.document
        touched = document.touched_fields(partial)
        self.state[StateKeys.DOCUMENT] = document.merged(partial)
        logger.debug("Updated document fields %s", ", ".join(touched) or "-")
        self.suppress_until_revalidated()
        return self.document

    def suppress_until_revalidated(self) -> None:
        """Hide every violation until the next explicit validate-and-submit cycle."""

        self.state[StateKeys.VIOLATIONS] = []

    def set_violations(self, violations: Iterable[Violation]) -> None:
        self.state[StateKeys.VIOLATIONS] = list(violations)

    def add_violations(self, violations: Iterable[Violation]) -> None:
        merged = self.violations
        for violation in violations:
            if violation not in merged:
                merged.append(violation)
        self.state[StateKeys.VIOLATIONS] = merged

    def set_banner(self, message: str | None) -> None:
        self.state[StateKeys.BANNER] = message

    def clear_banner(self) -> None:
        self.state[StateKeys.BANNER] = None

    def hydrate(self, document: WorkingDocument, *, resume_id: str | None = None) -> None:
        """Replace the working document, e.g. after fetching or importing a resume."""

        self.reset()
        self.state[StateKeys.DOCUMENT] = document
        self.state[StateKeys.RESUME_ID] = resume_id

    def mark_persisted(self, resume_id: str) -> None:
        self.state[StateKeys.RESUME_ID] = resume_id

    def close(self) -> None:
        """Mark the wizard as unmounted; late responses become no-ops."""

        self.state[StateKeys.CLOSED] = True

    def reset(self) -> None:
        self._session_state[self._session_keys.wizard_state] = {}
        self.ensure_state_defaults()
        set_wizard_step(self._steps[0].id)


__all__ = ["WizardController"]
