"""Validate, name and persist the working document.

``SubmissionOrchestrator`` drives one save attempt end to end: it runs the
aggregate validator, relocates the user to the first broken step when the
document is incomplete, resolves a non-colliding resume name for new
resumes, builds the backend payload and dispatches it to the persistence
collaborator. Server-side field errors are classified back to wizard steps
exactly like local ones; generic failures only set a banner.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from constants.keys import PayloadKeys
from core.errors import ServerValidationError, SubmissionError
from core.resume_mapper import default_resume_name, to_persistence_payload, to_working_document
from core.validation import validate_all
from core.validators import Violation
from models.resume import WorkingDocument
from utils.logging_context import log_context
from wizard.classifier import find_first_step_with_errors, violation_from_field_error
from wizard.error_summary import ErrorSummary, build_error_summary
from wizard.naming import suggest_resume_name, validate_resume_name
from wizard.navigation.router import WizardController

logger = logging.getLogger(__name__)

NamePrompt = Callable[[str], "str | None | Awaitable[str | None]"]
CompletionCallback = Callable[[str], "None | Awaitable[None]"]


class ResumePersistence(Protocol):
    """Async contract of the networking layer that stores resumes."""

    async def fetch_resume(self, resume_id: str) -> Mapping[str, Any]: ...

    async def create_resume(
        self, payload: Mapping[str, Any], template_id: str | None, name: str
    ) -> Mapping[str, Any]: ...

    async def update_resume(
        self, resume_id: str, payload: Mapping[str, Any], template_id: str | None, name: str
    ) -> Mapping[str, Any]: ...

    async def list_resume_names(self) -> Sequence[str]: ...


class SubmissionMode(StrEnum):
    CREATE = "create"
    UPDATE = "update"


class SubmissionPhase(StrEnum):
    """Where the orchestrator is in its submit cycle."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class SubmissionStatus(StrEnum):
    """Outcome of one ``submit`` call."""

    SUCCESS = "success"
    INVALID = "invalid"
    FAILED = "failed"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    resume_id: str | None = None
    errors: list[str] = field(default_factory=list)
    summary: ErrorSummary | None = None
    banner: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.SUCCESS


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class SubmissionOrchestrator:
    """Run validate-and-submit cycles for one wizard instance.

    Only one cycle may be in flight: a second ``submit`` while the first is
    pending returns ``SubmissionStatus.IGNORED`` without touching any state.
    """

    def __init__(
        self,
        controller: WizardController,
        client: ResumePersistence,
        *,
        name_prompt: NamePrompt | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self._controller = controller
        self._client = client
        self._name_prompt = name_prompt
        self._on_complete = on_complete
        self._phase = SubmissionPhase.IDLE

    @property
    def phase(self) -> SubmissionPhase:
        return self._phase

    @property
    def is_busy(self) -> bool:
        return self._phase is not SubmissionPhase.IDLE

    async def submit(
        self,
        document: WorkingDocument | None = None,
        mode: SubmissionMode | str = SubmissionMode.CREATE,
    ) -> SubmissionResult:
        """Validate ``document`` (default: the controller's) and persist it.

        Args:
            document: Document to submit; defaults to the live working document.
            mode: ``"create"`` for a new resume, ``"update"`` for the one the
                controller was hydrated with.

        Returns:
            The outcome. Validation problems are reported here and never
            raised.
        """

        if self.is_busy:
            logger.info("Ignoring submit while a submission is %s", self._phase)
            return SubmissionResult(status=SubmissionStatus.IGNORED)
        submission_mode = SubmissionMode(mode)
        controller = self._controller
        with log_context(submission_mode=submission_mode.value, resume_id=controller.resume_id):
            try:
                self._phase = SubmissionPhase.VALIDATING
                return await self._run(document if document is not None else controller.document, submission_mode)
            finally:
                self._phase = SubmissionPhase.IDLE

    async def _run(self, document: WorkingDocument, mode: SubmissionMode) -> SubmissionResult:
        controller = self._controller
        controller.clear_banner()
        report = validate_all(document)
        if not report.is_valid:
            logger.info("Submission blocked by %d validation error(s)", len(report.violations))
            return self._relocate(report.violations, replace=True, status=SubmissionStatus.INVALID)
        # Server badges from an earlier attempt are stale once local checks pass.
        controller.set_violations([])

        try:
            if mode is SubmissionMode.UPDATE:
                resume_id = controller.resume_id
                if resume_id is None:
                    raise SubmissionError("There is no saved resume to update.")
                name = (document.resume_name or "").strip() or default_resume_name(document)
            else:
                resume_id = None
                resolved = await self._resolve_name(document)
                if isinstance(resolved, SubmissionResult):
                    return resolved
                name = resolved

            payload = to_persistence_payload(document, include_ids=mode is SubmissionMode.UPDATE)
            payload[PayloadKeys.RESUME_NAME] = name
            self._phase = SubmissionPhase.SUBMITTING
            if resume_id is None:
                response = await self._client.create_resume(payload, document.selected_template, name)
            else:
                response = await self._client.update_resume(resume_id, payload, document.selected_template, name)
        except ServerValidationError as error:
            logger.warning("Server rejected the resume with %d field error(s)", len(error.field_errors))
            if controller.is_closed:
                return SubmissionResult(status=SubmissionStatus.FAILED, errors=[str(error)])
            violations = [violation_from_field_error(item.field_path, item.message) for item in error.field_errors]
            return self._relocate(violations, replace=False, status=SubmissionStatus.FAILED)
        except SubmissionError as error:
            logger.warning("Resume submission failed: %s", error, exc_info=True)
            if not controller.is_closed:
                controller.set_banner(str(error))
            return SubmissionResult(status=SubmissionStatus.FAILED, errors=[str(error)], banner=str(error))

        saved_id = str(response.get("id") or resume_id or "")
        if controller.is_closed:
            logger.info("Wizard closed before the save completed; leaving state untouched")
            return SubmissionResult(status=SubmissionStatus.SUCCESS, resume_id=saved_id or None)
        if saved_id:
            controller.mark_persisted(saved_id)
        logger.info("Resume %s saved", saved_id or "-")
        if self._on_complete is not None:
            await _resolve(self._on_complete(saved_id))
        return SubmissionResult(status=SubmissionStatus.SUCCESS, resume_id=saved_id or None)

    async def _resolve_name(self, document: WorkingDocument) -> str | SubmissionResult:
        """Pick the name for a new resume, prompting when none is usable yet."""

        existing = list(await self._client.list_resume_names())
        requested = (document.resume_name or "").strip()
        suggestion = suggest_resume_name(requested or default_resume_name(document), existing)
        if requested and suggestion == requested:
            chosen: str | None = requested
        elif self._name_prompt is not None:
            chosen = await _resolve(self._name_prompt(suggestion))
        else:
            chosen = suggestion

        if chosen is None:
            logger.info("Resume naming cancelled")
            return SubmissionResult(status=SubmissionStatus.CANCELLED)
        problems = validate_resume_name(chosen, existing)
        if problems:
            return SubmissionResult(status=SubmissionStatus.INVALID, errors=problems, banner=problems[0])
        chosen = chosen.strip()
        if not self._controller.is_closed and chosen != self._controller.document.resume_name:
            self._controller.update_domain({"resume_name": chosen})
        return chosen

    def _relocate(
        self,
        violations: list[Violation],
        *,
        replace: bool,
        status: SubmissionStatus,
    ) -> SubmissionResult:
        """Store ``violations``, jump to the first broken step and summarise."""

        controller = self._controller
        if replace:
            controller.set_violations(violations)
        else:
            controller.add_violations(violations)
        target = find_first_step_with_errors(violations)
        if target is not None:
            controller.jump_to(target)
        summary = build_error_summary(controller.violations, controller.current_step)
        return SubmissionResult(
            status=status,
            resume_id=controller.resume_id,
            errors=[violation.message for violation in violations],
            summary=summary,
        )

    async def load_resume(self, resume_id: str) -> WorkingDocument:
        """Fetch a saved resume and hydrate the controller for editing."""

        with log_context(submission_mode=SubmissionMode.UPDATE.value, resume_id=resume_id):
            persisted = await self._client.fetch_resume(resume_id)
            document = to_working_document(persisted)
            if self._controller.is_closed:
                return document
            self._controller.hydrate(document, resume_id=resume_id)
            logger.info("Loaded resume for editing")
            return document


__all__ = [
    "ResumePersistence",
    "SubmissionMode",
    "SubmissionOrchestrator",
    "SubmissionPhase",
    "SubmissionResult",
    "SubmissionStatus",
]
