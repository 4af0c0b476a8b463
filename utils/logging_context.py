"""Context fields attached to every log record emitted by the wizard.

Each record carries the edit session, the wizard step, the submission mode
and the resume being edited, so a failed save can be traced back to the
step and resume it came from.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Final, Iterator

import config

_UNSET: Final[str] = "-"
_LOG_FORMAT: Final[str] = (
    "%(asctime)s %(levelname)s [session=%(session_id)s step=%(wizard_step)s "
    "mode=%(submission_mode)s resume=%(resume_id)s] %(name)s: %(message)s"
)

_CONTEXT_FIELDS: Final[dict[str, contextvars.ContextVar[str]]] = {
    name: contextvars.ContextVar(name, default=_UNSET)
    for name in ("session_id", "wizard_step", "submission_mode", "resume_id")
}
_base_record_factory = logging.getLogRecordFactory()
_factory_installed = False


def _as_field(value: object | None) -> str:
    if value is None:
        return _UNSET
    return str(value).strip() or _UNSET


def _context_record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    for name, var in _CONTEXT_FIELDS.items():
        setattr(record, name, var.get())
    return record


def configure_logging(*, level: int | str | None = None) -> None:
    """Install the context-aware record factory and the default format once."""

    global _factory_installed
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level if level is not None else config.LOG_LEVEL, format=_LOG_FORMAT)
    elif level is not None:
        root.setLevel(level)
    if not _factory_installed:
        logging.setLogRecordFactory(_context_record_factory)
        _factory_installed = True


def set_session_id(session_id: str | None) -> None:
    """Bind a session identifier for subsequent log records."""

    configure_logging()
    _CONTEXT_FIELDS["session_id"].set(_as_field(session_id))


def set_wizard_step(step: str | None) -> None:
    _CONTEXT_FIELDS["wizard_step"].set(_as_field(step))


def current_wizard_step() -> str:
    return _CONTEXT_FIELDS["wizard_step"].get()


@contextmanager
def log_context(**fields: object | None) -> Iterator[None]:
    """Temporarily bind context fields; ``None`` values leave a field as is.

    Accepted keywords: ``session_id``, ``wizard_step``, ``submission_mode``
    and ``resume_id``.
    """

    unknown = set(fields) - set(_CONTEXT_FIELDS)
    if unknown:
        raise TypeError(f"Unknown logging context field(s): {', '.join(sorted(unknown))}")
    tokens = [
        (_CONTEXT_FIELDS[name], _CONTEXT_FIELDS[name].set(_as_field(value)))
        for name, value in fields.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = [
    "configure_logging",
    "current_wizard_step",
    "log_context",
    "set_session_id",
    "set_wizard_step",
]
