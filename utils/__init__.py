"""Utility helpers for the resume wizard."""

from __future__ import annotations

from .errors import display_error as display_error
from .errors import render_error_summary as render_error_summary
from .logging_context import configure_logging as configure_logging
from .logging_context import log_context as log_context

__all__ = ["configure_logging", "display_error", "log_context", "render_error_summary"]
