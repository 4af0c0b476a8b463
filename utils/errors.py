"""Utility helpers for rendering error messages in Streamlit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Final

import streamlit as st

import config

if TYPE_CHECKING:
    from wizard.error_summary import ErrorSummary

_DETAILS_LABEL: Final[str] = "Details"
_CURRENT_STEP_HEADING: Final[str] = "Please fix the following on this step:"
_OTHER_STEPS_HEADING: Final[str] = "Other steps need attention:"
_GENERAL_HEADING: Final[str] = "The server also reported:"


def display_error(msg: str, detail: str | None = None) -> None:
    """Render a user-facing error with optional debug details.

    Args:
        msg: Short error message for the user.
        detail: Optional technical detail shown when debug mode is enabled.
    """

    st.error(msg)
    if detail and config.DEBUG:
        with st.expander(_DETAILS_LABEL):
            st.code(detail)


def render_error_summary(summary: ErrorSummary, on_jump: Callable[[int], None]) -> None:
    """Render grouped submission errors with a jump button per other step.

    Args:
        summary: Output of ``build_error_summary``.
        on_jump: Called with the target ordinal when a jump button is clicked.
    """

    if summary.is_empty:
        return
    if summary.current_step_errors:
        st.error(_CURRENT_STEP_HEADING)
        for message in summary.current_step_errors:
            st.markdown(f"- {message}")
    if summary.other_steps:
        st.warning(_OTHER_STEPS_HEADING)
        for group in summary.other_steps:
            count = len(group.messages)
            st.button(
                f"{group.title} ({count})",
                key=f"resume_wizard.error_jump.{group.step_id}",
                on_click=on_jump,
                args=(group.ordinal,),
            )
    if summary.general:
        st.info(_GENERAL_HEADING)
        for message in summary.general:
            st.markdown(f"- {message}")


__all__ = ["display_error", "render_error_summary"]
