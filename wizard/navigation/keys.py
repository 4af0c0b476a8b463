from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WizardSessionKeys:
    """Namespaced session-state keys so several wizards can share one session."""

    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"resume_wizard:{self.wizard_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def wizard_state(self) -> str:
        return self.namespace("state")
