"""Navigation state for the resume wizard."""

from __future__ import annotations

from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation.router import WizardController

__all__ = [
    "WizardController",
    "WizardSessionKeys",
]
