from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models.resume import (  # noqa: E402
    EducationItem,
    ExperienceItem,
    LanguageItem,
    PersonalInfo,
    SkillItem,
    WorkingDocument,
)
from wizard.navigation.router import WizardController  # noqa: E402


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture
def valid_document() -> WorkingDocument:
    """A document that satisfies every step's rules."""

    return WorkingDocument(
        personal_info=PersonalInfo(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            phone="+44 20 7946 0000",
            birth_date="1990-12-10",
            city="London",
            country="United Kingdom",
            years_of_experience=8,
        ),
        experience=[
            ExperienceItem(
                title="Backend Engineer",
                company="Analytical Engines Ltd",
                seniority_level="senior",
                start_date="2019-03-01",
                currently_working=True,
            )
        ],
        education=[
            EducationItem(
                institution="University of London",
                degree="BSc",
                field="Mathematics",
                start_date="2009-09-01",
                end_date="2012-06-30",
                currently_studying=False,
            )
        ],
        skills=[SkillItem(name="Python", level=5)],
        languages=[LanguageItem(name="English", proficiency="C2", is_native=True)],
        selected_template="moey",
        resume_name="Ada's Resume",
    )


@pytest.fixture
def controller() -> WizardController:
    return WizardController(wizard_id="test")
