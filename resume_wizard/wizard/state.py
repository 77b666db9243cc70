"""Immutable records describing the wizard's five steps of form data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FIRST_STEP = 1
LAST_STEP = 5


@dataclass(frozen=True)
class ResumeFile:
    """A resume file attached in the browser, not yet (or already) uploaded."""

    name: str
    content: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class JobDescriptionInput:
    source: str = "text"
    url: Optional[str] = None
    raw_text: str = ""
    parsed: Optional[Dict[str, Any]] = None
    is_loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class ResumeInput:
    source: str = "file"
    file: Optional[ResumeFile] = None
    file_name: Optional[str] = None
    raw_text: str = ""
    parsed: Optional[Dict[str, Any]] = None
    is_loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class AnalysisState:
    is_loading: bool = False
    data: Optional[Dict[str, Any]] = None
    questions: List[Dict[str, Any]] = field(default_factory=list)
    answers: Dict[str, str] = field(default_factory=dict)
    current_question_index: int = 0
    error: Optional[str] = None

    @property
    def current_question(self) -> Optional[Dict[str, Any]]:
        if 0 <= self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return None

    def shown_question_ids(self) -> List[str]:
        """Ids of every question up to and including the current one."""
        shown = self.questions[: self.current_question_index + 1]
        return [str(question.get("id")) for question in shown if question.get("id") is not None]


@dataclass(frozen=True)
class WizardState:
    session_id: Optional[str] = None
    current_step: int = FIRST_STEP
    job_description: JobDescriptionInput = field(default_factory=JobDescriptionInput)
    resume: ResumeInput = field(default_factory=ResumeInput)
    analysis: AnalysisState = field(default_factory=AnalysisState)
    optimized_resume: Optional[Dict[str, Any]] = None
    is_optimizing: bool = False
    optimization_error: Optional[str] = None


def initial_state() -> WizardState:
    """Return a brand new wizard state positioned on the first step."""
    return WizardState()
