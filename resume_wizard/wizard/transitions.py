"""Pure state transitions for the wizard.

Every function takes a ``WizardState`` and returns a new one; nothing here
raises or performs I/O. Navigation that is not allowed returns the state
unchanged.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional

from .state import FIRST_STEP, LAST_STEP, ResumeFile, WizardState

MIN_TEXT_LENGTH = 50


def _has_job_text(state: WizardState) -> bool:
    return len(state.job_description.raw_text) > MIN_TEXT_LENGTH


def _has_resume(state: WizardState) -> bool:
    # A restored file_name stands in for the attached file, which is never persisted.
    resume = state.resume
    return len(resume.raw_text) > MIN_TEXT_LENGTH or resume.file is not None or bool(resume.file_name)


def can_proceed(state: WizardState, step: int) -> bool:
    """Return True when ``step`` may be entered given the data collected so far."""
    if step == 1:
        return True
    if step == 2:
        return _has_job_text(state)
    if step == 3:
        return _has_job_text(state) and _has_resume(state)
    if step == 4:
        return state.analysis.data is not None
    if step == 5:
        return state.optimized_resume is not None
    return False


def highest_reachable_step(state: WizardState, ceiling: int = LAST_STEP) -> int:
    """Largest step no greater than ``ceiling`` whose gate currently holds."""
    for step in range(min(ceiling, LAST_STEP), FIRST_STEP, -1):
        if can_proceed(state, step):
            return step
    return FIRST_STEP


# Navigation


def go_to_step(state: WizardState, target: int) -> WizardState:
    if not can_proceed(state, target):
        return state
    return replace(state, current_step=target)


def advance(state: WizardState) -> WizardState:
    target = state.current_step + 1
    if state.current_step >= LAST_STEP or not can_proceed(state, target):
        return state
    return replace(state, current_step=target)


def retreat(state: WizardState) -> WizardState:
    if state.current_step <= FIRST_STEP:
        return state
    return replace(state, current_step=state.current_step - 1)


def reset(state: WizardState) -> WizardState:
    """Clear every step's data and return to step 1, keeping the session id."""
    return WizardState(session_id=state.session_id)


def set_session_id(state: WizardState, session_id: Optional[str]) -> WizardState:
    return replace(state, session_id=session_id)


# Step 1: job description


def _merge_job(state: WizardState, **changes: Any) -> WizardState:
    return replace(state, job_description=replace(state.job_description, **changes))


def set_job_source(state: WizardState, source: str) -> WizardState:
    return _merge_job(state, source=source)


def set_job_url(state: WizardState, url: Optional[str]) -> WizardState:
    return _merge_job(state, url=url)


def set_job_text(state: WizardState, raw_text: str) -> WizardState:
    return _merge_job(state, raw_text=raw_text)


def set_job_parsed(state: WizardState, parsed: Optional[Dict[str, Any]]) -> WizardState:
    return _merge_job(state, parsed=parsed)


def set_job_loading(state: WizardState, is_loading: bool) -> WizardState:
    return _merge_job(state, is_loading=is_loading)


def set_job_error(state: WizardState, error: Optional[str]) -> WizardState:
    return _merge_job(state, error=error)


# Step 2: resume


def _merge_resume(state: WizardState, **changes: Any) -> WizardState:
    return replace(state, resume=replace(state.resume, **changes))


def set_resume_source(state: WizardState, source: str) -> WizardState:
    return _merge_resume(state, source=source)


def set_resume_file(state: WizardState, file: ResumeFile) -> WizardState:
    return _merge_resume(state, file=file, file_name=file.name)


def set_resume_text(state: WizardState, raw_text: str) -> WizardState:
    return _merge_resume(state, raw_text=raw_text)


def set_resume_parsed(state: WizardState, parsed: Optional[Dict[str, Any]]) -> WizardState:
    return _merge_resume(state, parsed=parsed)


def set_resume_loading(state: WizardState, is_loading: bool) -> WizardState:
    return _merge_resume(state, is_loading=is_loading)


def set_resume_error(state: WizardState, error: Optional[str]) -> WizardState:
    return _merge_resume(state, error=error)


# Step 3: analysis and clarification questions


def _merge_analysis(state: WizardState, **changes: Any) -> WizardState:
    return replace(state, analysis=replace(state.analysis, **changes))


def set_analysis_loading(state: WizardState, is_loading: bool) -> WizardState:
    return _merge_analysis(state, is_loading=is_loading)


def set_analysis_data(state: WizardState, data: Dict[str, Any]) -> WizardState:
    # New questions restart the pointer so it stays inside the list.
    questions = list(data.get("questions") or [])
    return _merge_analysis(state, data=data, questions=questions, current_question_index=0)


def set_analysis_error(state: WizardState, error: Optional[str]) -> WizardState:
    return _merge_analysis(state, error=error)


def answer_question(state: WizardState, question_id: str, text: str) -> WizardState:
    """Record the answer for a question that has been shown; other ids are ignored."""
    if question_id not in state.analysis.shown_question_ids():
        return state
    answers = dict(state.analysis.answers)
    answers[question_id] = text
    return _merge_analysis(state, answers=answers)


def _step_question_pointer(state: WizardState) -> WizardState:
    analysis = state.analysis
    if analysis.current_question_index >= len(analysis.questions) - 1:
        return state
    return _merge_analysis(state, current_question_index=analysis.current_question_index + 1)


def next_question(state: WizardState) -> WizardState:
    return _step_question_pointer(state)


def skip_question(state: WizardState) -> WizardState:
    # Same movement as next_question; skipped questions are not tracked.
    return _step_question_pointer(state)


# Steps 4-5: optimized resume


def set_optimized_resume(state: WizardState, optimized: Optional[Dict[str, Any]]) -> WizardState:
    return replace(state, optimized_resume=optimized)


def set_optimizing(state: WizardState, is_optimizing: bool) -> WizardState:
    return replace(state, is_optimizing=is_optimizing)


def set_optimization_error(state: WizardState, error: Optional[str]) -> WizardState:
    return replace(state, optimization_error=error)
