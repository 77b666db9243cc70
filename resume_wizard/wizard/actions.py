"""Wizard controller: owns the current state and runs API-backed actions."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from . import transitions
from .api_client import ApiError, WizardApiClient
from .persistence import WizardStorage
from .state import ResumeFile, WizardState, initial_state

_LOGGER = logging.getLogger(__name__)


class Wizard:
    """Holds a ``WizardState`` and applies transitions to it.

    Navigation and setters never fail. The ``submit_*``, ``start_analysis``,
    ``submit_answers`` and ``run_optimization`` actions talk to the API: they
    record a failure as the matching section's ``error`` and re-raise the
    ``ApiError`` so callers can react.
    """

    def __init__(
        self,
        api: WizardApiClient,
        storage: Optional[WizardStorage] = None,
        state: Optional[WizardState] = None,
    ) -> None:
        self.api = api
        self.storage = storage
        if state is None and storage is not None:
            state = storage.load()
        self.state = state or initial_state()

    def _apply(self, transition: Callable[..., WizardState], *args: Any) -> WizardState:
        self.state = transition(self.state, *args)
        if self.storage is not None:
            self.storage.save(self.state)
        return self.state

    # Navigation

    @property
    def current_step(self) -> int:
        return self.state.current_step

    def can_proceed(self, step: int) -> bool:
        return transitions.can_proceed(self.state, step)

    def go_to_step(self, target: int) -> WizardState:
        return self._apply(transitions.go_to_step, target)

    def advance(self) -> WizardState:
        return self._apply(transitions.advance)

    def retreat(self) -> WizardState:
        return self._apply(transitions.retreat)

    def reset(self) -> WizardState:
        return self._apply(transitions.reset)

    def start_over(self) -> WizardState:
        """Reset every step and drop whatever was persisted."""
        self.state = transitions.reset(self.state)
        if self.storage is not None:
            self.storage.clear()
        return self.state

    # Field setters

    def set_job_source(self, source: str) -> WizardState:
        return self._apply(transitions.set_job_source, source)

    def set_job_url(self, url: Optional[str]) -> WizardState:
        return self._apply(transitions.set_job_url, url)

    def set_job_text(self, text: str) -> WizardState:
        return self._apply(transitions.set_job_text, text)

    def set_resume_source(self, source: str) -> WizardState:
        return self._apply(transitions.set_resume_source, source)

    def set_resume_file(self, file: ResumeFile) -> WizardState:
        return self._apply(transitions.set_resume_file, file)

    def set_resume_text(self, text: str) -> WizardState:
        return self._apply(transitions.set_resume_text, text)

    def set_optimized_resume(self, optimized: Optional[Dict[str, Any]]) -> WizardState:
        return self._apply(transitions.set_optimized_resume, optimized)

    # Questions

    def answer_question(self, question_id: str, text: str) -> WizardState:
        return self._apply(transitions.answer_question, question_id, text)

    def next_question(self) -> WizardState:
        return self._apply(transitions.next_question)

    def skip_question(self) -> WizardState:
        return self._apply(transitions.skip_question)

    # API-backed actions

    def init_session(self) -> str:
        """Return the session id, creating a session on first use."""
        # Presence check only; two concurrent first calls could both create one.
        if self.state.session_id is None:
            session_id = self.api.create_session()
            self._apply(transitions.set_session_id, session_id)
            _LOGGER.debug("Created wizard session %s", session_id)
        return self.state.session_id

    def submit_job_url(self, url: str) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_job_url, url)
        self._apply(transitions.set_job_error, None)
        self._apply(transitions.set_job_loading, True)
        try:
            parsed = self.api.scrape_job(url, session_id)
        except ApiError as exc:
            self._apply(transitions.set_job_loading, False)
            self._apply(transitions.set_job_error, exc.message)
            raise

        raw_text = ""
        if isinstance(parsed, dict):
            raw_text = parsed.get("raw_text") or parsed.get("description") or ""
        self._apply(transitions.set_job_parsed, parsed)
        self._apply(transitions.set_job_text, raw_text)
        return self._apply(transitions.set_job_loading, False)

    def submit_job_text(self, text: str) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_job_text, text)
        self._apply(transitions.set_job_error, None)
        try:
            self.api.update_session(session_id, {"job_description": {"raw_text": text}})
        except ApiError as exc:
            self._apply(transitions.set_job_error, exc.message)
            raise
        return self.state

    def submit_resume_file(self, file: ResumeFile) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_resume_file, file)
        self._apply(transitions.set_resume_error, None)
        self._apply(transitions.set_resume_loading, True)
        try:
            self.api.upload_resume(file, session_id)
        except ApiError as exc:
            self._apply(transitions.set_resume_loading, False)
            self._apply(transitions.set_resume_error, exc.message)
            raise
        return self._apply(transitions.set_resume_loading, False)

    def submit_resume_text(self, text: str) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_resume_text, text)
        self._apply(transitions.set_resume_error, None)
        try:
            self.api.update_session(session_id, {"resume_data": {"raw_text": text}})
        except ApiError as exc:
            self._apply(transitions.set_resume_error, exc.message)
            raise
        return self.state

    def start_analysis(self) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_analysis_error, None)
        self._apply(transitions.set_analysis_loading, True)
        try:
            analysis = self.api.analyze(session_id)
        except ApiError as exc:
            self._apply(transitions.set_analysis_loading, False)
            self._apply(transitions.set_analysis_error, exc.message)
            raise
        self._apply(transitions.set_analysis_data, analysis)
        return self._apply(transitions.set_analysis_loading, False)

    def submit_answers(self) -> WizardState:
        """Store the collected answers on the server-side session."""
        session_id = self.init_session()
        try:
            self.api.update_session(session_id, {"answers": dict(self.state.analysis.answers)})
        except ApiError as exc:
            self._apply(transitions.set_analysis_error, exc.message)
            raise
        return self.state

    def run_optimization(self) -> WizardState:
        session_id = self.init_session()
        self._apply(transitions.set_optimization_error, None)
        self._apply(transitions.set_optimizing, True)
        try:
            optimized = self.api.optimize(session_id)
        except ApiError as exc:
            self._apply(transitions.set_optimizing, False)
            self._apply(transitions.set_optimization_error, exc.message)
            raise
        self._apply(transitions.set_optimized_resume, optimized)
        return self._apply(transitions.set_optimizing, False)
