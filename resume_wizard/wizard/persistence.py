"""Saving and restoring the subset of wizard state that survives a reload.

Only the fields modelled by ``PersistedWizard`` are written. Loading flags,
attached files, parsed payloads, analysis results and the optimized resume
always start empty after a reload.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .state import (
    FIRST_STEP,
    AnalysisState,
    JobDescriptionInput,
    ResumeInput,
    WizardState,
)
from .transitions import highest_reachable_step

_LOGGER = logging.getLogger(__name__)

STORAGE_KEY = "resume-wizard-storage"


class _PersistedModel(BaseModel):
    """camelCase document model where a malformed field falls back to its default."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(cls, value, handler, info):
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)


class PersistedJobDescription(_PersistedModel):
    source: Literal["url", "text"] = "text"
    url: Optional[str] = None
    raw_text: str = ""


class PersistedResume(_PersistedModel):
    source: Literal["file", "text"] = "file"
    raw_text: str = ""
    file_name: Optional[str] = None


class PersistedAnalysis(_PersistedModel):
    answers: Dict[str, str] = Field(default_factory=dict)


class PersistedWizard(_PersistedModel):
    session_id: Optional[str] = None
    current_step: StrictInt = FIRST_STEP
    job_description: PersistedJobDescription = Field(default_factory=PersistedJobDescription)
    resume: PersistedResume = Field(default_factory=PersistedResume)
    analysis: PersistedAnalysis = Field(default_factory=PersistedAnalysis)

    @classmethod
    def from_state(cls, state: WizardState) -> "PersistedWizard":
        return cls(
            session_id=state.session_id,
            current_step=state.current_step,
            job_description=PersistedJobDescription(
                source=state.job_description.source,
                url=state.job_description.url,
                raw_text=state.job_description.raw_text,
            ),
            resume=PersistedResume(
                source=state.resume.source,
                raw_text=state.resume.raw_text,
                file_name=state.resume.file_name,
            ),
            analysis=PersistedAnalysis(answers=dict(state.analysis.answers)),
        )

    def to_state(self) -> WizardState:
        state = WizardState(
            session_id=self.session_id,
            job_description=JobDescriptionInput(
                source=self.job_description.source,
                url=self.job_description.url,
                raw_text=self.job_description.raw_text,
            ),
            resume=ResumeInput(
                source=self.resume.source,
                raw_text=self.resume.raw_text,
                file_name=self.resume.file_name,
            ),
            analysis=AnalysisState(answers=dict(self.analysis.answers)),
        )
        # Analysis and the optimized resume are gone, so the restored step
        # drops back to the furthest step whose gate still holds.
        return replace(state, current_step=highest_reachable_step(state, ceiling=self.current_step))


def dump_persisted(state: WizardState) -> Dict[str, Any]:
    """Return the JSON-serializable subset of ``state`` that is kept across reloads."""
    return PersistedWizard.from_state(state).model_dump(by_alias=True)


def load_persisted(payload: Dict[str, Any]) -> WizardState:
    """Rebuild a wizard state from a persisted document, ignoring unknown or malformed fields."""
    return PersistedWizard.model_validate(payload).to_state()


class WizardStorage:
    """JSON file holding persisted wizard state under a single storage key."""

    def __init__(self, path: Union[str, Path], key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            contents = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _LOGGER.warning("Ignoring unreadable wizard storage at %s", self.path, exc_info=True)
            return {}
        return contents if isinstance(contents, dict) else {}

    def _write_all(self, contents: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(contents, indent=2), encoding="utf-8")

    def load(self) -> Optional[WizardState]:
        """Return the stored state, or None when nothing has been saved yet."""
        stored = self._read_all().get(self.key)
        if not isinstance(stored, dict):
            return None
        return load_persisted(stored)

    def save(self, state: WizardState) -> None:
        contents = self._read_all()
        contents[self.key] = dump_persisted(state)
        self._write_all(contents)

    def clear(self) -> None:
        contents = self._read_all()
        if contents.pop(self.key, None) is not None:
            self._write_all(contents)
