"""Client-side wizard: step gating, persisted state and API-backed actions."""

from .actions import Wizard
from .api_client import ApiError, WizardApiClient
from .persistence import WizardStorage, dump_persisted, load_persisted
from .state import (
    FIRST_STEP,
    LAST_STEP,
    AnalysisState,
    JobDescriptionInput,
    ResumeFile,
    ResumeInput,
    WizardState,
    initial_state,
)
from .transitions import advance, can_proceed, go_to_step, retreat

__all__ = [
    "FIRST_STEP",
    "LAST_STEP",
    "AnalysisState",
    "ApiError",
    "JobDescriptionInput",
    "ResumeFile",
    "ResumeInput",
    "Wizard",
    "WizardApiClient",
    "WizardState",
    "WizardStorage",
    "advance",
    "can_proceed",
    "dump_persisted",
    "go_to_step",
    "initial_state",
    "load_persisted",
    "retreat",
]
