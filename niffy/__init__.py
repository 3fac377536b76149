"""Visual regression testing across a base host and a test host."""

from niffy.errors import (
    DiffError,
    NiffyError,
    SessionBusyError,
    SessionNotStartedError,
    ThresholdExceededError,
)
from niffy.models.config import NiffyConfig, TimingConfig, ViewportConfig
from niffy.models.result import DiffResult, RunResult
from niffy.orchestrator import Niffy

__all__ = [
    "DiffError",
    "DiffResult",
    "Niffy",
    "NiffyConfig",
    "NiffyError",
    "RunResult",
    "SessionBusyError",
    "SessionNotStartedError",
    "ThresholdExceededError",
    "TimingConfig",
    "ViewportConfig",
]
