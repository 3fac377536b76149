"""Exceptions raised by niffy."""

from __future__ import annotations


class NiffyError(Exception):
    """Base class for niffy errors."""


class SessionNotStartedError(NiffyError):
    """Raised when the browser session is used before start()."""


class SessionBusyError(NiffyError):
    """Raised when a second operation enters a session that is already in use."""


class DiffError(NiffyError):
    """Raised when two screenshots cannot be compared."""


class ThresholdExceededError(NiffyError, AssertionError):
    """Raised when a capture diverges by more than the configured threshold."""

    def __init__(self, message: str, percentage: float, diff_filepath: str):
        super().__init__(message)
        self.percentage = percentage
        self.diff_filepath = diff_filepath
