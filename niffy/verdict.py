"""Pass/fail policy for a diff result."""

from __future__ import annotations

import logging
import math

from niffy.errors import ThresholdExceededError
from niffy.models.result import DiffResult

logger = logging.getLogger(__name__)


def format_percentage(percentage: float) -> str:
    """Floor to 4 decimal places and render without trailing zeros, e.g. ``30%``."""
    floored = math.floor(percentage * 10000) / 10000
    text = f"{floored:.4f}".rstrip("0").rstrip(".")
    return f"{text}%"


def failure_message(result: DiffResult) -> str:
    return f"{format_percentage(result.percentage)} different, open {result.diff_filepath}"


def check(result: DiffResult, threshold: float) -> None:
    """Raise ThresholdExceededError when the result diverges more than ``threshold``.

    ``threshold`` uses the same 0-100 scale as ``result.percentage``; a value
    exactly at the threshold passes.
    """
    if result.percentage > threshold:
        message = failure_message(result)
        logger.info("Visual diff over threshold (%.4f > %s): %s",
                    result.percentage, threshold, result.diff_filepath)
        raise ThresholdExceededError(message, result.percentage, result.diff_filepath)
    logger.debug("Visual diff within threshold (%.4f <= %s)", result.percentage, threshold)
