"""Diff evaluator — turns raw pixel counts into a percentage divergence."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from niffy.models.result import DiffResult, PixelDiff

from .pixel_diff import diff_images

logger = logging.getLogger(__name__)

DiffFn = Callable[[Path, Path, Path, int], PixelDiff]


def to_result(pixels: PixelDiff, diff_path: str | Path) -> DiffResult:
    """Derive the 0-100 percentage for a pixel diff."""
    return DiffResult(
        differences=pixels.differences,
        total=pixels.total,
        percentage=pixels.differences / pixels.total * 100,
        diff_filepath=str(diff_path),
    )


async def evaluate(
    path_a: str | Path,
    path_b: str | Path,
    diff_path: str | Path,
    tolerance: int = 0,
    diff_fn: DiffFn = diff_images,
) -> DiffResult:
    """Diff two screenshots off the event loop and build the result."""
    pixels = await asyncio.to_thread(diff_fn, path_a, path_b, diff_path, tolerance)
    result = to_result(pixels, diff_path)
    logger.debug("Diff %s: %.4f%% (%d/%d)", diff_path, result.percentage,
                 result.differences, result.total)
    return result
