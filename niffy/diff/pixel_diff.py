"""Pixel comparison of two screenshots using Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageChops, ImageOps

from niffy.errors import DiffError
from niffy.models.result import PixelDiff

logger = logging.getLogger(__name__)

DIFF_COLOR = (255, 0, 0)
# How far the base image is faded towards white behind the highlighted pixels
DIM_FACTOR = 0.7


def _load(path: Path) -> Image.Image:
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except OSError as e:
        raise DiffError(f"Could not read image {path}: {e}") from e


def _on_canvas(img: Image.Image, size: tuple[int, int]) -> Image.Image:
    if img.size == size:
        return img
    canvas = Image.new("RGBA", size, (0, 0, 0, 0))
    canvas.paste(img, (0, 0))
    return canvas


def _difference_mask(a: Image.Image, b: Image.Image, tolerance: int) -> Image.Image:
    """Return an "L" mask that is 255 where any channel differs by more than tolerance."""
    channels = ImageChops.difference(a, b).split()
    peak = channels[0]
    for channel in channels[1:]:
        peak = ImageChops.lighter(peak, channel)
    return peak.point(lambda v: 255 if v > tolerance else 0)


def diff_images(
    path_a: str | Path,
    path_b: str | Path,
    diff_path: str | Path,
    tolerance: int = 0,
) -> PixelDiff:
    """Compare two images and write a visualization of the differing pixels.

    Images of different sizes are compared on a canvas covering both; any
    pixel outside the area shared by the two images counts as different.
    The visualization is the faded base image with differing pixels painted
    red.
    """
    a = _load(Path(path_a))
    b = _load(Path(path_b))
    size = (max(a.width, b.width), max(a.height, b.height))
    total = size[0] * size[1]
    if total == 0:
        raise DiffError(f"Cannot compare empty images: {path_a}, {path_b}")

    mask = _difference_mask(_on_canvas(a, size), _on_canvas(b, size), tolerance)
    if a.size != b.size:
        logger.warning("Image sizes differ: %s is %dx%d, %s is %dx%d",
                       path_a, a.width, a.height, path_b, b.width, b.height)
        shared = Image.new("L", size, 255)
        shared.paste(0, (0, 0, min(a.width, b.width), min(a.height, b.height)))
        mask = ImageChops.lighter(mask, shared)

    differences = mask.histogram()[255]

    faded = Image.blend(
        ImageOps.grayscale(_on_canvas(a, size).convert("RGB")).convert("RGB"),
        Image.new("RGB", size, (255, 255, 255)),
        DIM_FACTOR,
    )
    visual = Image.composite(Image.new("RGB", size, DIFF_COLOR), faded, mask)
    visual.save(str(diff_path), format="PNG")

    logger.debug("Diffed %s vs %s: %d of %d pixels differ", path_a, path_b, differences, total)
    return PixelDiff(differences=differences, total=total)
