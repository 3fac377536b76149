"""Image path resolution for screenshots and diff artifacts."""

from __future__ import annotations

import logging
from pathlib import Path

from niffy.models.result import Role

logger = logging.getLogger(__name__)


def image_dir(path: str, imgfiledir: str) -> Path:
    """Return the directory holding the images for a logical path, creating it."""
    dirpath = imgfiledir + path
    if not dirpath.endswith("/"):
        dirpath += "/"
    directory = Path(dirpath)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def imgfilepath(role: Role | str, path: str, imgfiledir: str) -> Path:
    """Resolve the PNG location for ``role`` under ``imgfiledir + path``.

    The result depends only on the inputs, so repeated calls return the same
    path and later captures overwrite earlier ones.
    """
    name = Role(role).value
    filepath = image_dir(path, imgfiledir) / f"{name}.png"
    logger.debug("Resolved %s image for %s: %s", name, path, filepath)
    return filepath
