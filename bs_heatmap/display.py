"""
Loading the rendered heatmap back for display.

The image file is the only contract with the generator: whatever
wrote it, this side decodes it into an 8-bit RGBA raster. A missing
or corrupt file is reported, never fatal.
"""

import logging
from typing import Optional

import numpy as np
import matplotlib.image as mpimg

from . import config


logger = logging.getLogger(__name__)


class HeatmapLoadError(OSError):
    """The heatmap file could not be decoded."""


def load_heatmap_image(path) -> np.ndarray:
    """
    Decode an image file into an (H, W, 4) uint8 RGBA array.

    Raises
    ------
    HeatmapLoadError : file missing, unreadable or not an image
    """
    try:
        img = mpimg.imread(path)
    except (OSError, ValueError, SyntaxError) as e:
        raise HeatmapLoadError(f"cannot decode heatmap image {path}: {e}") from e

    if img.ndim == 2:
        img = np.stack([img] * 3, axis=-1)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise HeatmapLoadError(f"unexpected image shape {img.shape} in {path}")

    # PNGs come back as floats in [0, 1], everything else as uint8
    if np.issubdtype(img.dtype, np.floating):
        img = np.clip(np.rint(img * 255.0), 0, 255).astype(np.uint8)
    else:
        img = img.astype(np.uint8)

    if img.shape[2] == 3:
        alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
        img = np.concatenate([img, alpha], axis=-1)
    return img


class HeatmapDisplay:
    """
    What the heatmap panel is currently showing.

    Exactly one of (image, error) describes the last refresh: either a
    freshly decoded raster, or an error message with the panel cleared.
    """

    def __init__(self):
        self.image: Optional[np.ndarray] = None
        self.error: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def clear(self) -> None:
        self.image = None

    def refresh(self, path) -> bool:
        """Drop the old raster, load the file at path. Returns success."""
        self.clear()
        try:
            self.image = load_heatmap_image(path)
        except HeatmapLoadError as e:
            logger.error("%s", e)
            self.error = config.LOAD_ERROR_MESSAGE
            return False
        self.error = None
        return True

    def fail(self, message: str) -> None:
        """Clear the panel and show message (e.g. when rendering failed)."""
        self.clear()
        self.error = message

    def dismiss_error(self) -> None:
        self.error = None
