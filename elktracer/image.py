"""
RGBA byte image buffer produced by the renderer.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


class Image:
    """A width x height grid of RGBA byte pixels, row-major from the top."""

    channels = 4

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, self.channels), dtype=np.uint8)
        logger.debug("Image :: new :: %dx%d :: %d channels", width, height, self.channels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> Image:
        """Wrap an existing (height, width, 4) uint8 array."""
        height, width, channels = pixels.shape
        if channels != cls.channels:
            raise ValueError(f"Expected {cls.channels} channels, got {channels}")
        image = cls.__new__(cls)
        image.width = width
        image.height = height
        image._pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        return image

    def set_pixel(self, x: int, y: int, rgba: Tuple[int, int, int, int]) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            logger.warning(
                "Pixel coordinates out of bounds. Given x=%d and y=%d, image width=%d and height=%d. "
                "Pixel data not updated", x, y, self.width, self.height
            )
            return
        self._pixels[y, x] = rgba

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return tuple(int(c) for c in self._pixels[y, x])

    def paste(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Copy a (h, w, 4) block into the buffer with its top-left at (x0, y0)."""
        h, w = block.shape[:2]
        self._pixels[y0:y0 + h, x0:x0 + w] = block

    def data(self) -> bytes:
        """Flat row-major RGBA bytes."""
        return self._pixels.tobytes()

    def to_array(self) -> np.ndarray:
        return self._pixels.copy()

    def save(self, path: Union[str, Path], format: Optional[str] = None) -> None:
        """Encode the buffer to a file.

        Args:
            path: Output filename (extension determines format unless given)
            format: Explicit Pillow format name such as "PNG"
        """
        from PIL import Image as PILImage

        pil_image = PILImage.fromarray(self._pixels)  # (h, w, 4) uint8 is RGBA
        pil_image.save(path, format=format)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"
