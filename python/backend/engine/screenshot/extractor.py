"""Read both slider positions out of a screenshot of the anvil screen.

The anvil GUI draws the target as a red bar and the current progress as a
green bar directly below it, both scaled by the game's GUI scale.  A white
marker to the left of the green bar is the zero point of the scale.  We
locate the three colours, check that the geometry matches what the game
draws, and convert pixel offsets back into progress values.

Buffers are raw RGBA, row-major, four bytes per pixel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from backend.models.move import in_range

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]

TARGET_COLOR: Color = (255, 0, 0)
START_COLOR: Color = (0, 255, 6)
ORIGIN_COLOR: Color = (255, 255, 255)
TOLERANCE = 30

# Gap between the two bars, in GUI pixels.
BAR_GAP = 5
# The bar's left edge sits this many GUI pixels left of its progress value.
BAR_OFFSET = 3


@dataclass(frozen=True)
class ExtractedProgress:
    start: int
    target: int


def _color_mask(image: np.ndarray, color: Color) -> np.ndarray:
    """Boolean (h, w) mask of pixels within TOLERANCE of *color* per channel."""
    diff = np.abs(image[..., :3].astype(np.int16) - np.array(color, dtype=np.int16))
    return np.all(diff <= TOLERANCE, axis=2)


def _leading_run(values: np.ndarray) -> int:
    """Number of consecutive True values at the front of *values*."""
    misses = np.flatnonzero(~values)
    return int(misses[0]) if misses.size else int(values.size)


class _Mask:
    """Position queries over one colour mask."""

    def __init__(self, mask: np.ndarray) -> None:
        self.mask = mask
        self.height, self.width = mask.shape
        self.flat = mask.ravel()

    def first(self, from_y: int = 0) -> tuple[int, int] | None:
        """First matching pixel in reading order at or below row *from_y*."""
        offset = from_y * self.width
        hits = np.flatnonzero(self.flat[offset:])
        if not hits.size:
            return None
        y, x = divmod(offset + int(hits[0]), self.width)
        return x, y

    def last_before(self, x: int, y: int) -> tuple[int, int] | None:
        """Last matching pixel in reading order at or before (x, y)."""
        hits = np.flatnonzero(self.flat[: y * self.width + x + 1])
        if not hits.size:
            return None
        y, x = divmod(int(hits[-1]), self.width)
        return x, y

    def run_down(self, x: int, y: int) -> int:
        return _leading_run(self.mask[y:, x])

    def run_right(self, x: int, y: int) -> int:
        return _leading_run(self.mask[y, x:])

    def run_left(self, x: int, y: int) -> int:
        return _leading_run(self.mask[y, x::-1])


class ScreenshotExtractor:
    """Stateless extractor — all methods are static."""

    @staticmethod
    def extract(buffer: bytes, width: int, height: int) -> ExtractedProgress | None:
        """Return the (start, target) pair, or ``None`` on any mismatch."""
        expected = width * height * 4
        if len(buffer) < expected:
            raise ValueError(
                f"Buffer holds {len(buffer)} bytes, expected "
                f"{expected} for {width}x{height} RGBA."
            )
        image = np.frombuffer(buffer, dtype=np.uint8, count=expected)
        return ScreenshotExtractor.extract_array(image.reshape(height, width, 4))

    @staticmethod
    def extract_array(image: np.ndarray) -> ExtractedProgress | None:
        """Extract from an (h, w, 3 or 4) uint8 array."""
        red = _Mask(_color_mask(image, TARGET_COLOR))
        green = _Mask(_color_mask(image, START_COLOR))
        white = _Mask(_color_mask(image, ORIGIN_COLOR))

        found = red.first()
        if found is None:
            logger.debug("target bar not found")
            return None
        red_x, red_y = found
        bar_h = red.run_down(red_x, red_y)

        scale = bar_h // 2
        if scale == 0 or bar_h % scale != 0:
            logger.debug("target bar height %d is not a GUI-scale multiple", bar_h)
            return None

        found = green.first(from_y=red_y + bar_h)
        if found is None:
            logger.debug("progress bar not found")
            return None
        green_x, green_y = found
        if green_y != red_y + bar_h + BAR_GAP * scale:
            logger.debug("progress bar at y=%d, expected %d", green_y, red_y + bar_h + BAR_GAP * scale)
            return None

        if (
            green.run_down(green_x, green_y) != bar_h
            or green.run_right(green_x, green_y) != red.run_right(red_x, red_y)
        ):
            logger.debug("bars differ in size")
            return None

        found = white.last_before(green_x, green_y)
        if found is None:
            logger.debug("origin marker not found")
            return None
        origin_x = found[0] - white.run_left(*found) + 1

        start = _to_progress(green_x - origin_x, scale)
        target = _to_progress(red_x - origin_x, scale)
        if start is None or target is None:
            logger.debug("bar offsets do not map onto the progress scale")
            return None
        return ExtractedProgress(start=start, target=target)

    @staticmethod
    def extract_file(path: Path) -> ExtractedProgress | None:
        """Decode an image file with Pillow and extract from it."""
        with Image.open(path) as img:
            return ScreenshotExtractor.extract_array(np.asarray(img.convert("RGBA")))


def _to_progress(offset: int, scale: int) -> int | None:
    units, rem = divmod(offset, scale)
    progress = units - BAR_OFFSET
    if rem or not in_range(progress):
        return None
    return progress
