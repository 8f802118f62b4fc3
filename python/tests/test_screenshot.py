"""Slider extraction from synthetic anvil screenshots."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from backend.engine.screenshot import ExtractedProgress, ScreenshotExtractor
from backend.engine.screenshot.extractor import ORIGIN_COLOR, START_COLOR, TARGET_COLOR

WIDTH = 340
HEIGHT = 30
SCALE = 2
BAR_W = 6
ORIGIN_X = 10
RED_Y = 5
GREEN_Y = RED_Y + 2 * SCALE + 5 * SCALE


# -- helpers ------------------------------------------------------------------


def _x_for(progress: int) -> int:
    return ORIGIN_X + (progress + 3) * SCALE


def _paint(buf: bytearray, x: int, y: int, w: int, h: int, color) -> None:
    for row in range(y, y + h):
        for col in range(x, x + w):
            idx = (row * WIDTH + col) * 4
            buf[idx : idx + 4] = bytes((*color, 255))


def _screen(
    start: int = 40,
    target: int = 75,
    green_dx: int = 0,
    green_dy: int = 0,
    green_w: int = BAR_W,
    origin: bool = True,
    with_green: bool = True,
) -> bytearray:
    buf = bytearray(bytes((0, 0, 0, 255)) * (WIDTH * HEIGHT))
    _paint(buf, _x_for(target), RED_Y, BAR_W, 2 * SCALE, TARGET_COLOR)
    if with_green:
        _paint(buf, _x_for(start) + green_dx, GREEN_Y + green_dy, green_w, 2 * SCALE, START_COLOR)
    if origin:
        _paint(buf, ORIGIN_X, GREEN_Y, SCALE, 1, ORIGIN_COLOR)
    return buf


# -- tests --------------------------------------------------------------------


def test_extracts_both_sliders() -> None:
    result = ScreenshotExtractor.extract(bytes(_screen()), WIDTH, HEIGHT)
    assert result == ExtractedProgress(start=40, target=75)


@pytest.mark.parametrize(("start", "target"), [(0, 0), (150, 3), (12, 140)])
def test_extremes(start: int, target: int) -> None:
    result = ScreenshotExtractor.extract(bytes(_screen(start, target)), WIDTH, HEIGHT)
    assert result == ExtractedProgress(start=start, target=target)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"with_green": False},
        {"origin": False},
        {"green_dy": 1},
        {"green_w": BAR_W - 1},
        {"green_dx": 1},
    ],
    ids=["no-progress-bar", "no-origin", "wrong-gap", "width-mismatch", "off-grid"],
)
def test_mismatches_return_none(kwargs) -> None:
    assert ScreenshotExtractor.extract(bytes(_screen(**kwargs)), WIDTH, HEIGHT) is None


def test_blank_image() -> None:
    blank = bytes((0, 0, 0, 255)) * (WIDTH * HEIGHT)
    assert ScreenshotExtractor.extract(blank, WIDTH, HEIGHT) is None


@pytest.mark.timeout(1)
def test_full_hd_frame_is_scanned_quickly() -> None:
    assert ScreenshotExtractor.extract(bytes(1920 * 1080 * 4), 1920, 1080) is None


def test_extract_from_rgb_array() -> None:
    rgba = np.frombuffer(bytes(_screen(33, 121)), dtype=np.uint8).reshape(HEIGHT, WIDTH, 4)
    assert ScreenshotExtractor.extract_array(rgba[..., :3]) == ExtractedProgress(start=33, target=121)


def test_short_buffer_is_rejected() -> None:
    with pytest.raises(ValueError):
        ScreenshotExtractor.extract(b"\x00" * 16, WIDTH, HEIGHT)


def test_extract_from_png(tmp_path: Path) -> None:
    path = tmp_path / "anvil.png"
    Image.frombytes("RGBA", (WIDTH, HEIGHT), bytes(_screen(17, 99))).save(path)
    assert ScreenshotExtractor.extract_file(path) == ExtractedProgress(start=17, target=99)
