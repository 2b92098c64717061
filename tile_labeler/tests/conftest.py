"""
Shared pytest fixtures and configuration for tile labeler tests
"""

import logging
import os

import numpy as np
import pytest
from PIL import Image

from tile_labeler.raster import RasterImage
from tile_labeler.settings_manager import SettingsManager
from tile_labeler.tile_registry import GridCoord, TileRegistry

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers a test configured so later tests never write to them"""
    yield
    logger = logging.getLogger("tile_labeler")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def make_tile(values):
    """Build 256 bytes of RGBA tile data from 64 gray levels (or one level)"""
    if isinstance(values, int):
        values = [values] * 64
    assert len(values) == 64
    return bytes(
        channel for v in values for channel in (v, v, v, 255)
    )


def make_sheet(tile_values):
    """
    Build a RasterImage from a grid of tiles.

    Args:
        tile_values: rows of tiles; each tile is an int (flat level) or
            a list of 64 gray levels
    """
    rows = len(tile_values)
    cols = len(tile_values[0])
    array = np.zeros((rows * 8, cols * 8, 4), dtype=np.uint8)
    for r, row in enumerate(tile_values):
        for c, values in enumerate(row):
            tile = np.frombuffer(make_tile(values), dtype=np.uint8).reshape(8, 8, 4)
            array[r * 8:(r + 1) * 8, c * 8:(c + 1) * 8] = tile
    return RasterImage(cols * 8, rows * 8, array.tobytes())


@pytest.fixture
def split_tile_values():
    """Left half 10, right half 200 on every row"""
    return [10 if x < 4 else 200 for _ in range(8) for x in range(8)]


@pytest.fixture
def four_level_values():
    """Rows cycle through four levels: 0, 85, 170, 255"""
    levels = [0, 85, 170, 255]
    return [levels[y % 4] for y in range(8) for _ in range(8)]


@pytest.fixture
def five_level_values():
    levels = [0, 50, 100, 150, 200]
    return [levels[x % 5] for _ in range(8) for x in range(8)]


@pytest.fixture
def sample_sheet(split_tile_values, four_level_values, five_level_values):
    """2x3 sheet: tile (1, 2) has five levels and cannot be encoded"""
    return make_sheet([
        [0, split_tile_values, four_level_values],
        [255, 128, five_level_values],
    ])


@pytest.fixture
def sample_registry():
    registry = TileRegistry()
    registry.assign("0x00", GridCoord(0, 0))
    registry.assign("0x01", GridCoord(0, 1))
    return registry


@pytest.fixture
def sheet_png(tmp_path, sample_sheet):
    """Write the sample sheet to a PNG file"""
    path = tmp_path / "sheet.png"
    image = Image.frombytes(
        "RGBA", (sample_sheet.width, sample_sheet.height), sample_sheet.rgba
    )
    image.save(path)
    return path


@pytest.fixture
def settings_manager(tmp_path, monkeypatch):
    """Settings manager writing to a temporary directory"""
    settings_dir = tmp_path / "settings"
    settings_dir.mkdir()

    def mock_get_settings_path(self):
        return settings_dir / "settings.json"

    monkeypatch.setattr(SettingsManager, "_get_settings_path", mock_get_settings_path)
    return SettingsManager("test_app")
