#!/usr/bin/env python3
"""
Raster image model for tile sheets
Holds decoded RGBA8 pixels and hands out 8x8 tile buffers by grid coordinate
"""

import os
from dataclasses import dataclass, field
from typing import Union

import numpy as np
from PIL import Image

from .constants import CHANNELS_PER_PIXEL, TILE_HEIGHT, TILE_WIDTH
from .exceptions import ImageFormatError, TileOutOfBoundsError
from .logging_config import get_logger
from .tile_registry import GridCoord

logger = get_logger("raster")


@dataclass(frozen=True)
class RasterImage:
    """
    Decoded RGBA8 tile sheet

    The grid is (height // 8) rows by (width // 8) columns; partial tiles
    on the right and bottom edges are not addressable.
    """

    width: int
    height: int
    rgba: bytes
    pixels: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        expected = self.width * self.height * CHANNELS_PER_PIXEL
        if self.width < 0 or self.height < 0 or len(self.rgba) != expected:
            raise ImageFormatError(
                f"Expected {expected} bytes for {self.width}x{self.height} RGBA, "
                f"got {len(self.rgba)}"
            )
        array = np.frombuffer(bytes(self.rgba), dtype=np.uint8).reshape(
            (self.height, self.width, CHANNELS_PER_PIXEL)
        )
        object.__setattr__(self, "pixels", array)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        """Build a raster from any PIL image, converting it to RGBA"""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(image.width, image.height, image.tobytes())

    @property
    def rows(self) -> int:
        return self.height // TILE_HEIGHT

    @property
    def cols(self) -> int:
        return self.width // TILE_WIDTH

    def grid_size(self) -> tuple[int, int]:
        """Number of (rows, cols) of whole tiles in the sheet"""
        return self.rows, self.cols

    def contains(self, coord: GridCoord) -> bool:
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.cols

    def tile_pixels(self, coord: GridCoord) -> bytes:
        """
        Get the RGBA buffer of one tile.

        Args:
            coord: (row, col) of the tile in the grid

        Returns:
            256 bytes, 64 pixels in row-major order, 4 channels each

        Raises:
            TileOutOfBoundsError: If the coordinate is outside the grid
        """
        row, col = coord
        if not self.contains(coord):
            raise TileOutOfBoundsError(row, col, self.rows, self.cols)
        y = row * TILE_HEIGHT
        x = col * TILE_WIDTH
        return self.pixels[y:y + TILE_HEIGHT, x:x + TILE_WIDTH].tobytes()


def load_raster(path: Union[str, os.PathLike]) -> RasterImage:
    """Decode an image file into an RGBA raster"""
    try:
        with Image.open(path) as image:
            raster = RasterImage.from_pil(image)
    except FileNotFoundError:
        raise
    except OSError as e:
        raise ImageFormatError(f"Could not read image {path}: {e}") from e

    logger.info(
        f"Loaded {path}: {raster.width}x{raster.height}, "
        f"{raster.rows}x{raster.cols} tiles"
    )
    return raster
