#!/usr/bin/env python3
"""
2bpp pattern encoding utilities
Quantizes RGBA tiles to at most four levels and renders the two bit-planes
as assembly data directives
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .constants import (ASM_COMMENT, ASM_DATA_DIRECTIVE, ASM_ORG_DIRECTIVE,
                        ASM_SYMBOL_INDENT, ASM_TERMINATOR, BYTES_PER_TILE_RGBA,
                        CHANNELS_PER_PIXEL, LABEL_FORMAT, MAX_PALETTE_LEVELS,
                        PATTERN_STRIDE, PIXELS_PER_TILE, SAMPLED_CHANNEL,
                        TILE_HEIGHT, TILE_WIDTH)
from .exceptions import (LabelAddressError, TileLabelerError,
                         UnsupportedPaletteError)
from .logging_config import get_logger
from .raster import RasterImage
from .tile_registry import GridCoord, TileRegistry, parse_label_number

logger = get_logger("codec")


def _sampled_values(tile_pixels: bytes) -> np.ndarray:
    if len(tile_pixels) != BYTES_PER_TILE_RGBA:
        raise ValueError(
            f"Expected {BYTES_PER_TILE_RGBA} bytes of RGBA tile data, "
            f"got {len(tile_pixels)}"
        )
    pixels = np.frombuffer(bytes(tile_pixels), dtype=np.uint8)
    return pixels.reshape(PIXELS_PER_TILE, CHANNELS_PER_PIXEL)[:, SAMPLED_CHANNEL]


def tile_palette(tile_pixels: bytes) -> List[int]:
    """
    Get the effective palette of a tile.

    Only the first channel is sampled, so grayscale sheets quantize by
    brightness and color differences in the other channels are ignored.

    Args:
        tile_pixels: 256 bytes of RGBA data for one 8x8 tile

    Returns:
        Distinct sampled values, ascending (at most 4)

    Raises:
        ValueError: If the buffer is not exactly one tile
        UnsupportedPaletteError: If the tile has more than 4 distinct values
    """
    palette = np.unique(_sampled_values(tile_pixels))
    if len(palette) > MAX_PALETTE_LEVELS:
        raise UnsupportedPaletteError(len(palette), MAX_PALETTE_LEVELS)
    return palette.tolist()


def palette_indices(tile_pixels: bytes) -> List[int]:
    """Map each of the 64 pixels to its rank in the tile palette (0-3)"""
    values = _sampled_values(tile_pixels)
    palette = np.array(tile_palette(tile_pixels), dtype=np.uint8)
    return np.searchsorted(palette, values).tolist()


def encode_2bpp_planes(indices: Sequence[int]) -> Tuple[List[int], List[int]]:
    """
    Split 64 palette indices into two 8x8 bit-planes.

    Args:
        indices: 64 values (0-3) in row-major order

    Returns:
        (plane_a, plane_b): 8 row bytes each, leftmost pixel in bit 7.
        Plane A holds the low bit of each index, plane B the high bit.

    Raises:
        ValueError: If indices doesn't contain exactly 64 values
    """
    if len(indices) != PIXELS_PER_TILE:
        raise ValueError(f"Expected {PIXELS_PER_TILE} pixels, got {len(indices)}")

    plane_a = []
    plane_b = []
    for y in range(TILE_HEIGHT):
        low = 0
        high = 0
        for x in range(TILE_WIDTH):
            index = indices[y * TILE_WIDTH + x] & 0x03
            low |= (index & 1) << (7 - x)
            high |= ((index >> 1) & 1) << (7 - x)
        plane_a.append(low)
        plane_b.append(high)

    return plane_a, plane_b


def decode_2bpp_planes(plane_a: Sequence[int], plane_b: Sequence[int]) -> List[int]:
    """Recombine two bit-planes into 64 palette indices"""
    indices = []
    for y in range(TILE_HEIGHT):
        for x in range(TILE_WIDTH):
            bit = 7 - x
            indices.append(((plane_a[y] >> bit) & 1) | (((plane_b[y] >> bit) & 1) << 1))
    return indices


def pattern_address(label: str, label_prefix: str = "") -> int:
    """
    Hex value of a label, used as its pattern slot in the .org line.

    Raises:
        LabelAddressError: If the label is free text
    """
    value = parse_label_number(label, label_prefix)
    if value is None:
        raise LabelAddressError(label)
    return value


def format_pattern_block(label: str, prefix: str,
                         planes: Tuple[Sequence[int], Sequence[int]],
                         label_prefix: str = "") -> str:
    """Render one tile as a commented, origin-placed block of .db rows"""
    plane_a, plane_b = planes
    address = pattern_address(label, label_prefix)
    lines = [
        ASM_COMMENT,
        f"{ASM_ORG_DIRECTIVE} {address:{LABEL_FORMAT}} * {PATTERN_STRIDE}",
        f"{ASM_SYMBOL_INDENT}{prefix}{label}:",
    ]
    lines.extend(f"{ASM_DATA_DIRECTIVE}{row:08b}" for row in plane_a)
    lines.extend(f"{ASM_DATA_DIRECTIVE}{row:08b}" for row in plane_b)
    return "\n".join(lines) + "\n"


def encode_pattern(tile_pixels: bytes, label: str, prefix: str,
                   label_prefix: str = "") -> str:
    """
    Encode one RGBA tile as an assembly pattern block.

    Raises:
        LabelAddressError: If the label has no hex value
        UnsupportedPaletteError: If the tile has more than 4 distinct values
    """
    pattern_address(label, label_prefix)
    planes = encode_2bpp_planes(palette_indices(tile_pixels))
    return format_pattern_block(label, prefix, planes, label_prefix)


@dataclass(frozen=True)
class PatternFailure:
    """A tile that could not be encoded"""

    label: str
    coord: GridCoord
    reason: str


@dataclass
class AssemblyExport:
    """Concatenated pattern blocks plus the tiles that were skipped"""

    text: str
    failures: List[PatternFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def export_assembly(registry: TileRegistry, image: RasterImage,
                    prefix: str, label_prefix: str = "") -> AssemblyExport:
    """
    Encode every labeled tile, in label order.

    A tile that cannot be encoded, or whose label has no hex address once
    ``label_prefix`` is removed, is recorded as a failure and left out of
    the text; the remaining tiles are still exported.
    """
    blocks = []
    failures = []
    for label, coord in registry.items():
        try:
            blocks.append(encode_pattern(
                image.tile_pixels(coord), label, prefix, label_prefix
            ))
        except TileLabelerError as e:
            logger.warning(f"Skipping {label} at {tuple(coord)}: {e}")
            failures.append(PatternFailure(label, coord, str(e)))

    blocks.append(ASM_TERMINATOR + "\n")
    logger.info(f"Exported {len(blocks) - 1} patterns, {len(failures)} failed")
    return AssemblyExport("".join(blocks), failures)
