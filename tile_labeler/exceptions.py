#!/usr/bin/env python3
"""
Custom exceptions and error handling utilities for the tile labeler.

Codec and raster failures are scoped to a single tile: callers report the
failing label/coordinate and carry on with the remaining tiles.
"""


class TileLabelerError(Exception):
    """Base exception for all tile labeler errors"""
    pass


class UnsupportedPaletteError(TileLabelerError):
    """Raised when a tile has more distinct sampled values than the codec supports"""

    def __init__(self, distinct_count: int, limit: int = 4):
        super().__init__(
            f"Tile uses {distinct_count} distinct values (max {limit})"
        )
        self.distinct_count = distinct_count
        self.limit = limit


class TileOutOfBoundsError(TileLabelerError):
    """Raised when a tile coordinate lies outside the image grid"""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(
            f"Tile ({row}, {col}) is outside the {rows}x{cols} grid"
        )
        self.row = row
        self.col = col


class LabelAddressError(TileLabelerError):
    """Raised when a label has no hex value to place its pattern at"""

    def __init__(self, label: str):
        super().__init__(f"Label {label!r} has no hex address")
        self.label = label


class ImageFormatError(TileLabelerError):
    """Raised when image data is invalid or unsupported"""
    pass


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, FileNotFoundError):
        return f"File not found during {operation}"
    elif isinstance(error, PermissionError):
        return f"Permission denied during {operation}"
    elif isinstance(error, ImageFormatError):
        return f"Invalid image: {error}"
    elif isinstance(error, UnsupportedPaletteError):
        return f"Unsupported palette: {error}"
    elif isinstance(error, TileOutOfBoundsError):
        return f"Invalid tile: {error}"
    elif isinstance(error, LabelAddressError):
        return f"Invalid label: {error}"
    else:
        return f"Failed to {operation}: {error}"
