#!/usr/bin/env python3
"""
Event types exchanged between the host UI and the labeling core

Intents flow from the UI into session.dispatch; updates flow back out.
Neither set carries widget or toolkit types.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .raster import RasterImage
from .tile_registry import GridCoord
from .tile_utils import PatternFailure


# User intents

@dataclass(frozen=True)
class ImageLoaded:
    image: RasterImage


@dataclass(frozen=True)
class TileClicked:
    """Label a tile with the next automatic label"""

    coord: GridCoord


@dataclass(frozen=True)
class LabelEntered:
    """Free-text label; an empty label clears the tile"""

    coord: GridCoord
    label: str


@dataclass(frozen=True)
class TileCleared:
    coord: GridCoord


@dataclass(frozen=True)
class CursorSet:
    value: int


@dataclass(frozen=True)
class PrefixChanged:
    label_prefix: Optional[str] = None
    symbol_prefix: Optional[str] = None


@dataclass(frozen=True)
class LabelsShifted:
    """Renumber automatic labels after (or before) the cursor"""

    delta: int
    before: bool = False


@dataclass(frozen=True)
class ConfigImportRequested:
    text: str


@dataclass(frozen=True)
class ConfigExportRequested:
    pass


@dataclass(frozen=True)
class AssemblyExportRequested:
    pass


# Render updates

@dataclass(frozen=True)
class RegistryReset:
    rows: int
    cols: int


@dataclass(frozen=True)
class TileLabelChanged:
    """label is None when the tile was cleared"""

    coord: GridCoord
    label: Optional[str]


@dataclass(frozen=True)
class CursorChanged:
    value: int
    text: str


@dataclass(frozen=True)
class ConfigExported:
    text: str


@dataclass(frozen=True)
class AssemblyExported:
    text: str
    failures: List[PatternFailure] = field(default_factory=list)


@dataclass(frozen=True)
class PatternExportFailed:
    label: str
    coord: GridCoord
    reason: str


@dataclass(frozen=True)
class IntentRejected:
    reason: str
