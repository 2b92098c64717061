#!/usr/bin/env python3
"""
Editing session state and intent dispatch
The event loop owns one EditorState; dispatch mutates it and returns the
updates the UI should render
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .constants import DEFAULT_LABEL_PREFIX, DEFAULT_SYMBOL_PREFIX
from .events import (AssemblyExported, AssemblyExportRequested, ConfigExported,
                     ConfigExportRequested, ConfigImportRequested,
                     CursorChanged, CursorSet, ImageLoaded, IntentRejected,
                     LabelEntered, LabelsShifted, PatternExportFailed,
                     PrefixChanged, RegistryReset, TileClicked, TileCleared,
                     TileLabelChanged)
from .logging_config import get_logger
from .raster import RasterImage
from .tile_registry import (GridCoord, TileRegistry, format_label,
                            is_storable_label)
from .tile_utils import export_assembly

logger = get_logger("session")


@dataclass
class EditorState:
    """Everything the labeling core mutates"""

    image: Optional[RasterImage] = None
    registry: TileRegistry = field(default_factory=TileRegistry)
    cursor: int = 0
    label_prefix: str = DEFAULT_LABEL_PREFIX
    symbol_prefix: str = DEFAULT_SYMBOL_PREFIX

    def next_label(self) -> str:
        return format_label(self.cursor, self.label_prefix)


def _cursor_update(state: EditorState) -> CursorChanged:
    return CursorChanged(state.cursor, state.next_label())


def _check_tile(state: EditorState, coord: GridCoord) -> Optional[IntentRejected]:
    if state.image is None:
        return IntentRejected("No image loaded")
    if not state.image.contains(coord):
        return IntentRejected(f"Tile {tuple(coord)} is outside the image")
    return None


def _assign(state: EditorState, coord: GridCoord, label: str) -> list:
    """Assign and report every cell whose label changed"""
    updates = []
    moved_from = state.registry.lookup(label)
    state.registry.assign(label, coord)
    if moved_from is not None and moved_from != coord:
        updates.append(TileLabelChanged(moved_from, None))
    updates.append(TileLabelChanged(coord, label))
    return updates


def _on_image_loaded(state: EditorState, intent: ImageLoaded) -> list:
    state.image = intent.image
    state.registry.reset()
    logger.info(f"New image {intent.image.width}x{intent.image.height}, labels reset")
    return [RegistryReset(*intent.image.grid_size())]


def _on_tile_clicked(state: EditorState, intent: TileClicked) -> list:
    coord = GridCoord(*intent.coord)
    rejected = _check_tile(state, coord)
    if rejected:
        return [rejected]
    updates = _assign(state, coord, state.next_label())
    state.cursor += 1
    updates.append(_cursor_update(state))
    return updates


def _on_label_entered(state: EditorState, intent: LabelEntered) -> list:
    coord = GridCoord(*intent.coord)
    label = intent.label.strip()
    if not label:
        return _on_tile_cleared(state, TileCleared(coord))
    if not is_storable_label(label):
        return [IntentRejected(f"Label {label!r} may not contain ',' or ':'")]
    rejected = _check_tile(state, coord)
    if rejected:
        return [rejected]
    return _assign(state, coord, label)


def _on_tile_cleared(state: EditorState, intent: TileCleared) -> list:
    coord = GridCoord(*intent.coord)
    if state.registry.clear(coord) is None:
        return []
    return [TileLabelChanged(coord, None)]


def _on_cursor_set(state: EditorState, intent: CursorSet) -> list:
    state.cursor = max(0, intent.value)
    return [_cursor_update(state)]


def _on_prefix_changed(state: EditorState, intent: PrefixChanged) -> list:
    if intent.symbol_prefix is not None:
        state.symbol_prefix = intent.symbol_prefix
    if intent.label_prefix is not None:
        state.label_prefix = intent.label_prefix
        return [_cursor_update(state)]
    return []


def _relabel_all(state: EditorState, before: dict) -> list:
    """Updates for every cell whose label differs from a previous snapshot"""
    after = {coord: label for label, coord in state.registry.items()}
    updates = []
    for coord in sorted(set(before) | set(after)):
        if before.get(coord) != after.get(coord):
            updates.append(TileLabelChanged(coord, after.get(coord)))
    return updates


def _on_labels_shifted(state: EditorState, intent: LabelsShifted) -> list:
    conflicts = state.registry.shift_conflicts(
        state.cursor, intent.delta, intent.before, state.label_prefix
    )
    if conflicts:
        return [IntentRejected(f"Shift would overwrite {', '.join(conflicts)}")]
    snapshot = {coord: label for label, coord in state.registry.items()}
    state.registry.shift_labels(
        state.cursor, intent.delta, intent.before, state.label_prefix
    )
    return _relabel_all(state, snapshot)


def _on_config_import(state: EditorState, intent: ConfigImportRequested) -> list:
    snapshot = {coord: label for label, coord in state.registry.items()}
    state.registry.import_config(intent.text)
    return _relabel_all(state, snapshot)


def _on_config_export(state: EditorState, intent: ConfigExportRequested) -> list:
    return [ConfigExported(state.registry.export_config())]


def _on_assembly_export(state: EditorState, intent: AssemblyExportRequested) -> list:
    if state.image is None:
        return [IntentRejected("No image loaded")]
    result = export_assembly(
        state.registry, state.image, state.symbol_prefix, state.label_prefix
    )
    updates = [
        PatternExportFailed(failure.label, failure.coord, failure.reason)
        for failure in result.failures
    ]
    updates.append(AssemblyExported(result.text, list(result.failures)))
    return updates


_HANDLERS: Dict[type, Callable[[EditorState, object], list]] = {
    ImageLoaded: _on_image_loaded,
    TileClicked: _on_tile_clicked,
    LabelEntered: _on_label_entered,
    TileCleared: _on_tile_cleared,
    CursorSet: _on_cursor_set,
    PrefixChanged: _on_prefix_changed,
    LabelsShifted: _on_labels_shifted,
    ConfigImportRequested: _on_config_import,
    ConfigExportRequested: _on_config_export,
    AssemblyExportRequested: _on_assembly_export,
}


def dispatch(state: EditorState, intent) -> List[object]:
    """
    Apply one user intent to the session state.

    Args:
        state: The session state, mutated in place
        intent: One of the intent types from events

    Returns:
        Render updates for the UI, in the order they happened

    Raises:
        TypeError: If the intent type is unknown
    """
    handler = _HANDLERS.get(type(intent))
    if handler is None:
        raise TypeError(f"Unknown intent: {intent!r}")
    return handler(state, intent)
