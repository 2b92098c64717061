#!/usr/bin/env python3
"""
Tile sheet model
Owns the editing session and re-emits its updates as Qt signals
"""

from PyQt6.QtCore import pyqtSignal

from ..events import (AssemblyExported, ConfigExported, ConfigImportRequested,
                      CursorChanged, ImageLoaded, IntentRejected,
                      PatternExportFailed, PrefixChanged, RegistryReset,
                      TileLabelChanged)
from ..logging_config import get_logger
from ..raster import load_raster
from ..session import EditorState, dispatch
from ..settings_manager import get_settings
from .base_model import BaseModel, ObservableProperty

logger = get_logger("model")


class TileSheetModel(BaseModel):
    """Model for the labeled tile sheet"""

    # Observable properties
    image_path = ObservableProperty("")
    is_modified = ObservableProperty(False)

    # Property signals
    image_path_changed = pyqtSignal(str)
    is_modified_changed = pyqtSignal(bool)

    # Session update signals
    update_emitted = pyqtSignal(object)
    registry_reset = pyqtSignal(int, int)  # rows, cols
    tile_label_changed = pyqtSignal(int, int, object)  # row, col, label or None
    cursor_changed = pyqtSignal(int, str)  # value, formatted label
    config_exported = pyqtSignal(str)
    assembly_exported = pyqtSignal(str, object)  # text, failures
    pattern_failed = pyqtSignal(str, int, int, str)  # label, row, col, reason
    intent_rejected = pyqtSignal(str)

    def __init__(self, settings=None, parent=None):
        super().__init__(parent)
        self.settings = settings if settings is not None else get_settings()
        self._state = EditorState(**self.settings.get_prefixes())

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def label_prefix(self) -> str:
        return self._state.label_prefix

    @property
    def symbol_prefix(self) -> str:
        return self._state.symbol_prefix

    def labels(self):
        """Read-only snapshot of (label, coord) pairs"""
        return self._state.registry.items()

    def handle(self, intent):
        """Dispatch an intent and emit the resulting updates"""
        updates = dispatch(self._state, intent)
        if any(isinstance(update, TileLabelChanged) for update in updates):
            self.is_modified = True
        for update in updates:
            self._emit(update)
        return updates

    def _emit(self, update):
        self.update_emitted.emit(update)
        if isinstance(update, TileLabelChanged):
            self.tile_label_changed.emit(update.coord.row, update.coord.col, update.label)
        elif isinstance(update, CursorChanged):
            self.cursor_changed.emit(update.value, update.text)
        elif isinstance(update, RegistryReset):
            self.registry_reset.emit(update.rows, update.cols)
        elif isinstance(update, ConfigExported):
            self.config_exported.emit(update.text)
        elif isinstance(update, AssemblyExported):
            self.assembly_exported.emit(update.text, update.failures)
        elif isinstance(update, PatternExportFailed):
            self.pattern_failed.emit(
                update.label, update.coord.row, update.coord.col, update.reason
            )
        elif isinstance(update, IntentRejected):
            logger.info(f"Rejected: {update.reason}")
            self.intent_rejected.emit(update.reason)

    def load_image(self, path):
        """
        Load a tile sheet from disk, discarding all labels.

        Reopening the last image restores the config last copied for it.

        Raises:
            FileNotFoundError: If the path does not exist
            ImageFormatError: If the file cannot be decoded
        """
        image = load_raster(path)
        path = str(path)
        self.handle(ImageLoaded(image))

        if path == self.settings.get("last_image_file", ""):
            last_config = self.settings.get("last_config", "")
            if last_config:
                logger.info(f"Restoring labels for {path}")
                self.handle(ConfigImportRequested(last_config))
        else:
            self.settings.set("last_config", "")

        self.image_path = path
        self.is_modified = False
        self.settings.update_last_image(path)

    def set_prefixes(self, label_prefix=None, symbol_prefix=None):
        """Change label/symbol prefixes and remember them"""
        self.handle(PrefixChanged(label_prefix, symbol_prefix))
        if label_prefix is not None:
            self.settings.set("label_prefix", label_prefix)
        if symbol_prefix is not None:
            self.settings.set("symbol_prefix", symbol_prefix)

    def mark_saved(self):
        """Mark the labeling as exported"""
        self.is_modified = False
