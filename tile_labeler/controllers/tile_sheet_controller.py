#!/usr/bin/env python3
"""
Controller for the tile sheet labeling view
Turns view signals into session intents and session updates into view calls

The view must provide these signals:
    load_image_requested()
    tile_clicked(row, col)
    label_entered(row, col, label)
    tile_clear_requested(row, col)
    cursor_edited(value)
    label_prefix_edited(text)
    symbol_prefix_edited(text)
    shift_requested(delta, before)
    load_config_requested(text)
    copy_config_requested()
    copy_asm_requested()

and these methods:
    show_grid(rows, cols)
    set_tile_label(row, col, label)   # label is None when the cell is cleared
    set_cursor(value, text)
    set_prefixes(label_prefix, symbol_prefix)
    copy_to_clipboard(text)
    show_status(message)
"""

import os

from PyQt6.QtWidgets import QFileDialog, QMessageBox

from ..events import (AssemblyExportRequested, ConfigExportRequested,
                      ConfigImportRequested, CursorSet, LabelEntered,
                      LabelsShifted, TileClicked, TileCleared)
from ..exceptions import TileLabelerError, format_error_message
from ..logging_config import get_logger
from ..tile_registry import GridCoord
from .base_controller import BaseController

logger = get_logger("controller")


class TileSheetController(BaseController):
    """Controller for labeling and export operations"""

    def connect_signals(self):
        """Connect signals between model and view"""
        # View signals
        self.view.load_image_requested.connect(self.browse_image)
        self.view.tile_clicked.connect(self.click_tile)
        self.view.label_entered.connect(self.enter_label)
        self.view.tile_clear_requested.connect(self.clear_tile)
        self.view.cursor_edited.connect(self.set_cursor)
        self.view.label_prefix_edited.connect(self.set_label_prefix)
        self.view.symbol_prefix_edited.connect(self.set_symbol_prefix)
        self.view.shift_requested.connect(self.shift_labels)
        self.view.load_config_requested.connect(self.import_config)
        self.view.copy_config_requested.connect(self.copy_config)
        self.view.copy_asm_requested.connect(self.copy_asm)

        # Model signals
        self.model.registry_reset.connect(self.view.show_grid)
        self.model.tile_label_changed.connect(self.view.set_tile_label)
        self.model.cursor_changed.connect(self.view.set_cursor)
        self.model.config_exported.connect(self._on_config_exported)
        self.model.assembly_exported.connect(self._on_assembly_exported)
        self.model.intent_rejected.connect(self.view.show_status)

    def browse_image(self):
        """Browse for a tile sheet image"""
        initial_dir = ""
        last_image = self.model.image_path or self.model.settings.get(
            "last_image_file", ""
        )
        if last_image and os.path.exists(os.path.dirname(last_image)):
            initial_dir = os.path.dirname(last_image)

        file_name, _ = QFileDialog.getOpenFileName(
            self.view, "Choose a picture",
            initial_dir,
            "PNG Files (*.png);;All Files (*.*)"
        )

        if file_name:
            self.open_image(file_name)

    def open_image(self, path):
        """Load an image, reporting failures instead of raising"""
        try:
            self.model.load_image(path)
        except (OSError, TileLabelerError) as e:
            logger.error(f"Could not load {path}: {e}")
            QMessageBox.critical(
                self.view, "Load Error", format_error_message("load image", e)
            )
            return False
        self.view.set_prefixes(self.model.label_prefix, self.model.symbol_prefix)
        return True

    def click_tile(self, row, col):
        self.model.handle(TileClicked(GridCoord(row, col)))

    def enter_label(self, row, col, label):
        self.model.handle(LabelEntered(GridCoord(row, col), label))

    def clear_tile(self, row, col):
        self.model.handle(TileCleared(GridCoord(row, col)))

    def set_cursor(self, value):
        self.model.handle(CursorSet(value))

    def set_label_prefix(self, prefix):
        self.model.set_prefixes(label_prefix=prefix)

    def set_symbol_prefix(self, prefix):
        self.model.set_prefixes(symbol_prefix=prefix)

    def shift_labels(self, delta, before):
        self.model.handle(LabelsShifted(delta, before))

    def import_config(self, text):
        """Apply a config line on top of the current labels"""
        self.model.handle(ConfigImportRequested(text))

    def copy_config(self):
        self.model.handle(ConfigExportRequested())

    def copy_asm(self):
        self.model.handle(AssemblyExportRequested())

    def _on_config_exported(self, text):
        self.view.copy_to_clipboard(text)
        self.model.settings.set("last_config", text)
        self.model.mark_saved()
        self.view.show_status("Config copied")

    def _on_assembly_exported(self, text, failures):
        self.view.copy_to_clipboard(text)
        if failures:
            details = "\n".join(
                f"{failure.label} at {tuple(failure.coord)}: {failure.reason}"
                for failure in failures
            )
            QMessageBox.warning(
                self.view, "Export Warning",
                f"{len(failures)} tile(s) could not be encoded:\n{details}"
            )
        else:
            self.view.show_status("ASM copied")
