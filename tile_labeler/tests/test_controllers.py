#!/usr/bin/env python3
"""
Tests for the tile sheet controller
Uses a mock view with mock signals and a real model
"""

from unittest.mock import MagicMock, patch

import pytest
from PyQt6.QtCore import QObject

from tile_labeler.controllers import tile_sheet_controller
from tile_labeler.controllers.tile_sheet_controller import TileSheetController
from tile_labeler.models.tile_sheet_model import TileSheetModel


class MockSignal:
    """Mock PyQt signal that can be connected to"""

    def __init__(self):
        self.callbacks = []

    def connect(self, callback):
        self.callbacks.append(callback)

    def emit(self, *args, **kwargs):
        for callback in self.callbacks:
            callback(*args, **kwargs)


class MockTileSheetView(QObject):
    """Mock labeling view with required signals and methods"""

    def __init__(self):
        super().__init__()
        self.load_image_requested = MockSignal()
        self.tile_clicked = MockSignal()
        self.label_entered = MockSignal()
        self.tile_clear_requested = MockSignal()
        self.cursor_edited = MockSignal()
        self.label_prefix_edited = MockSignal()
        self.symbol_prefix_edited = MockSignal()
        self.shift_requested = MockSignal()
        self.load_config_requested = MockSignal()
        self.copy_config_requested = MockSignal()
        self.copy_asm_requested = MockSignal()

        self.show_grid = MagicMock()
        self.set_tile_label = MagicMock()
        self.set_cursor = MagicMock()
        self.set_prefixes = MagicMock()
        self.copy_to_clipboard = MagicMock()
        self.show_status = MagicMock()


@pytest.fixture
def view():
    return MockTileSheetView()


@pytest.fixture
def model(settings_manager):
    return TileSheetModel(settings_manager)


@pytest.fixture
def controller(model, view):
    return TileSheetController(model, view)


@pytest.fixture
def loaded(controller, sheet_png):
    assert controller.open_image(str(sheet_png))
    return controller


@pytest.mark.gui
class TestImageLoading:

    def test_browse_image_opens_selection(self, controller, view, sheet_png):
        with patch(
            "tile_labeler.controllers.tile_sheet_controller.QFileDialog.getOpenFileName",
            return_value=(str(sheet_png), "PNG Files (*.png)"),
        ):
            view.load_image_requested.emit()

        view.show_grid.assert_called_once_with(2, 3)
        view.set_prefixes.assert_called_once_with("", "Tile_")

    def test_browse_image_cancelled(self, controller, view, model):
        with patch(
            "tile_labeler.controllers.tile_sheet_controller.QFileDialog.getOpenFileName",
            return_value=("", ""),
        ):
            controller.browse_image()

        view.show_grid.assert_not_called()
        assert model.image_path == ""

    def test_browse_starts_in_last_image_folder(self, controller, settings_manager,
                                                sheet_png):
        settings_manager.set("last_image_file", str(sheet_png))

        with patch(
            "tile_labeler.controllers.tile_sheet_controller.QFileDialog.getOpenFileName",
            return_value=("", ""),
        ) as mock_dialog:
            controller.browse_image()

        assert mock_dialog.call_args[0][2] == str(sheet_png.parent)

    def test_open_missing_image_shows_error(self, controller, view, tmp_path):
        with patch(
            "tile_labeler.controllers.tile_sheet_controller.QMessageBox"
        ) as mock_box:
            result = controller.open_image(str(tmp_path / "missing.png"))

        assert result is False
        mock_box.critical.assert_called_once()
        assert "File not found" in mock_box.critical.call_args[0][2]


@pytest.mark.gui
class TestLabelingSignals:

    def test_tile_click_updates_view(self, loaded, view, model):
        view.tile_clicked.emit(0, 1)

        view.set_tile_label.assert_called_once_with(0, 1, "0x00")
        view.set_cursor.assert_called_with(1, "0x01")
        assert model.labels() == [("0x00", (0, 1))]

    def test_label_entry_and_clear(self, loaded, view, model):
        view.label_entered.emit(1, 1, "door")
        view.tile_clear_requested.emit(1, 1)

        view.set_tile_label.assert_any_call(1, 1, "door")
        view.set_tile_label.assert_called_with(1, 1, None)
        assert model.labels() == []

    def test_cursor_edit(self, loaded, view, model):
        view.cursor_edited.emit(31)

        view.set_cursor.assert_called_once_with(31, "0x1f")
        assert model.cursor == 31

    def test_prefix_edits(self, loaded, view, model):
        view.label_prefix_edited.emit("bg_")
        view.symbol_prefix_edited.emit("Bg_")

        assert model.label_prefix == "bg_"
        assert model.symbol_prefix == "Bg_"

    def test_shift_buttons(self, loaded, view, model):
        view.tile_clicked.emit(0, 0)
        view.tile_clicked.emit(0, 1)
        view.cursor_edited.emit(1)

        view.shift_requested.emit(1, False)

        assert model.labels() == [("0x00", (0, 0)), ("0x02", (0, 1))]

    def test_click_before_image_shows_status(self, controller, view):
        view.tile_clicked.emit(0, 0)
        view.show_status.assert_called_once_with("No image loaded")

    def test_label_with_comma_shows_status(self, loaded, view, model):
        view.label_entered.emit(1, 1, "left,door")

        view.set_tile_label.assert_not_called()
        assert "may not contain" in view.show_status.call_args[0][0]
        assert model.labels() == []


@pytest.mark.gui
class TestExport:

    def test_copy_config(self, loaded, view, model, settings_manager):
        view.load_config_requested.emit(",0x00:0_0,0x01:0_1")

        view.copy_config_requested.emit()

        view.copy_to_clipboard.assert_called_once_with("0x00:0_0,0x01:0_1")
        assert settings_manager.get("last_config") == "0x00:0_0,0x01:0_1"
        assert model.is_modified is False

    def test_copy_asm(self, loaded, view):
        view.tile_clicked.emit(0, 0)

        view.copy_asm_requested.emit()

        text = view.copy_to_clipboard.call_args[0][0]
        assert text.startswith(";\n       .org 0x00 * 16\n        Tile_0x00:\n")
        view.show_status.assert_called_with("ASM copied")

    def test_copy_asm_warns_about_failed_tiles(self, loaded, view):
        view.load_config_requested.emit("0x00:0_0,0x01:1_2")

        with patch(
            "tile_labeler.controllers.tile_sheet_controller.QMessageBox"
        ) as mock_box:
            view.copy_asm_requested.emit()

        view.copy_to_clipboard.assert_called_once()
        mock_box.warning.assert_called_once()
        message = mock_box.warning.call_args[0][2]
        assert "1 tile(s)" in message
        assert "0x01 at (1, 2)" in message


@pytest.mark.unit
class TestViewInterface:

    def test_module_docstring_lists_view_interface(self):
        doc = tile_sheet_controller.__doc__
        view = MockTileSheetView()
        for name, value in vars(view).items():
            if isinstance(value, (MockSignal, MagicMock)):
                assert f"    {name}(" in doc, name
