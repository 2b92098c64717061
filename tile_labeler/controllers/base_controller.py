#!/usr/bin/env python3
"""
Base controller class for MVC pattern
Wires a model to a view once both are present
"""

from PyQt6.QtCore import QObject


class BaseController(QObject):
    """Base class for controllers in MVC pattern"""

    def __init__(self, model=None, view=None, parent=None):
        super().__init__(parent)
        self._model = model
        self._view = view

        if model is not None and view is not None:
            self.connect_signals()

    def connect_signals(self):
        """Connect signals between model and view (to be overridden)"""
        pass

    @property
    def model(self):
        return self._model

    @property
    def view(self):
        return self._view
