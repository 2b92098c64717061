#!/usr/bin/env python3
"""
Base model class with observable properties
Provides change notification support for MVC pattern
"""

from PyQt6.QtCore import QObject, pyqtSignal


class ObservableProperty:
    """Property descriptor that emits signals on change"""

    def __init__(self, initial_value=None):
        self.value = initial_value
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name
        self.private_name = f'_{name}'

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self.private_name, self.value)

    def __set__(self, obj, value):
        old_value = getattr(obj, self.private_name, self.value)
        if old_value != value:
            setattr(obj, self.private_name, value)
            signal_name = f'{self.name}_changed'
            if hasattr(obj, signal_name):
                getattr(obj, signal_name).emit(value)
            if hasattr(obj, 'property_changed'):
                obj.property_changed.emit(self.name, value)


class BaseModel(QObject):
    """Base class for observable models"""

    # property_name, new_value
    property_changed = pyqtSignal(str, object)

    def __init__(self, parent=None):
        super().__init__(parent)
