"""
Settings manager for the tile labeler
Handles saving and loading user preferences
"""

import json
import os
from pathlib import Path
from typing import Any

from .constants import DEFAULT_LABEL_PREFIX, DEFAULT_SYMBOL_PREFIX
from .logging_config import get_logger

logger = get_logger("settings")


class SettingsManager:
    """Manages application settings with persistence"""

    def __init__(self, app_name="tile_labeler"):
        self.app_name = app_name
        self.settings_file = self._get_settings_path()
        self.settings = self._load_settings()

    def _get_settings_path(self) -> Path:
        """Get the appropriate settings directory for the platform"""
        if os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
            settings_dir = base / self.app_name
        else:  # Linux/Mac
            base = Path(os.path.expanduser("~"))
            settings_dir = base / f".{self.app_name}"

        settings_dir.mkdir(parents=True, exist_ok=True)
        return settings_dir / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file"""
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable settings file: {e}")
                return self._get_default_settings()
        return self._get_default_settings()

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return {
            "last_image_file": "",
            "last_config": "",
            "label_prefix": DEFAULT_LABEL_PREFIX,
            "symbol_prefix": DEFAULT_SYMBOL_PREFIX,
            "recent_files": {"png": []},
            "preferences": {
                "max_recent_files": 10,
            },
        }

    def save_settings(self):
        """Save current settings to file"""
        try:
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save settings: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """Set a setting value"""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if k not in target:
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_settings()

    def add_recent_file(self, file_type: str, file_path: str):
        """Add a file to recent files list"""
        file_path = str(file_path)

        recent_files = self.settings.setdefault("recent_files", {})
        recent_list = recent_files.setdefault(file_type, [])

        if file_path in recent_list:
            recent_list.remove(file_path)
        recent_list.insert(0, file_path)

        max_recent = self.get("preferences.max_recent_files", 10)
        recent_files[file_type] = recent_list[:max_recent]

        self.save_settings()

    def get_recent_files(self, file_type: str) -> list:
        """Get recent files for a specific type"""
        return self.settings.get("recent_files", {}).get(file_type, [])

    def update_last_image(self, path: str):
        """Remember the image that was opened last"""
        self.set("last_image_file", str(path))
        self.add_recent_file("png", path)

    def get_prefixes(self) -> dict[str, str]:
        """Get the label and symbol prefixes"""
        return {
            "label_prefix": self.get("label_prefix", DEFAULT_LABEL_PREFIX),
            "symbol_prefix": self.get("symbol_prefix", DEFAULT_SYMBOL_PREFIX),
        }

    def reset_settings(self):
        """Reset all settings to defaults"""
        self.settings = self._get_default_settings()
        self.save_settings()


# Singleton instance
_settings_instance = None


def get_settings() -> SettingsManager:
    """Get the singleton settings instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = SettingsManager()
    return _settings_instance
