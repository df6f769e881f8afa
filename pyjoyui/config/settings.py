"""
Settings module for PyJoyUI.

Provides convenient access to configuration settings with validation and type hints.
"""

from typing import Any, Optional
from .config import get_config, Config


VIEW_TYPE_NAMES = ("keyboard", "gamepad", "mobile")


class Settings:
    """
    High-level settings interface with validation and type safety.

    This class provides a more convenient and type-safe way to access
    configuration values compared to the raw Config class.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize settings with optional config instance.

        Args:
            config: Optional Config instance, uses global if not provided
        """
        self._config = config or get_config()

    @property
    def config(self) -> Config:
        return self._config

    # Application settings
    @property
    def app_name(self) -> str:
        """Application name."""
        return self._config.get("app.name", "PyJoyUI")

    @property
    def debug_mode(self) -> bool:
        """Debug mode enabled."""
        return bool(self._config.get("app.debug", False))

    @property
    def log_level(self) -> str:
        """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""
        level = str(self._config.get("app.log_level", "INFO")).upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        return level if level in valid_levels else "INFO"

    @property
    def log_to_file(self) -> bool:
        """Write rotating log files under ~/.pyjoyui/logs."""
        return bool(self._config.get("app.log_to_file", False))

    @property
    def target_fps(self) -> int:
        """Target frames per second."""
        fps = self._config.get("app.fps_target", 60)
        return max(1, min(int(fps), 240))  # Clamp between 1 and 240

    @property
    def window_size(self) -> tuple[int, int]:
        """Window size as (width, height) tuple."""
        width = self._config.get("app.window.width", 1280)
        height = self._config.get("app.window.height", 720)
        return (max(320, min(int(width), 7680)), max(240, min(int(height), 4320)))

    # UI settings
    @property
    def default_view_type(self) -> str:
        """View type used before any input is received."""
        name = str(self._config.get("ui.default_view_type", "keyboard")).lower()
        return name if name in VIEW_TYPE_NAMES else "keyboard"

    @property
    def fade_duration(self) -> float:
        """Default fade duration in seconds."""
        duration = float(self._config.get("ui.fade_duration", 1.0))
        return max(0.0, min(duration, 10.0))

    @property
    def strict_errors(self) -> bool:
        """Raise reported UI errors instead of only logging them."""
        return bool(self._config.get("ui.strict_errors", False))

    # Input settings
    @property
    def analog_threshold(self) -> float:
        """Minimum gamepad axis magnitude that counts as gamepad use."""
        threshold = float(self._config.get("input.analog_threshold", 0.24))
        return max(0.0, min(threshold, 1.0))

    @property
    def touch_switches_view(self) -> bool:
        """Touch input switches presentation to the mobile view."""
        return bool(self._config.get("input.touch_switches_view", True))

    # Convenience methods
    def update_setting(self, key: str, value: Any) -> None:
        """
        Update a setting value.

        Args:
            key: Setting key in dot notation
            value: New value
        """
        self._config.set(key, value)

# Global settings instance
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def reset_settings() -> None:
    """Reset the global settings instance."""
    global _settings_instance
    _settings_instance = None
