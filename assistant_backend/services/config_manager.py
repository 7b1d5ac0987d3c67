"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self, config_dir: str | None = None):
        # 1st: explicit argument or environment variable
        config_dir = config_dir or os.environ.get("ASSISTANT_BACKEND_CONFIG_DIR")

        # 2nd: home directory ~/.assistant_backend
        if not config_dir:
            config_dir = os.path.expanduser("~/.assistant_backend")

        config_path = Path(config_dir)
        try:
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning(f"Cannot write to {config_dir}: {e}")
            self._config_file = None

        # 3rd: temp directory when the preferred location is not writable
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "assistant_backend"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.info(f"Using temporary config path: {self._config_file}")

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                return _deep_merge(self._default_config(), json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading config: {e}")
            return self._default_config()

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "agent": {
                "endpoint": "http://localhost:3000/api/ai",
                "timeoutSeconds": 300,
            },
            "stream": {
                "accumulatedLimit": 20000,
                "accumulatedKeep": 15000,
            },
            "logging": {"level": "INFO"},
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config = _deep_merge(self._config, config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")
