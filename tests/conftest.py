from __future__ import annotations

import pytest

from assistant_backend.services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config singleton at a throwaway directory."""
    monkeypatch.setenv("ASSISTANT_BACKEND_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset_instance()
    yield
    ConfigManager.reset_instance()
