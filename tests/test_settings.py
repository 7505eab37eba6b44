"""
Tests for Settings
==================
Tests for the YAML app config loader in namechain/settings.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namechain import settings
from namechain.settings import get_setting, load_app_config, resolve_path


@pytest.fixture
def fresh_config():
    """Clear the cached config before and after the test."""
    load_app_config.cache_clear()
    yield
    load_app_config.cache_clear()


class TestSettings:
    """Tests for get_setting / resolve_path."""

    def test_bundled_values(self, fresh_config):
        assert get_setting("generation.scale_exponent") == 1.3
        assert get_setting("generation.placeholder") == "-"
        assert get_setting("generation.strict") is False

    def test_missing_path_returns_default(self, fresh_config):
        assert get_setting("generation.nope", 5) == 5
        assert get_setting("generation.scale_exponent.deeper") is None

    def test_env_override(self, fresh_config, tmp_path, monkeypatch):
        path = tmp_path / "app.yaml"
        path.write_text("generation:\n  placeholder: '*'\n")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))
        load_app_config.cache_clear()
        assert get_setting("generation.placeholder") == "*"
        assert get_setting("generation.scale_exponent", 1.3) == 1.3

    def test_missing_config_file(self, fresh_config, tmp_path, monkeypatch):
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
        load_app_config.cache_clear()
        with pytest.raises(FileNotFoundError):
            load_app_config()

    def test_resolve_relative_path(self):
        assert resolve_path("corpora") == settings.PROJECT_ROOT / "corpora"

    def test_resolve_absolute_path(self, tmp_path):
        assert resolve_path(str(tmp_path)) == tmp_path

    def test_resolve_requires_value(self):
        with pytest.raises(ValueError):
            resolve_path(None)
