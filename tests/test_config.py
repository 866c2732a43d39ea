"""Tests for config loading."""

import os
import tempfile

from supplyscan.config import DEFAULT_DATA_DIR, AppConfig, load_config


def test_load_config_defaults(monkeypatch):
    """Loading with no path returns all defaults."""
    monkeypatch.delenv("SUPPLYSCAN_DATA_DIR", raising=False)
    config = load_config()
    assert isinstance(config, AppConfig)
    assert config.storage.backend == "json"
    assert config.storage.path == DEFAULT_DATA_DIR
    assert config.export.output_dir == "."
    assert config.tracking.default_days == 30


def test_load_config_nonexistent_file(monkeypatch):
    """Loading a nonexistent file returns defaults."""
    monkeypatch.delenv("SUPPLYSCAN_DATA_DIR", raising=False)
    config = load_config("/nonexistent/path.toml")
    assert config.storage.backend == "json"


def test_load_config_from_toml():
    """Loading a valid TOML file populates config."""
    toml_content = b"""\
[storage]
backend = "sqlite"
path = "/var/lib/supplyscan/orders.db"

[export]
output_dir = "/srv/exports"

[tracking]
default_days = 7
"""
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(toml_content)
        f.flush()
        config = load_config(f.name)

    os.unlink(f.name)

    assert config.storage.backend == "sqlite"
    assert config.storage.path == "/var/lib/supplyscan/orders.db"
    assert config.export.output_dir == "/srv/exports"
    assert config.tracking.default_days == 7


def test_load_config_env_data_dir(monkeypatch):
    """SUPPLYSCAN_DATA_DIR fills an unset storage path."""
    monkeypatch.setenv("SUPPLYSCAN_DATA_DIR", "/tmp/supplies")
    config = load_config()
    assert config.storage.path == "/tmp/supplies"


def test_load_config_file_path_takes_precedence(monkeypatch):
    """A path in the config file wins over the environment."""
    monkeypatch.setenv("SUPPLYSCAN_DATA_DIR", "/tmp/env-dir")

    toml_content = b"""\
[storage]
path = "/tmp/file-dir"
"""
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(toml_content)
        f.flush()
        config = load_config(f.name)

    os.unlink(f.name)
    assert config.storage.path == "/tmp/file-dir"


def test_load_config_partial_toml(monkeypatch):
    """Partial TOML uses defaults for missing sections."""
    monkeypatch.delenv("SUPPLYSCAN_DATA_DIR", raising=False)
    toml_content = b"""\
[tracking]
default_days = 90
"""
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(toml_content)
        f.flush()
        config = load_config(f.name)

    os.unlink(f.name)
    assert config.tracking.default_days == 90
    assert config.storage.backend == "json"
    assert config.export.output_dir == "."
