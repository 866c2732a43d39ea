"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_DATA_DIR = "~/.local/share/supplyscan"


@dataclass
class StorageConfig:
    backend: str = "json"
    path: str = DEFAULT_DATA_DIR


@dataclass
class ExportConfig:
    output_dir: str = "."


@dataclass
class TrackingConfig:
    default_days: int = 30


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The data directory can be set via the SUPPLYSCAN_DATA_DIR environment
    variable when the file leaves it empty.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    stg = raw.get("storage", {})
    exp = raw.get("export", {})
    trk = raw.get("tracking", {})

    # Resolve data path: config file → environment variable → default
    data_path = (
        stg.get("path", "")
        or os.environ.get("SUPPLYSCAN_DATA_DIR", "")
        or DEFAULT_DATA_DIR
    )

    return AppConfig(
        storage=StorageConfig(
            backend=stg.get("backend", "json"),
            path=data_path,
        ),
        export=ExportConfig(
            output_dir=exp.get("output_dir", "."),
        ),
        tracking=TrackingConfig(
            default_days=trk.get("default_days", 30),
        ),
    )
