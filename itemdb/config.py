"""Settings for the catalog, from defaults, a YAML file and the environment.

Precedence (lowest first): built-in defaults, YAML config file, environment
variables, explicit overrides.

Environment variables:
    ITEMDB_CONFIG: Path to a YAML config file
    ITEMDB_BACKEND: "sqlite" or "json" (default: sqlite)
    ITEMDB_DATABASE: SQLite database path (default: data/items.sqlite3)
    ITEMDB_DOCUMENT: JSON document path (default: data/items.json)
    ITEMDB_IMAGE_DIR: Image directory (default: images)
    ITEMDB_REQUEST_TIMEOUT: Per-request storage deadline in seconds, 0 disables (default: 30)
    FRONT_URL: Origin allowed by CORS (default: http://localhost:3000)
    LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from .catalog import ItemCatalog
from .storage.base import ItemStore
from .storage.database import SQLiteItemStore
from .storage.document import JSONItemStore
from .storage.images import ImageStore

BACKENDS = ("sqlite", "json")

ENV_VARS = {
    "backend": "ITEMDB_BACKEND",
    "database_path": "ITEMDB_DATABASE",
    "document_path": "ITEMDB_DOCUMENT",
    "image_dir": "ITEMDB_IMAGE_DIR",
    "request_timeout": "ITEMDB_REQUEST_TIMEOUT",
    "front_url": "FRONT_URL",
    "log_level": "LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    backend: str = "sqlite"
    database_path: Path = Path("data/items.sqlite3")
    document_path: Path = Path("data/items.json")
    image_dir: Path = Path("images")
    request_timeout: float = 30.0
    front_url: str = "http://localhost:3000"
    log_level: str = "INFO"


def _coerce(name: str, value) -> object:
    if name in ("database_path", "document_path", "image_dir"):
        return Path(value)
    if name == "request_timeout":
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid request_timeout: {value!r}")
    return str(value).strip()


def load_config_file(config_path: str | Path) -> dict:
    """Load settings from a YAML file (flat mapping of setting names)."""
    path = Path(config_path)
    if not path.exists():
        raise ValueError(f"Config file not found: {config_path}")
    with open(path) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    known = {f.name for f in fields(Settings)}
    unknown = set(config) - known
    if unknown:
        raise ValueError(f"Unknown config key(s) in {config_path}: {', '.join(sorted(unknown))}")
    return config


def load_settings(config_path: Optional[str | Path] = None, **overrides) -> Settings:
    """Build Settings from defaults, config file, environment and overrides.

    Overrides whose value is None are ignored, so argparse namespaces can be
    passed through directly.
    """
    values: dict = {}

    config_path = config_path or os.environ.get("ITEMDB_CONFIG")
    if config_path:
        values.update(load_config_file(config_path))

    for name, env in ENV_VARS.items():
        raw = os.environ.get(env, "").strip()
        if raw:
            values[name] = raw

    values.update({k: v for k, v in overrides.items() if v is not None})

    settings = replace(Settings(), **{k: _coerce(k, v) for k, v in values.items()})
    if settings.backend not in BACKENDS:
        raise ValueError(f"Unknown backend {settings.backend!r} (expected one of: {', '.join(BACKENDS)})")
    return settings


def open_store(settings: Settings) -> ItemStore:
    """Open the configured storage backend."""
    if settings.backend == "json":
        return JSONItemStore(settings.document_path)
    return SQLiteItemStore(settings.database_path)


def build_catalog(settings: Settings) -> ItemCatalog:
    return ItemCatalog(open_store(settings), ImageStore(settings.image_dir))
