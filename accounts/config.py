"""Configuration management for the user account service."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml

from .database import resolve_database_path

_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings for the HTTP service."""

    database_path: Path = field(default_factory=lambda: resolve_database_path(None))
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    cors_origins: Tuple[str, ...] = ("*",)

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "ServiceConfig":
        """Create a :class:`ServiceConfig` from raw dictionary data."""
        known_fields = {"database_path", "host", "port", "log_level", "cors_origins"}
        unknown = data.keys() - known_fields
        if unknown:
            raise ValueError(f"Unknown service configuration fields: {', '.join(sorted(unknown))}")

        raw_db_path = data.get("database_path")
        if raw_db_path:
            expanded = Path(str(raw_db_path)).expanduser()
            if not expanded.is_absolute() and base_path is not None:
                expanded = base_path / expanded
            database_path = expanded.resolve(strict=False)
        else:
            database_path = resolve_database_path(None)

        port = int(data.get("port", 8080))  # type: ignore[arg-type]
        if not 1 <= port <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {port}")

        log_level = str(data.get("log_level", "info")).lower()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level '{log_level}'")

        raw_origins = data.get("cors_origins", ["*"])
        if isinstance(raw_origins, str):
            raw_origins = [raw_origins]
        if not isinstance(raw_origins, (list, tuple)):
            raise ValueError("cors_origins must be a string or a list of strings")
        origins = tuple(str(origin).strip() for origin in raw_origins if str(origin).strip())

        return ServiceConfig(
            database_path=database_path,
            host=str(data.get("host", "0.0.0.0")),
            port=port,
            log_level=log_level,
            cors_origins=origins,
        )


def load_service_config(
    config_path: Optional[Path],
    environ: Optional[Mapping[str, str]] = None,
) -> ServiceConfig:
    """Load settings from a YAML file, then apply environment overrides."""
    env = os.environ if environ is None else environ

    raw: Dict[str, object] = {}
    base_path: Path | None = None
    if config_path is not None and config_path.is_file():
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")
        raw = dict(loaded.get("service", loaded))
        base_path = config_path.parent

    config = ServiceConfig.from_dict(raw, base_path=base_path)

    db_override = env.get("ACCOUNTS_DB_PATH")
    if db_override:
        config = replace(config, database_path=resolve_database_path(db_override))
    return config


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "accounts.yaml").resolve(strict=False)
    return candidate


__all__ = ["ServiceConfig", "load_service_config", "resolve_config_path"]
