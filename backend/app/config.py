"""Configuration loader that keeps all runtime constants centralized."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

try:
    import yaml
except ImportError as exc:  # pragma: no cover - library is optional until runtime
    raise RuntimeError("PyYAML is required to load the application configuration") from exc


CONFIG_PATH = Path(__file__).resolve().parent / "app_config.yaml"
SUPPORTED_BACKENDS = ("postgres", "sqlite", "memory", "mock")


@dataclass(frozen=True)
class AppConfig:
    """Strongly-typed wrapper over the raw YAML document.

    ``DATABASE_URL`` and ``NOTIFY_STORAGE`` in the environment win over the
    file so deployments can keep credentials out of it.
    """

    raw: Dict[str, Any]

    @property
    def version(self) -> str:
        return str(self.raw.get("version", "v1"))

    @property
    def storage(self) -> Dict[str, Any]:
        return self.raw.get("storage") or {}

    @property
    def storage_backend(self) -> str:
        backend = os.environ.get("NOTIFY_STORAGE") or self.storage.get("backend", "postgres")
        return str(backend).lower()

    @property
    def database_url(self) -> Optional[str]:
        return os.environ.get("DATABASE_URL") or self.storage.get("database_url")

    @property
    def storage_schema(self) -> Optional[str]:
        return self.storage.get("schema")

    @property
    def storage_echo(self) -> bool:
        return bool(self.storage.get("echo", False))

    @property
    def connect_timeout(self) -> Optional[int]:
        value = self.storage.get("connect_timeout")
        return int(value) if value is not None else None

    @property
    def server(self) -> Dict[str, Any]:
        return self.raw.get("server") or {}

    @property
    def host(self) -> str:
        return str(self.server.get("host", "127.0.0.1"))

    @property
    def port(self) -> int:
        return int(self.server.get("port", 3001))

    @property
    def cors_origins(self) -> List[str]:
        return list(self.server.get("cors_origins", ["*"]))

    @property
    def clock(self) -> Dict[str, Any]:
        return self.raw.get("clock") or {}

    @property
    def timezone(self) -> str:
        return str(self.clock.get("timezone", "UTC"))

    @property
    def fallback(self) -> Dict[str, Any]:
        return self.raw.get("fallback") or {}

    @property
    def fallback_on_error(self) -> bool:
        return bool(self.fallback.get("on_error", False))

    @property
    def fallback_seed(self) -> Optional[int]:
        return self.fallback.get("seed")

    @property
    def log_level(self) -> str:
        return str((self.raw.get("logging") or {}).get("level", "INFO")).upper()


@lru_cache(maxsize=1)
def get_settings(path: Path | None = None) -> AppConfig:
    """Load configuration once per process."""

    load_dotenv()
    config_path = path or Path(os.environ.get("NOTIFY_CONFIG", CONFIG_PATH))
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):  # pragma: no cover - invalid file guard
        raise ValueError("Configuration file must define a mapping at the top level.")
    return AppConfig(raw=data)
