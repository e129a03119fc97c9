"""Configuration for the yeahno server launcher.

Values come from an optional JSON file and are then overridden by environment
variables. The result is a frozen ``ServerConfig``; nothing is reconfigured
while a server is running.
"""

from __future__ import annotations

import json
import logging
import os

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

ENV_HOST = "YEAHNO_HOST"
ENV_PORT = "YEAHNO_PORT"
ENV_DEBUG = "YEAHNO_DEBUG"
ENV_SERVER_NAME = "YEAHNO_SERVER_NAME"

_TRUTHY = ("true", "1", "yes", "on")


def _package_version() -> str:
    from yeahno import __version__  # noqa: PLC0415

    return __version__


class ServerConfig(BaseModel):
    """Server configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = "yeahno"
    version: str = Field(default_factory=_package_version)
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)


class ConfigManager:
    """Loads ``ServerConfig`` values from a JSON file and the environment.

    File layout::

        {"server": {"name": "notes", "host": "0.0.0.0", "port": 9000, "debug": true}}
    """

    SERVER_SECTION = "server"

    def __init__(self, config_file: Path | None = None):
        self.config_file = config_file
        self._options: dict[str, Any] = {}
        self._load_config()
        self._apply_env_overrides()

    def _load_config(self) -> None:
        if self.config_file is None or not self.config_file.exists():
            return
        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file}: {e}")
            return
        section = data.get(self.SERVER_SECTION, {}) if isinstance(data, dict) else {}
        if isinstance(section, dict):
            self._options.update(section)
        DebugLogger.debug("Loaded configuration from %s", self.config_file)

    def _apply_env_overrides(self) -> None:
        if ENV_PORT in os.environ:
            try:
                self._options["port"] = int(os.environ[ENV_PORT])
            except ValueError:
                logger.warning(f"Invalid {ENV_PORT} value")

        host = os.environ.get(ENV_HOST, "").strip()
        if host:
            self._options["host"] = host

        name = os.environ.get(ENV_SERVER_NAME, "").strip()
        if name:
            self._options["name"] = name

        if ENV_DEBUG in os.environ:
            self._options["debug"] = os.environ[ENV_DEBUG].lower() in _TRUTHY

        if "debug" in self._options:
            DebugLogger.set_debug_enabled(self.is_debug_mode())

    def is_debug_mode(self) -> bool:
        return bool(self._options.get("debug", False))

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def server_config(self, **overrides: Any) -> ServerConfig:
        """Build the server configuration; explicit *overrides* that are not ``None`` win."""
        values = {k: v for k, v in self._options.items() if k in ServerConfig.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ServerConfig(**values)

    def __str__(self) -> str:
        return f"ConfigManager(config_file={self.config_file}, options={len(self._options)})"
