"""Configuration management for yeahno servers."""

from .config_manager import ConfigManager, ServerConfig

__all__ = [
    "ConfigManager",
    "ServerConfig",
]
