"""Configuration - chargement YAML et modeles types."""

from .loader import ConfigManager
from .models import ExporterConfig, LoggingConfig, NodeConfig, ServeurConfig

__all__ = [
    "ConfigManager",
    "ExporterConfig",
    "LoggingConfig",
    "NodeConfig",
    "ServeurConfig",
]
