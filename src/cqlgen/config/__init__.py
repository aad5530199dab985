"""Configuration module for cqlgen."""

from .settings import Settings, get_settings
from .logging import setup_logging, get_logger
from .exporter import ExporterConfig, TransformerSpec, DEFAULT_TIMEOUTS, DEFAULT_NAMING_TEMPLATE

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "ExporterConfig",
    "TransformerSpec",
    "DEFAULT_TIMEOUTS",
    "DEFAULT_NAMING_TEMPLATE",
]
