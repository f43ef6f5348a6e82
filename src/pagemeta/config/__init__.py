"""Configuration for pagemeta."""

from .config import (
    Config,
    ExtractionConfig,
    FetchConfig,
    MonitoringConfig,
    ParserConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "Config",
    "ExtractionConfig",
    "FetchConfig",
    "MonitoringConfig",
    "ParserConfig",
    "find_config_file",
    "load_config",
]
