"""
Configuration file paths and constants for the RAG chunker.

This module provides the ConfigPaths dataclass containing default paths and
constants used throughout the configuration system. Defaults and the schema ship
inside the package; the user configuration file and .env are looked up relative
to the project root.
"""

from dataclasses import dataclass
from pathlib import Path

PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "ragchunker.config.json"
    DEFAULT_CONFIG_DIR: str = str(PACKAGE_CONFIG_DIR / "defaults")
    DEFAULT_CONFIG_NAME: str = "default_config.json"
    SCHEMA_DIR: str = str(PACKAGE_CONFIG_DIR / "schema")
    DEFAULT_CONFIG_SCHEMA: str = "config_schema.json"
    ENV_FILE: str = ".env"

    @property
    def default_config_path(self) -> Path:
        return Path(self.DEFAULT_CONFIG_DIR) / self.DEFAULT_CONFIG_NAME

    @property
    def schema_path(self) -> Path:
        return Path(self.SCHEMA_DIR) / self.DEFAULT_CONFIG_SCHEMA
