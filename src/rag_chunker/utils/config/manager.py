"""
Main configuration manager for the RAG chunker.

This module provides the ConfigManager class that layers configuration from
packaged defaults, an optional JSON file, and environment variables, validates
the result, and turns it into the explicit values the chunking core and the
logging setup take.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...core.document_processor.chunking.config import ChunkConfig
from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)


def deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


class ConfigManager:
    """
    Configuration manager for the RAG chunker.

    Sources, later ones winning:
    - Packaged default configuration
    - User configuration file (ragchunker.config.json in the project root)
    - RAG_CHUNKER_* environment variables, including those from a .env file

    A missing user file is fine unless it was requested explicitly.

    Example:
        >>> manager = ConfigManager(load_env=False)
        >>> manager.get("chunking.chunk_size")
        400
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file (default: ragchunker.config.json)
            project_root: Project root directory (default: current working directory)
            load_env: Whether to load environment variables from a .env file
            environ: Environment mapping to read overrides from (default: os.environ)
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE
        self.config_file_required = config_file is not None
        self.config_file_loaded = False

        self._config: Dict[str, Any] = {}
        self._loaded = False

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator(self.file_ops, self.paths)
        self.env_handler = EnvironmentHandler(environ)

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicitly requested file is missing
            ConfigurationError: If a file cannot be parsed
            ConfigurationValidationError: If validation fails
            EnvironmentVariableError: If an override cannot be converted
        """
        if self._loaded and not force_reload:
            return deepcopy(self._config)

        self._loaded = False
        self.config_file_loaded = False

        logger.debug("Loading default configuration")
        merged = self.file_ops.load_json_file(self.paths.default_config_path)

        user_config = self._load_user_config()
        if user_config is not None:
            merged = deep_merge_dicts(merged, user_config)

        logger.debug("Applying environment variable overrides")
        merged = self.env_handler.apply_environment_overrides(merged)

        if validate:
            self.schema_validator.validate_config(merged, config_file=self.config_file)

        self._config = merged
        self._loaded = True
        logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        config_path = self.file_ops.resolve_path(self.config_file)
        try:
            user_config = self.file_ops.load_json_file(config_path)
        except ConfigurationFileNotFoundError:
            if self.config_file_required:
                raise
            logger.debug(f"No configuration file at {config_path}, using defaults")
            return None

        logger.info(f"Loaded configuration from {config_path}")
        self.config_file_loaded = True
        return user_config

    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'chunking.chunk_size')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._loaded:
            self.load_config()

        value: Any = self._config
        try:
            for part in key.split('.'):
                value = value[part]
        except (KeyError, TypeError):
            return default
        return deepcopy(value)

    def reset(self) -> None:
        """Reset configuration state, forcing reload on next access."""
        self._config = {}
        self._loaded = False

    def chunk_config(self, **overrides: Any) -> ChunkConfig:
        """
        Build a validated ChunkConfig from the chunking section.

        Keyword overrides replace configured values; None overrides are ignored.

        Raises:
            InvalidChunkConfigError: If the values cannot form a ChunkConfig
        """
        values = self.get('chunking', {}) or {}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return ChunkConfig.from_dict(values)

    def logging_settings(self) -> Dict[str, Any]:
        """Logging level, format and optional file from the logging section."""
        section = self.get('logging', {}) or {}
        return {
            'level': section.get('level', 'INFO'),
            'log_format': section.get('format', 'standard'),
            'log_file': section.get('file'),
        }

    def get_config_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current configuration state.

        Returns:
            Dictionary with configuration summary
        """
        return {
            'loaded': self._loaded,
            'config_file': self.config_file,
            'config_file_loaded': self.config_file_loaded,
            'project_root': str(self.project_root),
            'config_keys': self._get_all_keys(self._config),
            'environment_overrides': self.env_handler.active_overrides(),
        }

    def _get_all_keys(self, config: Dict[str, Any], prefix: str = "") -> List[str]:
        keys = []
        for key, value in config.items():
            full_key = f"{prefix}.{key}" if prefix else key
            keys.append(full_key)
            if isinstance(value, dict):
                keys.extend(self._get_all_keys(value, full_key))
        return keys
