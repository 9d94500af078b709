"""
Environment variable handling for configuration management.

This module maps RAG_CHUNKER_* environment variables onto configuration keys
and converts their string values to the declared types.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from ...exceptions.config_exceptions import (
    EnvironmentVariableError,
)


logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on', 'enabled')
FALSE_VALUES = ('false', '0', 'no', 'off', 'disabled')


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    ENV_MAPPING: Dict[str, Tuple[str, str]] = {
        'RAG_CHUNKER_STRATEGY': ('chunking.strategy', 'string'),
        'RAG_CHUNKER_CHUNK_SIZE': ('chunking.chunk_size', 'integer'),
        'RAG_CHUNKER_OVERLAP': ('chunking.overlap', 'integer'),
        'RAG_CHUNKER_STRIP_NON_ASCII': ('chunking.strip_non_ascii', 'boolean'),
        'RAG_CHUNKER_MODEL': ('chunking.model', 'string'),
        'RAG_CHUNKER_LOG_LEVEL': ('logging.level', 'uppercase'),
        'RAG_CHUNKER_LOG_FORMAT': ('logging.format', 'lowercase'),
    }

    def __init__(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize environment handler.

        Args:
            environ: Mapping to read variables from (default: os.environ)
        """
        self._environ = environ

    @property
    def environ(self) -> Dict[str, str]:
        return self._environ if self._environ is not None else os.environ

    def get_env_mapping(self) -> Dict[str, str]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var names to dotted config keys
        """
        return {env_var: key for env_var, (key, _) in self.ENV_MAPPING.items()}

    def convert_env_value(self, value: str, target_type: str = 'string', variable_name: Optional[str] = None) -> Any:
        """
        Convert environment variable string to appropriate Python type.

        Args:
            value: Environment variable value (always string)
            target_type: 'string', 'uppercase', 'lowercase', 'boolean' or 'integer'
            variable_name: Variable name for error reporting

        Returns:
            Converted value

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        value = value.strip()

        if target_type == 'boolean':
            lowered = value.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise EnvironmentVariableError(
                f"Cannot convert '{value}' to boolean; use one of {', '.join(TRUE_VALUES + FALSE_VALUES)}",
                variable_name,
                target_type,
            )

        if target_type == 'integer':
            try:
                return int(value)
            except ValueError as e:
                raise EnvironmentVariableError(
                    f"Cannot convert '{value}' to integer: {e}",
                    variable_name,
                    target_type,
                ) from e

        if target_type == 'uppercase':
            return value.upper()
        if target_type == 'lowercase':
            return value.lower()
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Empty variables are ignored.

        Args:
            config: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied

        Raises:
            EnvironmentVariableError: If a variable cannot be converted
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.ENV_MAPPING.items():
            env_value = self.environ.get(env_var)
            if env_value is None or not env_value.strip():
                continue

            converted_value = self.convert_env_value(env_value, target_type, env_var)
            self._set_nested_value(result, config_key, converted_value)
            logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def active_overrides(self) -> List[str]:
        """Names of mapped variables that are currently set."""
        return [
            env_var for env_var in self.ENV_MAPPING
            if (self.environ.get(env_var) or '').strip()
        ]

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
