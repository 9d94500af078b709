"""
Schema validation for configuration management.

This module loads the packaged JSON schema and validates merged configuration
against it with jsonschema, collecting every violation for the error report.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
)
from .file_operations import FileOperations
from .paths import ConfigPaths


logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    The schema is loaded lazily on first use and cached for the lifetime of the
    validator.
    """

    def __init__(self, file_ops: FileOperations, paths: ConfigPaths) -> None:
        """
        Initialize schema validator.

        Args:
            file_ops: File operations instance
            paths: Configuration paths instance
        """
        self.file_ops = file_ops
        self.paths = paths
        self._schema: Optional[Dict[str, Any]] = None

    def load_schema(self, schema_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load JSON schema for configuration validation.

        Args:
            schema_file: Path to schema file (default: packaged config_schema.json)

        Returns:
            Loaded JSON schema

        Raises:
            ConfigurationSchemaError: If schema loading fails
        """
        if schema_file is None and self._schema is not None:
            return self._schema

        schema_path = self.file_ops.resolve_path(schema_file or self.paths.schema_path)

        try:
            schema = self.file_ops.load_json_file(schema_path)
        except ConfigurationError as e:
            raise ConfigurationSchemaError(
                f"Could not load configuration schema: {e}",
                str(schema_path),
            ) from e

        if schema_file is None:
            self._schema = schema
        return schema

    def validate_config(
        self,
        config: Dict[str, Any],
        schema: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None
    ) -> bool:
        """
        Validate configuration against JSON schema.

        Args:
            config: Configuration dictionary to validate
            schema: JSON schema (loads the packaged one if not provided)
            config_file: Configuration file name for error reporting

        Returns:
            True if validation passes

        Raises:
            ConfigurationValidationError: If validation fails
            ConfigurationSchemaError: If the schema itself is invalid
        """
        if schema is None:
            schema = self.load_schema()

        try:
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ConfigurationSchemaError(
                f"Invalid JSON schema: {e.message}",
            ) from e

        errors = sorted(validator_cls(schema).iter_errors(config), key=lambda err: list(err.absolute_path))
        if not errors:
            logger.debug("Configuration passed schema validation")
            return True

        failure = ConfigurationValidationError(
            f"Configuration validation failed with {len(errors)} error(s)",
            config_file,
            [(tuple(error.absolute_path), error.message) for error in errors],
        )
        logger.debug(f"Schema validation failed at {failure.invalid_fields}")
        raise failure
