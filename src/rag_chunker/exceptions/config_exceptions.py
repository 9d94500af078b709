"""
Exceptions raised while loading rag-chunker settings.

Settings come from the packaged defaults, an optional ragchunker.config.json,
RAG_CHUNKER_* environment variables and a .env file. Each exception points the
user at the layer that went wrong.
"""

from typing import List, Optional, Sequence, Tuple, Union

SchemaPath = Tuple[Union[str, int], ...]

# Human-readable forms accepted for each environment value type
EXPECTED_VALUES = {
    'integer': "a whole number, e.g. 400",
    'boolean': "true/false, yes/no, on/off, enabled/disabled or 1/0",
}


class ConfigurationError(Exception):
    """Base exception for settings that cannot be loaded."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_file: Settings file involved, if any
            suggestions: Steps the user can take
        """
        super().__init__(message)
        self.config_file = config_file
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        msg = super().__str__()

        if self.config_file:
            msg = f"{msg}\nConfig file: {self.config_file}"

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"

        return msg


class ConfigurationFileNotFoundError(ConfigurationError):
    """An explicitly requested settings file does not exist."""

    def __init__(
        self,
        message: str,
        config_file: str,
        searched_paths: Optional[List[str]] = None
    ) -> None:
        suggestions = [
            "Pass an existing file with --config/-c",
            "Omit --config to use ragchunker.config.json from the working directory, or the packaged defaults",
        ]
        if searched_paths:
            suggestions.append(f"Relative paths are resolved from: {', '.join(searched_paths)}")

        super().__init__(message, config_file, suggestions)
        self.searched_paths = searched_paths or []


class ConfigurationValidationError(ConfigurationError):
    """
    Merged settings do not satisfy the configuration schema.

    Carries the jsonschema error paths so callers can point at the exact
    offending keys. A path is the tuple of keys and indexes from the document
    root, empty when the root object itself is wrong.
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        errors: Sequence[Tuple[SchemaPath, str]] = ()
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error description
            config_file: Settings file that was merged, if any
            errors: (schema path, jsonschema message) pairs in path order
        """
        self.error_paths: List[SchemaPath] = [tuple(path) for path, _ in errors]
        self.invalid_fields = [
            ".".join(str(part) for part in path) for path in self.error_paths if path
        ]
        self.validation_errors = [
            f"{'.'.join(str(part) for part in path)}: {detail}" if path else detail
            for path, detail in errors
        ]

        suggestions = ["Run 'rag-chunker info' to see the settings currently in effect"]
        if self.invalid_fields:
            suggestions.append(f"Fix these settings: {', '.join(self.invalid_fields)}")
        if any(path[:1] == ('chunking',) for path in self.error_paths):
            suggestions.append("Check RAG_CHUNKER_* variables too; they override the config file")

        super().__init__(message, config_file, suggestions)

    def __str__(self) -> str:
        msg = super().__str__()

        if self.validation_errors:
            msg += "\n\nValidation errors:"
            for i, error in enumerate(self.validation_errors, 1):
                msg += f"\n  {i}. {error}"

        return msg


class EnvironmentVariableError(ConfigurationError):
    """A RAG_CHUNKER_* variable holds a value of the wrong type."""

    def __init__(
        self,
        message: str,
        variable_name: Optional[str] = None,
        expected_type: Optional[str] = None
    ) -> None:
        """
        Initialize environment variable error.

        Args:
            message: Error description
            variable_name: The offending variable, e.g. RAG_CHUNKER_CHUNK_SIZE
            expected_type: 'integer' or 'boolean'
        """
        suggestions = []
        if variable_name and expected_type in EXPECTED_VALUES:
            suggestions.append(f"{variable_name} expects {EXPECTED_VALUES[expected_type]}")
        if variable_name:
            suggestions.append(f"Unset {variable_name} to use the config file value")
        suggestions.append("Values in .env do not replace variables already set in the shell")

        super().__init__(message, None, suggestions)
        self.variable_name = variable_name
        self.expected_type = expected_type


class ConfigurationSchemaError(ConfigurationError):
    """The packaged configuration schema is missing or unusable."""

    def __init__(self, message: str, schema_file: Optional[str] = None) -> None:
        suggestions = [
            "Reinstall rag-chunker; the schema ships in rag_chunker/config/schema",
        ]
        super().__init__(message, schema_file, suggestions)
