"""Tests for configuration exception messages."""

import pytest

from rag_chunker.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)


class TestConfigurationError:
    """Test the base error format."""

    def test_str_lists_file_and_suggestions(self):
        """Test the file and numbered suggestions follow the message."""
        error = ConfigurationError("Bad settings", "ragchunker.config.json", ["First", "Second"])
        assert str(error) == (
            "Bad settings\nConfig file: ragchunker.config.json"
            "\n\nSuggestions:\n  1. First\n  2. Second"
        )

    def test_plain_message(self):
        """Test a bare error is just its message."""
        assert str(ConfigurationError("Bad settings")) == "Bad settings"


class TestConfigurationValidationError:
    """Test schema paths carried by validation errors."""

    def test_paths_and_fields(self):
        """Test jsonschema paths become dotted fields and detail lines."""
        error = ConfigurationValidationError(
            "Configuration validation failed with 2 error(s)",
            "ragchunker.config.json",
            [
                (("chunking", "chunk_size"), "10 is less than the minimum of 50"),
                ((), "'chunking' is a required property"),
            ],
        )
        assert error.error_paths == [("chunking", "chunk_size"), ()]
        assert error.invalid_fields == ["chunking.chunk_size"]
        assert error.validation_errors == [
            "chunking.chunk_size: 10 is less than the minimum of 50",
            "'chunking' is a required property",
        ]
        text = str(error)
        assert "Fix these settings: chunking.chunk_size" in text
        assert "RAG_CHUNKER_*" in text
        assert "Validation errors:\n  1. chunking.chunk_size: 10" in text

    def test_logging_errors_skip_environment_hint(self):
        """Test the override hint only appears for chunking settings."""
        error = ConfigurationValidationError("failed", errors=[(("logging", "level"), "'LOUD' is not one of")])
        assert "RAG_CHUNKER_*" not in str(error)
        assert error.invalid_fields == ["logging.level"]

    def test_no_errors(self):
        """Test an empty error list is allowed."""
        error = ConfigurationValidationError("failed")
        assert error.error_paths == []
        assert error.validation_errors == []


class TestEnvironmentVariableError:
    """Test suggestions for bad environment values."""

    @pytest.mark.parametrize("expected_type,hint", [
        ("integer", "RAG_CHUNKER_CHUNK_SIZE expects a whole number"),
        ("boolean", "RAG_CHUNKER_CHUNK_SIZE expects true/false"),
    ])
    def test_expected_type_named(self, expected_type, hint):
        """Test the variable and its accepted values are named."""
        error = EnvironmentVariableError("Cannot convert", "RAG_CHUNKER_CHUNK_SIZE", expected_type)
        assert hint in str(error)
        assert "Unset RAG_CHUNKER_CHUNK_SIZE" in str(error)
        assert error.expected_type == expected_type

    def test_without_variable(self):
        """Test only the .env hint remains without a variable name."""
        error = EnvironmentVariableError("Cannot convert")
        assert error.suggestions == ["Values in .env do not replace variables already set in the shell"]


class TestFileAndSchemaErrors:
    """Test file-not-found and schema errors."""

    def test_searched_paths(self):
        """Test the base directory for relative paths is reported."""
        error = ConfigurationFileNotFoundError("missing", "custom.json", ["/work"])
        assert error.searched_paths == ["/work"]
        assert "Relative paths are resolved from: /work" in str(error)
        assert "--config" in str(error)

    def test_schema_error_points_at_package(self):
        """Test schema errors suggest reinstalling."""
        error = ConfigurationSchemaError("Could not load configuration schema", "config_schema.json")
        assert "Reinstall rag-chunker" in str(error)
        assert error.config_file == "config_schema.json"
