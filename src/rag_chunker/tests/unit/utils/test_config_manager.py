"""
Unit tests for ConfigManager and its helpers.

Tests cover default loading, user file merging, environment overrides, schema
validation and conversion into ChunkConfig.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from rag_chunker.core.document_processor.chunking import ChunkStrategy
from rag_chunker.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
    InvalidChunkConfigError,
)
from rag_chunker.utils.config import (
    ConfigManager,
    ConfigPaths,
    EnvironmentHandler,
    deep_merge_dicts,
)


def write_config(directory: Path, data, name="ragchunker.config.json") -> Path:
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def make_manager(project_root, environ=None, **kwargs) -> ConfigManager:
    return ConfigManager(project_root=project_root, load_env=False, environ=environ or {}, **kwargs)


class TestConfigPaths:
    """Test ConfigPaths dataclass."""

    def test_default_paths(self):
        """Test packaged defaults and schema exist."""
        paths = ConfigPaths()
        assert paths.DEFAULT_CONFIG_FILE == "ragchunker.config.json"
        assert paths.ENV_FILE == ".env"
        assert paths.default_config_path.is_file()
        assert paths.schema_path.is_file()


class TestDeepMergeDicts:
    """Test deep_merge_dicts."""

    def test_nested_merge(self):
        """Test nested keys are merged and overrides win."""
        base = {"chunking": {"chunk_size": 400, "overlap": 50}, "version": "1"}
        override = {"chunking": {"chunk_size": 800}}
        assert deep_merge_dicts(base, override) == {
            "chunking": {"chunk_size": 800, "overlap": 50},
            "version": "1",
        }

    def test_inputs_not_modified(self):
        """Test neither input is mutated."""
        base = {"a": {"b": 1}}
        deep_merge_dicts(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestConfigManagerLoading:
    """Test configuration loading from files."""

    def test_defaults_without_user_file(self, temp_directory):
        """Test packaged defaults load when no user file exists."""
        manager = make_manager(temp_directory)
        assert manager.get("chunking.chunk_size") == 400
        assert manager.get("chunking.overlap") == 50
        assert manager.get("chunking.strip_non_ascii") is True
        assert manager.get("logging.level") == "INFO"
        assert manager.is_loaded is True
        assert manager.config_file_loaded is False

    def test_user_file_merged_over_defaults(self, temp_directory):
        """Test user values override defaults key by key."""
        write_config(temp_directory, {"chunking": {"chunk_size": 800, "strategy": "hybrid"}})
        manager = make_manager(temp_directory)
        assert manager.get("chunking.chunk_size") == 800
        assert manager.get("chunking.strategy") == "hybrid"
        assert manager.get("chunking.overlap") == 50
        assert manager.config_file_loaded is True

    def test_explicit_missing_file_raises(self, temp_directory):
        """Test a requested file must exist."""
        manager = make_manager(temp_directory, config_file="missing.json")
        with pytest.raises(ConfigurationFileNotFoundError) as exc_info:
            manager.load_config()
        assert str(temp_directory.resolve()) in exc_info.value.searched_paths

    def test_invalid_json_raises(self, temp_directory):
        """Test malformed JSON is reported as a configuration error."""
        (temp_directory / "ragchunker.config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            make_manager(temp_directory).load_config()

    def test_non_object_json_raises(self, temp_directory):
        """Test the file must hold a JSON object."""
        write_config(temp_directory, [1, 2, 3])
        with pytest.raises(ConfigurationError, match="must contain a JSON object"):
            make_manager(temp_directory).load_config()

    def test_schema_violation_raises(self, temp_directory):
        """Test out-of-range values fail validation with the field named."""
        write_config(temp_directory, {"chunking": {"chunk_size": 10}})
        with pytest.raises(ConfigurationValidationError) as exc_info:
            make_manager(temp_directory).load_config()
        assert exc_info.value.invalid_fields == ["chunking.chunk_size"]
        assert exc_info.value.error_paths == [("chunking", "chunk_size")]
        assert "chunking.chunk_size" in str(exc_info.value)

    def test_unknown_key_rejected(self, temp_directory):
        """Test unexpected keys in the chunking section fail validation."""
        write_config(temp_directory, {"chunking": {"chunk_sise": 300}})
        with pytest.raises(ConfigurationValidationError):
            make_manager(temp_directory).load_config()

    def test_validation_can_be_skipped(self, temp_directory):
        """Test validate=False loads values the schema would reject."""
        write_config(temp_directory, {"chunking": {"chunk_size": 10}})
        config = make_manager(temp_directory).load_config(validate=False)
        assert config["chunking"]["chunk_size"] == 10

    def test_reload_picks_up_changes(self, temp_directory):
        """Test reload_config rereads the file."""
        path = write_config(temp_directory, {"chunking": {"chunk_size": 800}})
        manager = make_manager(temp_directory)
        assert manager.get("chunking.chunk_size") == 800

        path.write_text(json.dumps({"chunking": {"chunk_size": 900}}), encoding="utf-8")
        assert manager.get("chunking.chunk_size") == 800
        manager.reload_config()
        assert manager.get("chunking.chunk_size") == 900

    def test_reset_forces_reload(self, temp_directory):
        """Test reset clears loaded state."""
        manager = make_manager(temp_directory)
        manager.load_config()
        manager.reset()
        assert manager.is_loaded is False
        assert manager.get("chunking.chunk_size") == 400


class TestConfigManagerAccess:
    """Test value access helpers."""

    def test_get_default(self, temp_directory):
        """Test missing keys return the default."""
        manager = make_manager(temp_directory)
        assert manager.get("chunking.missing", "fallback") == "fallback"
        assert manager.get("chunking.chunk_size.deeper") is None
        assert manager.get("nope") is None

    def test_get_returns_copy(self, temp_directory):
        """Test callers cannot mutate stored configuration."""
        manager = make_manager(temp_directory)
        section = manager.get("chunking")
        section["chunk_size"] = 1
        assert manager.get("chunking.chunk_size") == 400

    def test_chunk_config_from_settings(self, temp_directory):
        """Test the chunking section becomes a ChunkConfig."""
        config = make_manager(temp_directory).chunk_config()
        assert config.strategy == ChunkStrategy.TOKEN_BASED
        assert config.chunk_size == 400
        assert config.strip_non_ascii is True
        assert config.model == "text-embedding-3-small"

    def test_chunk_config_overrides(self, temp_directory):
        """Test keyword overrides win and None overrides are ignored."""
        config = make_manager(temp_directory).chunk_config(strategy="markdown", chunk_size=None, overlap=0)
        assert config.strategy == ChunkStrategy.MARKDOWN
        assert config.chunk_size == 400
        assert config.overlap == 0

    def test_chunk_config_invalid_override(self, temp_directory):
        """Test invalid overrides raise InvalidChunkConfigError."""
        with pytest.raises(InvalidChunkConfigError):
            make_manager(temp_directory).chunk_config(chunk_size=-1)

    def test_logging_settings(self, temp_directory):
        """Test the logging section is exposed with defaults."""
        assert make_manager(temp_directory).logging_settings() == {
            "level": "INFO",
            "log_format": "standard",
            "log_file": None,
        }

    def test_config_summary(self, temp_directory):
        """Test summary reflects load state and overrides."""
        manager = make_manager(temp_directory, environ={"RAG_CHUNKER_OVERLAP": "0"})
        manager.load_config()
        summary = manager.get_config_summary()
        assert summary["loaded"] is True
        assert summary["config_file_loaded"] is False
        assert "chunking.chunk_size" in summary["config_keys"]
        assert summary["environment_overrides"] == ["RAG_CHUNKER_OVERLAP"]


class TestEnvironmentOverrides:
    """Test RAG_CHUNKER_* environment variable handling."""

    def test_overrides_applied(self, temp_directory):
        """Test environment values override file and defaults."""
        write_config(temp_directory, {"chunking": {"chunk_size": 800}})
        manager = make_manager(temp_directory, environ={
            "RAG_CHUNKER_CHUNK_SIZE": "600",
            "RAG_CHUNKER_STRATEGY": "hybrid",
            "RAG_CHUNKER_STRIP_NON_ASCII": "off",
            "RAG_CHUNKER_LOG_LEVEL": "debug",
        })
        assert manager.get("chunking.chunk_size") == 600
        assert manager.get("chunking.strategy") == "hybrid"
        assert manager.get("chunking.strip_non_ascii") is False
        assert manager.get("logging.level") == "DEBUG"

    def test_empty_value_ignored(self, temp_directory):
        """Test empty variables leave configuration untouched."""
        manager = make_manager(temp_directory, environ={"RAG_CHUNKER_CHUNK_SIZE": "  "})
        assert manager.get("chunking.chunk_size") == 400

    def test_bad_integer_raises(self, temp_directory):
        """Test unconvertible values raise EnvironmentVariableError."""
        manager = make_manager(temp_directory, environ={"RAG_CHUNKER_CHUNK_SIZE": "big"})
        with pytest.raises(EnvironmentVariableError) as exc_info:
            manager.load_config()
        assert exc_info.value.variable_name == "RAG_CHUNKER_CHUNK_SIZE"
        assert exc_info.value.expected_type == "integer"
        assert "RAG_CHUNKER_CHUNK_SIZE expects a whole number" in str(exc_info.value)

    def test_override_still_validated(self, temp_directory):
        """Test environment values go through schema validation."""
        manager = make_manager(temp_directory, environ={"RAG_CHUNKER_OVERLAP": "9999"})
        with pytest.raises(ConfigurationValidationError):
            manager.load_config()

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("YES", True), ("1", True), ("enabled", True),
        ("false", False), ("Off", False), ("0", False),
    ])
    def test_boolean_conversion(self, value, expected):
        """Test accepted boolean spellings."""
        assert EnvironmentHandler().convert_env_value(value, "boolean") is expected

    def test_bad_boolean_raises(self):
        """Test unknown boolean spellings are rejected."""
        with pytest.raises(EnvironmentVariableError):
            EnvironmentHandler().convert_env_value("maybe", "boolean", "RAG_CHUNKER_STRIP_NON_ASCII")

    def test_env_mapping(self):
        """Test every variable maps to a dotted key."""
        mapping = EnvironmentHandler().get_env_mapping()
        assert mapping["RAG_CHUNKER_CHUNK_SIZE"] == "chunking.chunk_size"
        assert mapping["RAG_CHUNKER_LOG_FORMAT"] == "logging.format"

    def test_process_environment_used_by_default(self, monkeypatch):
        """Test os.environ is read when no mapping is given."""
        monkeypatch.setenv("RAG_CHUNKER_MODEL", "custom-model")
        config = EnvironmentHandler().apply_environment_overrides({"chunking": {}})
        assert config == {"chunking": {"model": "custom-model"}}


class TestDotenvLoading:
    """Test .env file loading."""

    @patch('rag_chunker.utils.config.file_operations.load_dotenv')
    def test_env_file_loaded_when_present(self, mock_load_dotenv, temp_directory):
        """Test load_dotenv is called without overriding existing variables."""
        env_path = temp_directory / ".env"
        env_path.write_text("RAG_CHUNKER_CHUNK_SIZE=600\n", encoding="utf-8")

        ConfigManager(project_root=temp_directory, load_env=True, environ={})

        mock_load_dotenv.assert_called_once_with(env_path.resolve(), override=False)

    @patch('rag_chunker.utils.config.file_operations.load_dotenv')
    def test_env_file_skipped_when_missing(self, mock_load_dotenv, temp_directory):
        """Test nothing is loaded without a .env file."""
        ConfigManager(project_root=temp_directory, load_env=True, environ={})
        mock_load_dotenv.assert_not_called()
