"""Tests for cursor configuration."""

import json
from dataclasses import FrozenInstanceError

import pytest

from xml_path_cursor.shared.config import (
    ConfigError,
    ConfigValidationError,
    CursorConfig,
    DEFAULT_BUFFER_SIZE,
    LARGE_DOCUMENT_BUFFER_SIZE,
)


class TestCursorConfig:
    """Test suite for CursorConfig."""

    def test_default_configuration(self):
        """Test default configuration values."""
        config = CursorConfig()

        assert config.buffer_size == DEFAULT_BUFFER_SIZE
        assert config.case_sensitive is False
        assert config.wildcard == "*"
        assert config.huge_tree is False
        assert config.encoding is None
        assert config.correlation_id is None

    def test_validation_failures(self):
        """Test configuration validation failures."""
        with pytest.raises(ValueError, match="buffer_size must be > 0"):
            CursorConfig(buffer_size=0)

        with pytest.raises(ValueError, match="buffer_size must be > 0"):
            CursorConfig(buffer_size=-5)

        with pytest.raises(ValueError, match="wildcard must be a non-empty string"):
            CursorConfig(wildcard="")

        with pytest.raises(ValueError, match="encoding must be a non-empty string"):
            CursorConfig(encoding="  ")

    def test_config_is_immutable(self):
        """Test that configuration values cannot be reassigned."""
        config = CursorConfig()
        with pytest.raises(FrozenInstanceError):
            config.buffer_size = 1

    def test_presets(self):
        """Test preset factory methods."""
        assert CursorConfig.strict().case_sensitive is True

        large = CursorConfig.large_documents()
        assert large.huge_tree is True
        assert large.buffer_size == LARGE_DOCUMENT_BUFFER_SIZE

    def test_override(self):
        """Test creating a modified copy."""
        config = CursorConfig()
        changed = config.override(case_sensitive=True, buffer_size=16)

        assert changed.case_sensitive is True
        assert changed.buffer_size == 16
        assert config.case_sensitive is False

        with pytest.raises(ValueError):
            config.override(buffer_size=0)


class TestNameMatching:
    """Test element name comparison."""

    def test_case_insensitive_by_default(self):
        config = CursorConfig()
        assert config.names_match("Book", "book")
        assert config.names_match("STRASSE", "strasse")
        assert not config.names_match("book", "books")

    def test_case_sensitive(self):
        config = CursorConfig.strict()
        assert config.names_match("book", "book")
        assert not config.names_match("Book", "book")

    def test_none_never_matches(self):
        assert not CursorConfig().names_match(None, "book")


class TestSerialization:
    """Test dict and JSON round trips."""

    def test_to_dict(self):
        data = CursorConfig(case_sensitive=True).to_dict()
        assert data["case_sensitive"] is True
        assert data["buffer_size"] == DEFAULT_BUFFER_SIZE
        assert set(data) == {
            "buffer_size", "case_sensitive", "wildcard", "huge_tree",
            "encoding", "correlation_id",
        }

    def test_json_round_trip(self):
        config = CursorConfig(buffer_size=512, wildcard="?", correlation_id="run-1")
        restored = CursorConfig.from_json(config.to_json())
        assert restored == config

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigValidationError, match="Unknown configuration field") as info:
            CursorConfig.from_dict({"buffer_sise": 10})
        assert info.value.field_name == "buffer_sise"
        assert "buffer_size" in info.value.suggestions

    def test_invalid_value_rejected(self):
        with pytest.raises(ConfigValidationError, match="buffer_size must be > 0"):
            CursorConfig.from_dict({"buffer_size": 0})

    @pytest.mark.parametrize("data", [5, [("buffer_size", 10)], "buffer_size"])
    def test_non_mapping_rejected(self, data):
        with pytest.raises(ConfigValidationError, match="Configuration must be an object"):
            CursorConfig.from_dict(data)

    def test_invalid_json_rejected(self):
        with pytest.raises(ConfigValidationError):
            CursorConfig.from_json("{not json")

        with pytest.raises(ConfigValidationError, match="must be an object"):
            CursorConfig.from_json(json.dumps([1, 2]))

    def test_validation_error_is_config_error(self):
        assert issubclass(ConfigValidationError, ConfigError)
