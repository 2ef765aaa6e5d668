"""Configuration classes for cursor navigation.

This module provides the immutable configuration value that is handed to the
event source factory and the cursor at construction time. There is no
process-wide parser factory: every cursor is built from an explicit config.
"""

import json
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

DEFAULT_BUFFER_SIZE = 8192
LARGE_DOCUMENT_BUFFER_SIZE = 64 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class CursorConfig:
    """Configuration shared by the event source and the path cursor.

    Attributes:
        buffer_size: Number of bytes (or characters) read per feed into lxml
        case_sensitive: Compare element names exactly instead of case-folded
        wildcard: Path entry that accepts any single element
        huge_tree: Lift lxml's depth and text-size security limits
        encoding: Override the document's declared encoding
        correlation_id: Correlation ID attached to every log record
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    case_sensitive: bool = False
    wildcard: str = "*"
    huge_tree: bool = False
    encoding: Optional[str] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate cursor configuration."""
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be > 0")
        if not self.wildcard:
            raise ValueError("wildcard must be a non-empty string")
        if self.encoding is not None and not self.encoding.strip():
            raise ValueError("encoding must be a non-empty string or None")

    @classmethod
    def strict(cls) -> "CursorConfig":
        """Create configuration that matches element names exactly."""
        return cls(case_sensitive=True)

    @classmethod
    def large_documents(cls) -> "CursorConfig":
        """Create configuration for very large or very deep documents."""
        return cls(huge_tree=True, buffer_size=LARGE_DOCUMENT_BUFFER_SIZE)

    def override(self, **kwargs: Any) -> "CursorConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = CursorConfig().override(case_sensitive=True)
            >>> config.case_sensitive
            True
        """
        return replace(self, **kwargs)

    def names_match(self, candidate: Optional[str], name: str) -> bool:
        """Compare an element name against a requested name."""
        if candidate is None:
            return False
        if self.case_sensitive:
            return candidate == name
        return candidate.casefold() == name.casefold()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CursorConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigValidationError: If ``data`` is not a mapping, a key is
                unknown or a value is invalid
        """
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration must be an object, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=sorted(known),
                )
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "CursorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)
