"""Configuration classes for xml-mapper.

This module provides configuration objects for serialization, parsing and
comparison, enabling control over output formatting and parser safety.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Dict, List, Optional

_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENTS = ["serialization", "parsing", "comparison", "global_"]


@dataclass
class SerializationConfig:
    """Configuration for converting nodes to XML text."""

    encoding: str = "UTF-8"
    xml_declaration: bool = True
    pretty_print: bool = False

    # String forms used when a boolean field becomes an attribute
    true_value: str = "true"
    false_value: str = "false"

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        if self.true_value == self.false_value:
            raise ValueError("true_value and false_value must differ")
        if self.is_unicode and self.xml_declaration:
            raise ValueError("encoding 'unicode' cannot be combined with xml_declaration")

    @property
    def is_unicode(self) -> bool:
        """Check whether output is produced as text rather than encoded bytes."""
        return self.encoding.lower() == "unicode"


@dataclass
class ParsingConfig:
    """Configuration for loading XML text into element trees."""

    remove_blank_text: bool = True
    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False
    max_input_size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parsing configuration."""
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ValueError("max_input_size_bytes must be > 0 or None")


@dataclass
class ComparisonConfig:
    """Configuration for structural comparison operations."""

    # Intersections with no common attributes and children collapse to None
    skip_empty: bool = True


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    # Level applied by the command-line tool unless --verbose or --quiet is given
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {_LOGGING_LEVELS}")


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
class MapperConfig:
    """Complete configuration for xml-mapper components.

    Immutable aggregate of the component configurations; derive variants
    with :meth:`override` instead of mutating.
    """

    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    comparison: ComparisonConfig = field(default_factory=ComparisonConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.serialization.__post_init__()
            self.parsing.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "MapperConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; component fields use the
                ``component__field`` notation

        Returns:
            New MapperConfig instance with overrides applied

        Example:
            >>> config = MapperConfig().override(serialization__pretty_print=True)
            >>> config.serialization.pretty_print
            True
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"{name}__{field_name}" for name in _COMPONENTS],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        for component, overrides in nested_overrides.items():
            try:
                new_fields[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if is_dataclass(obj):
                return {f.name: _dataclass_to_dict(getattr(obj, f.name)) for f in fields(obj)}
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MapperConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface.

        Args:
            data: Dictionary containing configuration data

        Returns:
            MapperConfig instance created from dictionary
        """
        component_types = {
            "serialization": SerializationConfig,
            "parsing": ParsingConfig,
            "comparison": ComparisonConfig,
            "global_": GlobalConfig,
        }
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration data must be a mapping, got {type(data).__name__}"
            )
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                try:
                    values[key] = component_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key == "name":
                values[key] = value
            else:
                raise ConfigValidationError(f"Unknown configuration key: {key}", field_name=key)
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "MapperConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def compact(cls) -> "MapperConfig":
        """Create preset producing single-line output without declaration."""
        return cls(
            serialization=SerializationConfig(xml_declaration=False, pretty_print=False),
            name="compact",
        )

    @classmethod
    def readable(cls) -> "MapperConfig":
        """Create preset producing indented output for humans."""
        return cls(
            serialization=SerializationConfig(xml_declaration=True, pretty_print=True),
            name="readable",
        )
