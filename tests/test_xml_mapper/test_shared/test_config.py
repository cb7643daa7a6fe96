"""Tests for the configuration system."""

import json

import pytest

from xml_mapper.shared.config import (
    ComparisonConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    MapperConfig,
    ParsingConfig,
    SerializationConfig,
)


class TestComponentConfigs:
    """Test suite for the component configurations."""

    def test_serialization_defaults(self) -> None:
        """Test default serialization values."""
        config = SerializationConfig()

        assert config.encoding == "UTF-8"
        assert config.xml_declaration is True
        assert config.pretty_print is False
        assert config.true_value == "true"
        assert config.false_value == "false"

    def test_serialization_validation(self) -> None:
        """Test serialization validation failures."""
        with pytest.raises(ValueError, match="encoding cannot be empty"):
            SerializationConfig(encoding="")

        with pytest.raises(ValueError, match="must differ"):
            SerializationConfig(true_value="1", false_value="1")

    def test_unicode_encoding_requires_no_declaration(self) -> None:
        """Test that text output cannot carry an XML declaration."""
        with pytest.raises(ValueError, match="cannot be combined with xml_declaration"):
            SerializationConfig(encoding="unicode")

        config = SerializationConfig(encoding="unicode", xml_declaration=False)
        assert config.is_unicode
        assert not SerializationConfig().is_unicode

    def test_unicode_encoding_in_aggregate(self) -> None:
        """Test the aggregate reports the same conflict as a validation error."""
        with pytest.raises(ConfigValidationError):
            MapperConfig().override(serialization__encoding="unicode")

    def test_parsing_defaults(self) -> None:
        """Test that parsing is safe by default."""
        config = ParsingConfig()

        assert config.remove_blank_text is True
        assert config.resolve_entities is False
        assert config.no_network is True
        assert config.huge_tree is False
        assert config.max_input_size_bytes is None

    def test_parsing_validation(self) -> None:
        """Test input size validation."""
        with pytest.raises(ValueError, match="max_input_size_bytes must be > 0"):
            ParsingConfig(max_input_size_bytes=0)

        ParsingConfig(max_input_size_bytes=1024)

    def test_comparison_defaults(self) -> None:
        """Test that empty intersections collapse by default."""
        assert ComparisonConfig().skip_empty is True

    def test_global_validation(self) -> None:
        """Test logging level validation."""
        assert GlobalConfig().logging_level == "WARNING"

        with pytest.raises(ValueError, match="logging_level must be one of"):
            GlobalConfig(logging_level="LOUD")


class TestMapperConfig:
    """Test suite for the aggregate configuration."""

    def test_default_configuration(self) -> None:
        """Test that all components are present."""
        config = MapperConfig()

        assert isinstance(config.serialization, SerializationConfig)
        assert isinstance(config.parsing, ParsingConfig)
        assert isinstance(config.comparison, ComparisonConfig)
        assert isinstance(config.global_, GlobalConfig)
        assert config.name is None

    def test_configuration_is_immutable(self) -> None:
        """Test that fields cannot be reassigned."""
        config = MapperConfig()
        with pytest.raises(AttributeError):
            config.name = "changed"

    def test_override_component_field(self) -> None:
        """Test component__field overrides."""
        config = MapperConfig()
        updated = config.override(serialization__pretty_print=True, name="custom")

        assert updated.serialization.pretty_print is True
        assert updated.name == "custom"
        assert config.serialization.pretty_print is False

    def test_override_unknown_component(self) -> None:
        """Test unknown components are reported with suggestions."""
        with pytest.raises(ConfigValidationError) as excinfo:
            MapperConfig().override(output__indent=True)

        assert excinfo.value.field_name == "output__indent"
        assert "serialization__indent" in excinfo.value.suggestions

    def test_override_invalid_value(self) -> None:
        """Test that invalid override values are wrapped."""
        with pytest.raises(ConfigValidationError):
            MapperConfig().override(parsing__max_input_size_bytes=-5)

    def test_override_unknown_field(self) -> None:
        """Test that unknown component fields are rejected."""
        with pytest.raises(ConfigValidationError):
            MapperConfig().override(serialization__indent=4)

    def test_validation_error_is_config_error(self) -> None:
        """Test the exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)

    def test_dict_round_trip(self) -> None:
        """Test to_dict and from_dict."""
        config = MapperConfig.readable()
        data = config.to_dict()

        assert data["serialization"]["pretty_print"] is True
        assert data["global_"]["logging_level"] == "WARNING"
        assert MapperConfig.from_dict(data) == config

    def test_json_round_trip(self) -> None:
        """Test to_json and from_json."""
        config = MapperConfig().override(comparison__skip_empty=False)
        text = config.to_json()

        assert json.loads(text)["comparison"]["skip_empty"] is False
        assert MapperConfig.from_json(text) == config

    def test_from_dict_partial(self) -> None:
        """Test that missing components use defaults."""
        config = MapperConfig.from_dict({"serialization": {"xml_declaration": False}})

        assert config.serialization.xml_declaration is False
        assert config.serialization.encoding == "UTF-8"
        assert config.parsing == ParsingConfig()

    def test_from_dict_unknown_key(self) -> None:
        """Test that typos in configuration data surface."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration key"):
            MapperConfig.from_dict({"serialisation": {}})

    def test_from_dict_requires_mapping(self) -> None:
        """Test that non-mapping data is a validation error."""
        with pytest.raises(ConfigValidationError, match="must be a mapping, got list"):
            MapperConfig.from_dict([])

    def test_from_dict_invalid_component(self) -> None:
        """Test that invalid component values are wrapped."""
        with pytest.raises(ConfigValidationError) as excinfo:
            MapperConfig.from_dict({"global_": {"logging_level": "LOUD"}})
        assert excinfo.value.field_name == "global_"

    def test_presets(self) -> None:
        """Test the preset factories."""
        compact = MapperConfig.compact()
        readable = MapperConfig.readable()

        assert compact.name == "compact"
        assert compact.serialization.xml_declaration is False
        assert compact.serialization.pretty_print is False

        assert readable.name == "readable"
        assert readable.serialization.xml_declaration is True
        assert readable.serialization.pretty_print is True
