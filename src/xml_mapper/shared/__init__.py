"""Shared utilities for xml-mapper.

This module provides configuration objects, the exception hierarchy, result
types and logging helpers used across all components.
"""

from .config import (
    ComparisonConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    MapperConfig,
    ParsingConfig,
    SerializationConfig,
)
from .errors import (
    DocumentError,
    InvalidAliasEntryError,
    InvalidChildTypeError,
    UnknownAttributeError,
    XMLMapperError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    ComparisonOperation,
    ComparisonResult,
)

__all__ = [
    "ComparisonConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "MapperConfig",
    "ParsingConfig",
    "SerializationConfig",
    "DocumentError",
    "InvalidAliasEntryError",
    "InvalidChildTypeError",
    "UnknownAttributeError",
    "XMLMapperError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "ComparisonOperation",
    "ComparisonResult",
]
