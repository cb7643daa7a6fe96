"""xml-mapper.

Maps plain Python objects to XML element trees and back, and compares two
trees structurally (intersection, difference, equality).

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), to_string(), compare()
- Level 2: Node classes - subclass ConvertibleNode and use to_xml(), from_xml(),
  xml_intersect(), xml_diff(), xml_equal()
- Level 3: Configuration - MapperConfig for output formatting and parser safety
"""

__version__ = "0.1.0"
__author__ = "xml-mapper Team"

from .api import compare, parse, parse_file, parse_string, save, to_string
from .convert import ConvertibleNode, DynamicNode
from .shared import (
    ComparisonResult,
    DocumentError,
    InvalidAliasEntryError,
    InvalidChildTypeError,
    MapperConfig,
    UnknownAttributeError,
    XMLMapperError,
)
from .tree import XMLDocument

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "compare",
    "parse",
    "parse_file",
    "parse_string",
    "save",
    "to_string",

    # Level 2: Node classes
    "ConvertibleNode",
    "DynamicNode",
    "XMLDocument",

    # Level 3: Configuration and results
    "ComparisonResult",
    "MapperConfig",

    # Errors
    "DocumentError",
    "InvalidAliasEntryError",
    "InvalidChildTypeError",
    "UnknownAttributeError",
    "XMLMapperError",
]
