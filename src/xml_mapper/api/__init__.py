"""Public API layer for xml-mapper."""

from .converter import compare, parse, parse_file, parse_string, save, to_string

__all__ = [
    "compare",
    "parse",
    "parse_file",
    "parse_string",
    "save",
    "to_string",
]
