"""Exception hierarchy for conversion and comparison failures."""

from typing import Any, Optional


class XMLMapperError(Exception):
    """Base exception for all xml-mapper conversion errors."""


class InvalidChildTypeError(XMLMapperError, TypeError):
    """A declared child is neither a convertible node nor an XML element."""

    def __init__(self, node_type: str, child: Any) -> None:
        self.node_type = node_type
        self.child_type = type(child).__name__
        super().__init__(
            f"{node_type} has a child of type {self.child_type}; each child must be "
            "a ConvertibleNode or an lxml element"
        )


class InvalidAliasEntryError(XMLMapperError, TypeError):
    """An alias table entry is neither a ConvertibleNode instance nor subclass."""

    def __init__(self, alias: Optional[str], entry: Any) -> None:
        self.alias = alias
        self.entry = entry
        described = entry.__name__ if isinstance(entry, type) else type(entry).__name__
        where = f" for alias '{alias}'" if alias is not None else ""
        super().__init__(
            f"Invalid alias entry {described}{where}; aliases must be ConvertibleNode "
            "instances or subclasses"
        )


class UnknownAttributeError(XMLMapperError, ValueError):
    """An XML attribute has no matching field on the resolved node type."""

    def __init__(self, node_type: str, attribute_name: str) -> None:
        self.node_type = node_type
        self.attribute_name = attribute_name
        super().__init__(f"{node_type} must define '{attribute_name}' as an XML property")


class DocumentError(XMLMapperError, ValueError):
    """XML text or file could not be loaded into an element tree."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        super().__init__(message)
