"""Conversion of lxml elements into node trees.

Tag names are resolved to node types through an alias table. Every entry of
the resolved table is a prototype instance; each parsed element receives its
own clone of the prototype so that sibling elements never share a node.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple, Type

from lxml import etree

from xml_mapper.convert.attributes import STRUCTURAL_FIELDS
from xml_mapper.convert.node import Aliases, AliasEntry, ConvertibleNode, DynamicNode
from xml_mapper.shared import (
    DocumentError,
    InvalidAliasEntryError,
    UnknownAttributeError,
    get_logger,
)
from xml_mapper.tree import RawNode, XMLDocument, is_raw_node, iter_element_children

logger = get_logger(__name__, component="deserializer")


def resolve_aliases(
    node_class: Type[ConvertibleNode],
    aliases: Optional[Aliases] = None
) -> Dict[str, ConvertibleNode]:
    """Build the tag name to prototype table used while parsing.

    Entries may be keyed explicitly (a mapping) or unkeyed (a sequence); an
    unkeyed entry is keyed by the element name of its instance. Classes are
    instantiated. node_class is added under its class name unless one of the
    entries already is node_class itself, and then takes precedence over
    any other entry keyed by that name.

    Raises:
        InvalidAliasEntryError: An entry is neither a ConvertibleNode
            instance nor a ConvertibleNode subclass
    """
    entries: List[Tuple[Optional[str], Any]]
    if aliases is None:
        entries = []
    elif isinstance(aliases, Mapping):
        entries = list(aliases.items())
    elif isinstance(aliases, (str, bytes)):
        raise InvalidAliasEntryError(None, aliases)
    else:
        entries = [(None, entry) for entry in aliases]

    if not any(entry is node_class for _, entry in entries):
        entries.append((node_class.__name__, node_class))

    table: Dict[str, ConvertibleNode] = {}
    for key, entry in entries:
        prototype = _instantiate(key, entry)
        table[key if key is not None else prototype.get_xml_element_name()] = prototype

    return table


def _instantiate(key: Optional[str], entry: AliasEntry) -> ConvertibleNode:
    if isinstance(entry, ConvertibleNode):
        return entry
    if isinstance(entry, type) and issubclass(entry, ConvertibleNode):
        return entry()
    logger.error(
        "Invalid alias entry",
        extra={"alias": key, "entry_type": type(entry).__name__}
    )
    raise InvalidAliasEntryError(key, entry)


def _root_element(source: Any) -> RawNode:
    if isinstance(source, XMLDocument):
        root = source.first_child
        if root is None:
            raise DocumentError("Cannot convert an empty document")
        return root
    if isinstance(source, etree._ElementTree):
        return source.getroot()
    if is_raw_node(source):
        return source
    raise TypeError(
        f"Expected an XMLDocument, element tree or element, got {type(source).__name__}"
    )


def deserialize(
    node_class: Type[ConvertibleNode],
    source: Any,
    aliases: Optional[Aliases] = None
) -> ConvertibleNode:
    """Convert an element (or the root of a document) into a node tree.

    Args:
        node_class: Class on whose behalf parsing happens; registered as an alias
        source: XMLDocument, lxml element tree or lxml element
        aliases: Tag name to node class or instance

    Returns:
        Fully populated node tree

    Raises:
        InvalidAliasEntryError: The alias table holds an unusable entry
        UnknownAttributeError: An element carries an attribute its typed
            node does not declare, or one named like a structural field
    """
    element = _root_element(source)
    table = resolve_aliases(node_class, aliases)

    if logger.is_debug_enabled():
        logger.debug(
            "Deserializing element",
            extra={"root": element.tag, "aliases": sorted(table)}
        )

    return _build_node(element, table)


def _build_node(element: RawNode, table: Dict[str, ConvertibleNode]) -> ConvertibleNode:
    prototype = table.get(element.tag)
    node = prototype.clone() if prototype is not None else DynamicNode()

    # Structural names are never attributes, on any node type
    properties = None if isinstance(node, DynamicNode) else node.get_xml_properties()
    for name in element.attrib:
        if name in STRUCTURAL_FIELDS or (properties is not None and name not in properties):
            logger.error(
                "Unknown attribute for node",
                extra={"node_type": type(node).__name__, "attribute": name}
            )
            raise UnknownAttributeError(type(node).__name__, name)

    for name, value in element.attrib.items():
        node.set_xml_attribute(name, value)

    node.xml_children = [_build_node(child, table) for child in iter_element_children(element)]
    node.xml_element_name = element.tag

    return node
