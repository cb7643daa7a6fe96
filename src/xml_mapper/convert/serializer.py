"""Conversion of node trees into lxml elements and XML text."""

from typing import Optional

from xml_mapper.convert.attributes import coerce_attribute_value, is_scalar
from xml_mapper.convert.node import ConvertibleNode
from xml_mapper.shared import (
    DocumentError,
    InvalidChildTypeError,
    MapperConfig,
    get_logger,
)
from xml_mapper.tree import RawNode, XMLDocument, copy_raw_node, is_raw_node

logger = get_logger(__name__, component="serializer")


def serialize(node: ConvertibleNode, document: Optional[XMLDocument] = None) -> RawNode:
    """Convert a node and its children into a detached lxml element.

    Raw children are appended as deep copies without their tail text: lxml
    moves an element when it is appended elsewhere, and the source tree must
    stay untouched.

    Args:
        node: Node to convert
        document: Document providing element creation and serialization
            settings; a default one is used when omitted

    Returns:
        The element for node

    Raises:
        InvalidChildTypeError: A child is neither a node nor an lxml element
    """
    if document is None:
        document = XMLDocument()

    element = document.create_element(node.get_xml_element_name())

    for child in node.xml_children or []:
        if isinstance(child, ConvertibleNode):
            element.append(serialize(child, document))
        elif is_raw_node(child):
            element.append(copy_raw_node(child))
        else:
            error = InvalidChildTypeError(type(node).__name__, child)
            logger.error(
                "Invalid child type",
                extra={"node_type": error.node_type, "child_type": error.child_type}
            )
            raise error

    options = document.config.serialization
    for name in node.get_xml_properties():
        value = node.get_xml_attribute(name)
        if value is None or not is_scalar(value):
            continue
        try:
            element.set(name, coerce_attribute_value(value, options))
        except ValueError as e:
            raise DocumentError(
                f"Cannot write attribute {name!r} of {type(node).__name__}: {e}"
            ) from e

    if logger.is_debug_enabled():
        logger.debug(
            "Serialized node",
            extra={
                "element": element.tag,
                "attributes": len(element.attrib),
                "children": len(element),
            }
        )

    return element


def serialize_to_string(node: ConvertibleNode, config: Optional[MapperConfig] = None) -> str:
    """Convert a node into XML text using a fresh document."""
    document = XMLDocument(config=config)
    document.append_child(serialize(node, document))
    return document.serialize_to_text()
