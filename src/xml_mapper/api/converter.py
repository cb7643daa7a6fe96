"""Public conversion API for xml-mapper.

Module-level functions cover the common paths: loading XML text or files
into node trees, rendering node trees as text, and running a comparison
operation with timing and logging attached.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Optional, TextIO, Type, Union

from xml_mapper.convert import (
    Aliases,
    ConvertibleNode,
    DynamicNode,
    deserialize,
    serialize_to_string,
)
from xml_mapper.shared import (
    ComparisonOperation,
    ComparisonResult,
    MapperConfig,
    get_logger,
)
from xml_mapper.tree import XMLDocument, is_raw_node

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path, XMLDocument, Any]

# Constants for API operations
PREVIEW_LENGTH = 100
MS_PER_SECOND = 1000


def parse(
    input_data: InputType,
    node_class: Type[ConvertibleNode] = DynamicNode,
    aliases: Optional[Aliases] = None,
    config: Optional[MapperConfig] = None,
    correlation_id: Optional[str] = None
) -> ConvertibleNode:
    """Load XML from various sources into a node tree.

    Args:
        input_data: XML text (str or bytes), Path, file-like object,
            XMLDocument or lxml element
        node_class: Class on whose behalf parsing happens
        aliases: Tag name to node class or instance
        config: Parsing configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Node for the document's root element

    Examples:
        >>> node = parse('<Person name="Alexander"/>')
        >>> node.name
        'Alexander'
    """
    logger = get_logger(__name__, correlation_id, "parse")
    logger.debug(
        "Starting parse operation",
        extra={"input_type": type(input_data).__name__, "node_class": node_class.__name__}
    )

    if isinstance(input_data, (str, bytes)):
        return parse_string(input_data, node_class, aliases, config, correlation_id)
    if isinstance(input_data, Path):
        return parse_file(input_data, node_class, aliases, config, correlation_id)
    if isinstance(input_data, XMLDocument) or is_raw_node(input_data):
        return deserialize(node_class, input_data, aliases)
    if hasattr(input_data, "read"):
        return parse_string(input_data.read(), node_class, aliases, config, correlation_id)

    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def parse_string(
    xml_string: Union[str, bytes],
    node_class: Type[ConvertibleNode] = DynamicNode,
    aliases: Optional[Aliases] = None,
    config: Optional[MapperConfig] = None,
    correlation_id: Optional[str] = None
) -> ConvertibleNode:
    """Load XML text into a node tree.

    Examples:
        >>> parse_string('<list><item/><item/></list>').xml_children
        [DynamicNode('item', {}, children=0), DynamicNode('item', {}, children=0)]
    """
    logger = get_logger(__name__, correlation_id, "parse_string")
    if logger.is_debug_enabled():
        preview = xml_string[:PREVIEW_LENGTH]
        logger.debug(
            "Parsing XML text",
            extra={"content_length": len(xml_string), "preview": preview}
        )

    document = XMLDocument.from_string(xml_string, config=config)
    return deserialize(node_class, document, aliases)


def parse_file(
    file_path: Union[str, Path],
    node_class: Type[ConvertibleNode] = DynamicNode,
    aliases: Optional[Aliases] = None,
    config: Optional[MapperConfig] = None,
    correlation_id: Optional[str] = None
) -> ConvertibleNode:
    """Load an XML file into a node tree."""
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.debug("Parsing XML file", extra={"file_path": str(path_obj)})

    document = XMLDocument.from_file(path_obj, config=config)
    if logger.is_debug_enabled():
        logger.debug(
            "Loaded XML file",
            extra={"file_path": str(path_obj), "element_count": document.element_count()}
        )
    return deserialize(node_class, document, aliases)


def to_string(node: ConvertibleNode, config: Optional[MapperConfig] = None) -> str:
    """Render a node tree as XML text.

    Examples:
        >>> to_string(DynamicNode("Person", name="Alexander"), MapperConfig.compact())
        '<Person name="Alexander"/>'
    """
    return serialize_to_string(node, config)


def save(
    node: ConvertibleNode,
    file_path: Union[str, Path],
    config: Optional[MapperConfig] = None
) -> None:
    """Write a node tree to an XML file."""
    document = XMLDocument(config=config)
    document.append_child(node.to_xml(document))
    document.save(file_path)


def compare(
    left: ConvertibleNode,
    right: ConvertibleNode,
    operation: Union[str, ComparisonOperation],
    skip_empty: Optional[bool] = None,
    config: Optional[MapperConfig] = None,
    correlation_id: Optional[str] = None
) -> ComparisonResult:
    """Run a comparison operation and wrap its outcome.

    Args:
        left: Node the operation is invoked on
        right: Node it is compared with
        operation: "intersect", "diff" or "equal"
        skip_empty: Intersect option; taken from config when None
        config: Configuration for defaults and rendering
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ComparisonResult with the outcome node rendered as text
    """
    config = config or MapperConfig()
    operation = ComparisonOperation(operation)
    logger = get_logger(__name__, correlation_id, "compare")
    if skip_empty is None:
        skip_empty = config.comparison.skip_empty

    start_time = time.time()
    outcome: Optional[ConvertibleNode] = None
    if operation is ComparisonOperation.INTERSECT:
        outcome = left.xml_intersect(right, skip_empty=skip_empty)
        equal = outcome is not None and left.xml_equal(right)
    elif operation is ComparisonOperation.DIFF:
        outcome = left.xml_diff(right)
        equal = outcome is None
    else:
        equal = left.xml_equal(right)
    processing_time = (time.time() - start_time) * MS_PER_SECOND

    rendered = serialize_to_string(outcome, config) if outcome is not None else None

    logger.info(
        "Comparison finished",
        extra={
            "operation": operation.value,
            "left": left.get_xml_element_name(),
            "right": right.get_xml_element_name(),
            "has_result": outcome is not None,
            "equal": equal,
            "processing_time_ms": processing_time,
        }
    )

    return ComparisonResult(
        operation=operation,
        outcome=outcome,
        equal=equal,
        rendered=rendered,
        processing_time_ms=processing_time,
        correlation_id=correlation_id,
    )
