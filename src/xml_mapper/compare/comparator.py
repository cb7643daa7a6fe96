"""Structural comparison of node trees.

Nodes are identified by element name. Attribute values are compared
strictly: parsed values are strings, so ``Person(age=30)`` and a parsed
``<Person age="30"/>`` do not match. A ``None`` field is treated as an
absent attribute, the same way serialization omits it.

Children are matched without a key: a child matches when some child on the
other side is the same object, or is of the same kind (typed or raw) and
compares recursively. Raw lxml children are normalized through
:class:`DynamicNode` before comparing.
"""

from typing import Dict, List, Optional, Any

from xml_mapper.convert.attributes import strictly_equal
from xml_mapper.convert.node import Child, ConvertibleNode, DynamicNode, clone_child
from xml_mapper.convert.serializer import serialize_to_string
from xml_mapper.shared import InvalidChildTypeError, get_logger
from xml_mapper.tree import is_raw_node

logger = get_logger(__name__, component="comparator")


def _normalize(child: Child, owner: ConvertibleNode) -> ConvertibleNode:
    if not is_raw_node(child):
        raise InvalidChildTypeError(type(owner).__name__, child)
    return DynamicNode.from_xml(child)


def _attribute_matches(current: ConvertibleNode, compared: ConvertibleNode, name: str) -> bool:
    value = current.get_xml_attribute(name)
    if not compared.has_xml_attribute(name):
        return value is None
    return strictly_equal(value, compared.get_xml_attribute(name))


def _children_intersect(
    current_child: Child,
    compared_child: Child,
    owner: ConvertibleNode,
    skip_empty: bool
) -> bool:
    if current_child is compared_child:
        return True
    if isinstance(current_child, ConvertibleNode):
        if not isinstance(compared_child, ConvertibleNode):
            return False
        return current_child.xml_intersect(compared_child, None, skip_empty) is not None
    if isinstance(compared_child, ConvertibleNode):
        return False
    current_node = _normalize(current_child, owner)
    compared_node = _normalize(compared_child, owner)
    return current_node.xml_intersect(compared_node, None, skip_empty) is not None


def intersect(
    current: ConvertibleNode,
    compared: ConvertibleNode,
    target: Optional[ConvertibleNode] = None,
    skip_empty: bool = True
) -> Optional[ConvertibleNode]:
    """Attributes and children current has in common with compared.

    Args:
        current: Node whose attribute names drive the comparison
        compared: Node whose values and children populate the result
        target: Node to populate; a new instance of current's type otherwise
        skip_empty: Return None instead of an empty node when nothing overlaps

    Returns:
        Populated node, or None on element name mismatch or empty overlap
    """
    if current.get_xml_element_name() != compared.get_xml_element_name():
        return None

    new_attributes: Dict[str, Any] = {}
    for name in current.get_xml_properties():
        if current.get_xml_attribute(name) is None:
            continue
        if _attribute_matches(current, compared, name):
            new_attributes[name] = compared.get_xml_attribute(name)

    current_children = current.xml_children or []
    new_children: List[Child] = [
        clone_child(compared_child, type(compared).__name__)
        for compared_child in compared.xml_children or []
        if any(
            _children_intersect(current_child, compared_child, current, skip_empty)
            for current_child in current_children
        )
    ]

    if skip_empty and not new_attributes and not new_children:
        return None

    if target is None:
        target = type(current)()
    target.xml_element_name = current.xml_element_name
    target.xml_children = new_children
    for name, value in new_attributes.items():
        target.set_xml_attribute(name, value)

    if logger.is_debug_enabled():
        logger.debug(
            "Intersected nodes",
            extra={
                "element": current.get_xml_element_name(),
                "attributes": len(new_attributes),
                "children": len(new_children),
            }
        )

    return target


def _child_remainder(
    child: Child,
    candidates: List[Child],
    owner: ConvertibleNode
) -> Optional[Child]:
    """What remains of child after looking for a match among candidates.

    Returns None when a candidate fully matches. Otherwise prefers the
    remainder computed against a candidate with the same element name, then
    any remainder, then a copy of child when no candidate is comparable.
    """
    raw = not isinstance(child, ConvertibleNode)
    node = _normalize(child, owner) if raw else child

    first_remainder: Optional[ConvertibleNode] = None
    named_remainder: Optional[ConvertibleNode] = None
    for candidate in candidates:
        if candidate is child:
            return None
        if raw:
            if isinstance(candidate, ConvertibleNode):
                continue
            candidate_node = _normalize(candidate, owner)
        else:
            if not isinstance(candidate, ConvertibleNode):
                continue
            candidate_node = candidate

        remainder = node.xml_diff(candidate_node)
        if remainder is None:
            return None
        if first_remainder is None:
            first_remainder = remainder
        if (
            named_remainder is None
            and candidate_node.get_xml_element_name() == node.get_xml_element_name()
        ):
            named_remainder = remainder

    result = named_remainder if named_remainder is not None else first_remainder
    if result is None:
        return clone_child(child, type(owner).__name__)
    return result.to_xml() if raw else result


def diff(current: ConvertibleNode, compared: ConvertibleNode) -> Optional[ConvertibleNode]:
    """Part of current that compared does not match.

    Attributes are atomic per node: a differing element name, a missing or
    differing attribute, or current having no children while compared has
    some, makes the whole node different and a clone of current is returned.
    Children are diffed one by one; matched children are dropped.

    Returns:
        Clone of current carrying only the unmatched children, a full clone,
        or None when nothing differs
    """
    if current.get_xml_element_name() != compared.get_xml_element_name():
        return current.clone()

    for name in current.get_xml_properties():
        if not _attribute_matches(current, compared, name):
            return current.clone()

    current_children = current.xml_children or []
    compared_children = compared.xml_children or []
    if not current_children and compared_children:
        return current.clone()

    new_children: List[Child] = []
    for child in current_children:
        remainder = _child_remainder(child, compared_children, current)
        if remainder is not None:
            new_children.append(remainder)

    if logger.is_debug_enabled():
        logger.debug(
            "Diffed nodes",
            extra={
                "element": current.get_xml_element_name(),
                "children": len(current_children),
                "unmatched": len(new_children),
            }
        )

    if not new_children:
        return None

    target = current.clone()
    object.__setattr__(target, "xml_children", new_children)
    return target


def equal(current: ConvertibleNode, compared: ConvertibleNode) -> bool:
    """Compare the XML text of both nodes.

    Unlike intersect and diff this is order sensitive for attributes as well
    as children.
    """
    return serialize_to_string(current) == serialize_to_string(compared)
