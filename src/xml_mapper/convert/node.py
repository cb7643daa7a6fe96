"""Node model for XML conversion.

``ConvertibleNode`` is the base class for application objects that map to
XML elements. Subclasses are usually dataclasses whose scalar fields become
attributes::

    @dataclass
    class Person(ConvertibleNode):
        name: Optional[str] = None
        surname: Optional[str] = None

    Person(name="Alexander", surname="Letnikow").to_xml()
    # <Person name="Alexander" surname="Letnikow"/>

``DynamicNode`` is the open variant used when parsing meets a tag with no
registered alias; it accepts any attribute name.
"""

import copy
from typing import (
    Any,
    ClassVar,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from xml_mapper.convert.attributes import (
    STRUCTURAL_FIELDS,
    declared_property_names,
    filter_property_names,
)
from xml_mapper.shared import InvalidChildTypeError
from xml_mapper.tree import RawNode, XMLDocument, copy_raw_node, is_raw_node

Child = Union["ConvertibleNode", RawNode]
AliasEntry = Union[Type["ConvertibleNode"], "ConvertibleNode"]
Aliases = Union[Mapping[str, AliasEntry], Sequence[AliasEntry]]

NodeT = TypeVar("NodeT", bound="ConvertibleNode")


def clone_child(child: Child, owner: str = "ConvertibleNode") -> Child:
    """Copy a child so the copy shares no nodes with the original."""
    if isinstance(child, ConvertibleNode):
        return child.clone()
    if is_raw_node(child):
        return copy_raw_node(child)
    raise InvalidChildTypeError(owner, child)


class ConvertibleNode:
    """Base class for objects convertible to and from XML elements.

    Subclasses must be constructible without arguments: parsing and
    intersection create fresh instances of them and set their fields, so
    those two operations need mutable nodes. Frozen dataclass nodes support
    serialization, clone, diff and equal.

    Plain (non-dataclass) subclasses expose their public class-level data
    attributes followed by their instance attributes.
    """

    # Tag name override; the class name is used when unset
    xml_element_name: Optional[str] = None

    # Typed nodes or lxml elements; None and [] both mean "no children"
    xml_children: Optional[List[Child]] = None

    # Explicit ordered attribute names; None means reflect over the fields
    xml_properties: ClassVar[Optional[Sequence[str]]] = None

    def get_xml_element_name(self) -> str:
        """Name of the XML element, the class name unless overridden."""
        return self.xml_element_name or type(self).__name__

    def get_xml_properties(self, properties: Optional[Sequence[str]] = None) -> List[str]:
        """Names of the fields written as XML attributes, in stable order.

        Args:
            properties: Explicit names to use instead of the declared fields

        Returns:
            Attribute names without the structural fields
        """
        if properties is None:
            properties = declared_property_names(self, ConvertibleNode)
        return filter_property_names(properties)

    def has_xml_attribute(self, name: str) -> bool:
        return name in self.get_xml_properties() or name in vars(self)

    def get_xml_attribute(self, name: str, default: Any = None) -> Any:
        return getattr(self, name, default)

    def set_xml_attribute(self, name: str, value: Any) -> None:
        setattr(self, name, value)

    def get_xml_attributes(self) -> Dict[str, Any]:
        """Current attribute values keyed by name, unset values included."""
        return {name: self.get_xml_attribute(name) for name in self.get_xml_properties()}

    def to_xml(self, document: Optional[XMLDocument] = None) -> RawNode:
        """Convert this node and its children to an lxml element."""
        from xml_mapper.convert.serializer import serialize

        return serialize(self, document)

    @classmethod
    def from_xml(
        cls: Type[NodeT],
        source: Union[XMLDocument, Any],
        aliases: Optional[Aliases] = None
    ) -> "ConvertibleNode":
        """Build a node tree from an element, element tree or XMLDocument.

        Args:
            source: Element to convert; documents are unwrapped to their root
            aliases: Tag name to node class or instance; this class is always
                registered under its own name

        Returns:
            Node for the root element. Its type is whatever the alias table
            selects for the root tag, DynamicNode when nothing matches.
        """
        from xml_mapper.convert.deserializer import deserialize

        return deserialize(cls, source, aliases)

    def xml_intersect(
        self,
        other: "ConvertibleNode",
        target: Optional["ConvertibleNode"] = None,
        skip_empty: bool = True
    ) -> Optional["ConvertibleNode"]:
        """Attributes and children this node has in common with other.

        Matched values are taken from other. Returns None when the element
        names differ, or when nothing overlaps and skip_empty is set.
        """
        from xml_mapper.compare.comparator import intersect

        return intersect(self, other, target, skip_empty)

    def xml_diff(self, other: "ConvertibleNode") -> Optional["ConvertibleNode"]:
        """Part of this node not matched by other, None when fully matched."""
        from xml_mapper.compare.comparator import diff

        return diff(self, other)

    def xml_equal(self, other: "ConvertibleNode") -> bool:
        """Compare the serialized XML text of both nodes."""
        from xml_mapper.compare.comparator import equal

        return equal(self, other)

    def clone(self: NodeT) -> NodeT:
        """Copy this node with an independent copy of its children."""
        return copy.copy(self)

    def __copy__(self):
        duplicate = type(self).__new__(type(self))
        duplicate.__dict__.update(self.__dict__)
        # object.__setattr__ also works for frozen dataclass nodes
        object.__setattr__(duplicate, "xml_children", [
            clone_child(child, type(self).__name__) for child in self.xml_children or []
        ] or None)
        return duplicate


class DynamicNode(ConvertibleNode):
    """Node that accepts arbitrary attributes.

    Attributes live in an ordered mapping and are also readable and writable
    as Python attributes::

        node = DynamicNode("item", {"data-id": "7"}, name="first")
        node.name                         # 'first'
        node.get_xml_attribute("data-id")  # '7'
    """

    def __init__(
        self,
        xml_element_name: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        xml_children: Optional[List[Child]] = None,
        **kwargs: Any
    ) -> None:
        object.__setattr__(self, "_attributes", dict(attributes or {}))
        self._attributes.update(kwargs)
        self.xml_element_name = xml_element_name
        self.xml_children = xml_children

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.__dict__["_attributes"][name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in STRUCTURAL_FIELDS or name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._attributes[name] = value

    def get_xml_properties(self, properties: Optional[Sequence[str]] = None) -> List[str]:
        names = properties if properties is not None else list(self._attributes)
        return filter_property_names(names, allow_private=True)

    def has_xml_attribute(self, name: str) -> bool:
        return name in self._attributes

    def get_xml_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def set_xml_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def __copy__(self):
        duplicate = super().__copy__()
        object.__setattr__(duplicate, "_attributes", dict(self._attributes))
        return duplicate

    def __repr__(self) -> str:
        children = len(self.xml_children or [])
        return (
            f"DynamicNode({self.get_xml_element_name()!r}, {self._attributes!r}, "
            f"children={children})"
        )
