"""Tests for the node model: attribute names, element names and cloning."""

import copy
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional

import pytest
from lxml import etree

from xml_mapper.convert import ConvertibleNode, DynamicNode
from xml_mapper.shared import InvalidChildTypeError


@dataclass
class Person(ConvertibleNode):
    name: Optional[str] = None
    surname: Optional[str] = None


@dataclass
class Account(ConvertibleNode):
    xml_properties = ("login",)

    login: Optional[str] = None
    password: Optional[str] = None


@dataclass
class Tagged(ConvertibleNode):
    label: Optional[str] = None
    tags: Optional[List[str]] = None
    _secret: Optional[str] = None


class Book(ConvertibleNode):
    """Plain class relying on instance attribute reflection."""

    def __init__(self, title=None, pages=None):
        self.title = title
        self.pages = pages
        self._cache = {}


class PlainPerson(ConvertibleNode):
    name = None
    surname = None


class PlainEmployee(PlainPerson):
    registry: ClassVar[Dict[str, Any]] = {}
    company = None

    @property
    def display_name(self):
        return f"{self.name} {self.surname}"

    def promote(self):
        return self


@dataclass(frozen=True)
class Badge(ConvertibleNode):
    label: Optional[str] = None
    xml_children: Optional[List[Any]] = None


class TestConvertibleNodeNames:
    """Test element name derivation."""

    def test_element_name_defaults_to_class_name(self) -> None:
        """Test that the short class name is the default tag."""
        assert Person().get_xml_element_name() == "Person"

    def test_element_name_override(self) -> None:
        """Test that xml_element_name takes precedence over the class name."""
        person = Person(name="Alexander")
        person.xml_element_name = "human"
        assert person.get_xml_element_name() == "human"

    def test_dynamic_node_default_name(self) -> None:
        """Test DynamicNode without a name falls back to its class name."""
        assert DynamicNode().get_xml_element_name() == "DynamicNode"


class TestAttributeNames:
    """Test attribute name extraction."""

    def test_dataclass_fields_in_declaration_order(self) -> None:
        """Test that dataclass fields are used in declaration order."""
        assert Person().get_xml_properties() == ["name", "surname"]

    def test_structural_fields_are_excluded(self) -> None:
        """Test that children and element name never count as attributes."""
        person = Person(name="A")
        person.xml_children = []
        person.xml_element_name = "human"
        assert person.get_xml_properties() == ["name", "surname"]

    def test_private_fields_are_excluded(self) -> None:
        """Test that underscore fields are not attributes."""
        assert Tagged().get_xml_properties() == ["label", "tags"]

    def test_declared_properties_win(self) -> None:
        """Test that an xml_properties declaration replaces reflection."""
        assert Account(login="root", password="hunter2").get_xml_properties() == ["login"]

    def test_explicit_properties_are_filtered(self) -> None:
        """Test explicit names are used verbatim but still filtered."""
        names = Person().get_xml_properties(["surname", "xml_children", "name", "surname"])
        assert names == ["surname", "name"]

    def test_plain_class_uses_instance_attributes(self) -> None:
        """Test reflection over instance attributes for non-dataclasses."""
        assert Book("Dune", 412).get_xml_properties() == ["title", "pages"]

    def test_get_xml_attributes(self) -> None:
        """Test attribute values including unset ones."""
        assert Person(name="A").get_xml_attributes() == {"name": "A", "surname": None}

    def test_has_xml_attribute(self) -> None:
        """Test attribute presence on typed nodes."""
        person = Person()
        assert person.has_xml_attribute("name")
        assert not person.has_xml_attribute("age")


class TestDynamicNode:
    """Test the open attribute container."""

    def test_keyword_and_mapping_attributes(self) -> None:
        """Test attributes given as mapping and keywords keep order."""
        node = DynamicNode("item", {"data-id": "7"}, name="first")
        assert node.get_xml_properties() == ["data-id", "name"]
        assert node.get_xml_attribute("data-id") == "7"
        assert node.name == "first"

    def test_attribute_assignment_goes_to_mapping(self) -> None:
        """Test that setting a public attribute adds an XML attribute."""
        node = DynamicNode("item")
        node.color = "red"
        assert node.get_xml_properties() == ["color"]
        assert node.has_xml_attribute("color")

    def test_structural_assignment_is_not_an_attribute(self) -> None:
        """Test that structural fields bypass the attribute mapping."""
        node = DynamicNode("item")
        node.xml_children = []
        node.xml_element_name = "other"
        assert node.get_xml_properties() == []
        assert node.get_xml_element_name() == "other"

    def test_missing_attribute_raises_attribute_error(self) -> None:
        """Test that unknown attributes raise AttributeError."""
        with pytest.raises(AttributeError, match="has no attribute 'missing'"):
            DynamicNode("item").missing

    def test_repr(self) -> None:
        """Test the readable representation."""
        node = DynamicNode("item", {"id": "1"}, xml_children=[DynamicNode("child")])
        assert repr(node) == "DynamicNode('item', {'id': '1'}, children=1)"


class TestClone:
    """Test clone semantics."""

    def test_clone_copies_children_deeply(self) -> None:
        """Test that cloned children are independent objects."""
        child = Person(name="child")
        parent = DynamicNode("family", xml_children=[child])

        duplicate = parent.clone()
        duplicate.xml_children[0].name = "changed"

        assert duplicate is not parent
        assert duplicate.xml_children[0] is not child
        assert child.name == "child"

    def test_clone_copies_raw_children(self) -> None:
        """Test that raw children are deep-copied."""
        raw = etree.Element("note", text="hi")
        parent = DynamicNode("family", xml_children=[raw])

        duplicate = parent.clone()
        duplicate.xml_children[0].set("text", "bye")

        assert raw.get("text") == "hi"

    def test_clone_keeps_attribute_values(self) -> None:
        """Test that attribute values carry over to the clone."""
        duplicate = Person(name="Alexander", surname="Letnikow").clone()
        assert duplicate == Person(name="Alexander", surname="Letnikow")

    def test_dynamic_clone_has_own_attribute_mapping(self) -> None:
        """Test that setting an attribute on a clone leaves the original alone."""
        node = DynamicNode("item", id="1")
        duplicate = node.clone()
        duplicate.id = "2"
        assert node.id == "1"

    def test_empty_children_clone_to_none(self) -> None:
        """Test that empty children become None on the clone."""
        node = DynamicNode("item", xml_children=[])
        assert node.clone().xml_children is None

    def test_copy_module_uses_clone(self) -> None:
        """Test that copy.copy performs the same child copy."""
        child = Person(name="child")
        duplicate = copy.copy(DynamicNode("family", xml_children=[child]))
        assert duplicate.xml_children[0] is not child

    def test_clone_rejects_invalid_children(self) -> None:
        """Test that cloning a node with an invalid child fails."""
        node = DynamicNode("family", xml_children=["text"])
        with pytest.raises(InvalidChildTypeError):
            node.clone()

    def test_clone_drops_raw_child_tail(self) -> None:
        """Test that a raw child taken from a parsed document loses its tail."""
        raw = etree.fromstring("<a><b/>tail</a>")[0]
        parent = DynamicNode("family", xml_children=[raw])

        duplicate = parent.clone()

        assert duplicate.xml_children[0].tail is None
        assert raw.tail == "tail"


class TestPlainClassAttributes:
    """Test reflection over class-level attributes of plain subclasses."""

    def test_class_attributes_are_properties(self) -> None:
        """Test that public class data attributes count as attributes."""
        assert PlainPerson().get_xml_properties() == ["name", "surname"]

    def test_instance_attributes_follow_class_attributes(self) -> None:
        """Test ordering and de-duplication with instance attributes."""
        person = PlainPerson()
        person.nickname = "Sasha"
        person.name = "Alexander"
        assert person.get_xml_properties() == ["name", "surname", "nickname"]

    def test_inherited_class_attributes_come_first(self) -> None:
        """Test that base class attributes precede the subclass's own."""
        assert PlainEmployee().get_xml_properties() == ["name", "surname", "company"]

    def test_methods_properties_and_class_vars_are_skipped(self) -> None:
        """Test that only data attributes are reflected."""
        assert PlainEmployee().get_xml_attributes() == {
            "name": None,
            "surname": None,
            "company": None,
        }


class TestFrozenNodes:
    """Test that frozen dataclass nodes support the read-only operations."""

    def test_clone_with_children(self) -> None:
        """Test cloning a frozen node copies its children."""
        child = DynamicNode("item")
        node = Badge(label="gold", xml_children=[child])

        duplicate = node.clone()

        assert duplicate.label == "gold"
        assert duplicate.xml_children[0] is not child

    def test_diff_keeps_unmatched_children(self) -> None:
        """Test diff on frozen nodes returns a clone with the remainder."""
        current = Badge(label="gold", xml_children=[DynamicNode("a"), DynamicNode("b")])
        compared = Badge(label="gold", xml_children=[DynamicNode("a")])

        remainder = current.xml_diff(compared)

        assert isinstance(remainder, Badge)
        assert [c.get_xml_element_name() for c in remainder.xml_children] == ["b"]
        assert len(current.xml_children) == 2

    def test_equal(self) -> None:
        """Test serialization based equality on frozen nodes."""
        assert Badge(label="gold").xml_equal(Badge(label="gold"))
        assert not Badge(label="gold").xml_equal(Badge(label="silver"))
