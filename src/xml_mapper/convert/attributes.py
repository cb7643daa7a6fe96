"""Attribute extraction for convertible nodes.

Decides which fields of a node become XML attributes and how their values
are rendered as attribute strings.
"""

import numbers
from dataclasses import fields, is_dataclass
from typing import Any, ClassVar, Iterable, List, Optional, get_origin

from xml_mapper.shared import SerializationConfig

# Fields that describe tree structure and never become attributes
STRUCTURAL_FIELDS = ("xml_children", "xml_element_name")


def declared_property_names(node: Any, base: type = object) -> List[str]:
    """Names a node exposes before filtering.

    An ``xml_properties`` class declaration wins; otherwise dataclass fields
    are used in declaration order. Plain objects expose the public data
    attributes of the classes between ``base`` and their own type, base
    classes first, followed by their instance attributes in insertion order.
    """
    declared = getattr(type(node), "xml_properties", None)
    if declared is not None:
        return list(declared)
    if is_dataclass(node):
        return [f.name for f in fields(node)]
    return class_attribute_names(type(node), base) + list(vars(node))


def class_attribute_names(cls: type, base: type = object) -> List[str]:
    """Public class-level data attributes of cls below base, in definition order."""
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        if issubclass(base, klass):
            continue
        annotations = getattr(klass, "__annotations__", {})
        for name, value in klass.__dict__.items():
            if name.startswith("_") or callable(value) or hasattr(value, "__get__"):
                continue
            if _is_class_var(annotations.get(name)):
                continue
            names.append(name)
    return names


def _is_class_var(annotation: Any) -> bool:
    if annotation is None:
        return False
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def filter_property_names(names: Iterable[str], allow_private: bool = False) -> List[str]:
    """Drop structural and private names, keeping first occurrence order."""
    result: List[str] = []
    for name in names:
        if name in STRUCTURAL_FIELDS or name in result:
            continue
        if not allow_private and name.startswith("_"):
            continue
        result.append(name)
    return result


def is_scalar(value: Any) -> bool:
    """Check whether value can be written as an attribute."""
    return isinstance(value, (str, numbers.Number))


def coerce_attribute_value(value: Any, config: Optional[SerializationConfig] = None) -> str:
    """Render a scalar as an attribute string."""
    if isinstance(value, bool):
        config = config or SerializationConfig()
        return config.true_value if value else config.false_value
    if isinstance(value, str):
        return value
    return str(value)


def strictly_equal(left: Any, right: Any) -> bool:
    """Compare values without type coercion (``1``, ``1.0``, ``True`` and ``"1"`` all differ)."""
    return type(left) is type(right) and left == right
