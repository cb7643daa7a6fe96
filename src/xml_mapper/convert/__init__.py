"""Object to XML conversion.

Key Components:
    ConvertibleNode: Base class for typed nodes
    DynamicNode: Open node used for tags without an alias
    serialize: Node tree to lxml element
    deserialize: lxml element to node tree
"""

from .node import Aliases, AliasEntry, Child, ConvertibleNode, DynamicNode, clone_child
from .serializer import serialize, serialize_to_string
from .deserializer import deserialize, resolve_aliases

__all__ = [
    "Aliases",
    "AliasEntry",
    "Child",
    "ConvertibleNode",
    "DynamicNode",
    "clone_child",
    "serialize",
    "serialize_to_string",
    "deserialize",
    "resolve_aliases",
]
