"""Element tree layer for xml-mapper.

Key Components:
    XMLDocument: Document wrapper over lxml with load/save and serialization
    RawNode: Alias of the lxml element type used for raw children
"""

from .document import (
    RawNode,
    XMLDocument,
    copy_raw_node,
    is_raw_node,
    iter_element_children,
)

__all__ = [
    "RawNode",
    "XMLDocument",
    "copy_raw_node",
    "is_raw_node",
    "iter_element_children",
]
