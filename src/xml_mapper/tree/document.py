"""Element tree collaborator backed by lxml.

``XMLDocument`` is the only place where XML text is produced or consumed.
Raw nodes are plain ``lxml.etree._Element`` objects; the helpers in this
module decide what counts as one and how their children are walked.
"""

import copy
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from lxml import etree

from xml_mapper.shared import DocumentError, MapperConfig, get_logger

RawNode = etree._Element

logger = get_logger(__name__, component="document")


def is_raw_node(obj: Any) -> bool:
    """Check whether obj is an lxml element (comments and PIs excluded)."""
    return isinstance(obj, etree._Element) and isinstance(obj.tag, str)


def iter_element_children(element: RawNode) -> Iterator[RawNode]:
    """Iterate over element children, skipping comments and processing instructions."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def copy_raw_node(element: RawNode) -> RawNode:
    """Deep-copy element without the tail text that follows it in its source."""
    duplicate = copy.deepcopy(element)
    duplicate.tail = None
    return duplicate


class XMLDocument:
    """A document holding at most one root element.

    Mirrors the small DOM surface needed by the converter: element creation,
    a single root, and text serialization governed by
    :class:`~xml_mapper.shared.config.SerializationConfig`.
    """

    def __init__(
        self,
        root: Optional[RawNode] = None,
        config: Optional[MapperConfig] = None
    ) -> None:
        self.config = config or MapperConfig()
        self._root = root

    @property
    def first_child(self) -> Optional[RawNode]:
        """Root element of the document, or None for an empty document."""
        return self._root

    def create_element(self, tag: str) -> RawNode:
        """Create a detached element named tag."""
        try:
            return etree.Element(tag)
        except ValueError as e:
            raise DocumentError(f"Invalid element name {tag!r}: {e}") from e

    def append_child(self, root: RawNode) -> RawNode:
        """Install root as the document element."""
        if not is_raw_node(root):
            raise DocumentError(f"Document root must be an element, got {type(root).__name__}")
        if self._root is not None:
            raise DocumentError("Document already has a root element")
        self._root = root
        return root

    def serialize_to_text(self) -> str:
        """Serialize the document to text using the serialization config."""
        if self._root is None:
            raise DocumentError("Cannot serialize an empty document")
        options = self.config.serialization
        data = etree.tostring(
            self._root,
            encoding=options.encoding,
            xml_declaration=options.xml_declaration,
            pretty_print=options.pretty_print,
        )
        if isinstance(data, str):
            return data
        return data.decode(options.encoding)

    def save(self, path: Union[str, Path]) -> None:
        """Write the serialized document to path.

        The "unicode" encoding has no byte form of its own and is written as UTF-8.
        """
        path = Path(path)
        options = self.config.serialization
        file_encoding = "utf-8" if options.is_unicode else options.encoding
        try:
            path.write_bytes(self.serialize_to_text().encode(file_encoding))
        except OSError as e:
            raise DocumentError(f"Cannot write {path}: {e}", source=str(path)) from e
        logger.debug("Document saved", extra={"path": str(path)})

    @staticmethod
    def _build_parser(config: MapperConfig, encoding: Optional[str] = None) -> etree.XMLParser:
        options = config.parsing
        return etree.XMLParser(
            remove_blank_text=options.remove_blank_text,
            resolve_entities=options.resolve_entities,
            no_network=options.no_network,
            huge_tree=options.huge_tree,
            remove_comments=False,
            encoding=encoding,
        )

    @classmethod
    def from_string(
        cls,
        text: Union[str, bytes],
        config: Optional[MapperConfig] = None,
        source: Optional[str] = None
    ) -> "XMLDocument":
        """Load a document from XML text.

        ``str`` input is already decoded: it is parsed as UTF-8 regardless of
        the encoding named in its declaration. ``bytes`` follow the declaration.
        """
        config = config or MapperConfig()
        if isinstance(text, str):
            data = text.encode("utf-8")
            parser = cls._build_parser(config, encoding="utf-8")
        else:
            data = text
            parser = cls._build_parser(config)

        limit = config.parsing.max_input_size_bytes
        if limit is not None and len(data) > limit:
            raise DocumentError(
                f"Input of {len(data)} bytes exceeds the {limit} byte limit", source=source
            )

        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            logger.warning(
                "XML syntax error",
                extra={"source": source, "error": str(e)}
            )
            raise DocumentError(f"Malformed XML: {e}", source=source) from e

        return cls(root=root, config=config)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: Optional[MapperConfig] = None
    ) -> "XMLDocument":
        """Load a document from an XML file."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DocumentError(f"Cannot read {path}: {e}", source=str(path)) from e
        return cls.from_string(data, config=config, source=str(path))

    def element_count(self) -> int:
        """Count the elements in the document."""
        if self._root is None:
            return 0
        return sum(1 for node in self._root.iter() if isinstance(node.tag, str))

    def __repr__(self) -> str:
        root = self._root.tag if self._root is not None else None
        return f"XMLDocument(root={root!r})"
