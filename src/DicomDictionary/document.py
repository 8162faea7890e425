# === NAVMAP v1 ===
# {
#   "module": "DicomDictionary.document",
#   "purpose": "Immutable document tree built from part06.xml bytes",
#   "sections": [
#     {"id": "node", "name": "Node", "anchor": "class-node", "kind": "class"},
#     {"id": "local-name", "name": "local_name", "anchor": "function-local-name", "kind": "function"},
#     {"id": "parse-document", "name": "parse_document", "anchor": "function-parse-document", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Immutable document tree built from the DocBook rendition of PS3.6.

The decoder never touches raw markup. It walks :class:`Node` objects, which
carry the local tag name (namespaces stripped), a read-only attribute mapping,
ordered children and the element's leading text. Text is trimmed of
surrounding whitespace; zero-width spaces are not whitespace and survive.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from .errors import DocumentParseError

__all__ = ["Node", "local_name", "parse_document"]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """One element of the document tree."""

    name: str
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    children: Tuple["Node", ...] = ()
    text: Optional[str] = None

    def iter_children(self, name: str) -> Iterator["Node"]:
        """Yield children whose local name equals ``name`` in document order."""

        for child in self.children:
            if child.name == name:
                yield child

    def find(self, name: str) -> Optional["Node"]:
        """Return the first child named ``name`` or ``None``."""

        return next(self.iter_children(name), None)

    def first_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None


def local_name(qualified: str) -> str:
    """Strip a ``{namespace}`` prefix from an ElementTree tag or attribute name."""

    if qualified.startswith("{"):
        return qualified.rpartition("}")[2]
    return qualified


def _clean_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    stripped = text.strip()
    return stripped or None


def _convert(element: ET.Element) -> Node:
    attributes = {local_name(key): value for key, value in element.attrib.items()}
    return Node(
        name=local_name(element.tag),
        attributes=MappingProxyType(attributes),
        children=tuple(_convert(child) for child in element),
        text=_clean_text(element.text),
    )


def parse_document(content: bytes) -> Node:
    """Parse ``content`` into an immutable :class:`Node` tree.

    Args:
        content: Raw XML bytes; the encoding declaration is honoured.

    Returns:
        Node: Root of the converted tree.

    Raises:
        DocumentParseError: If ``content`` is not well-formed XML.
    """

    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise DocumentParseError(f"Unable to parse document: {exc}") from exc
    tree = _convert(root)
    LOGGER.debug(
        "parsed document",
        extra={"stage": "parse", "root": tree.name, "children": len(tree.children)},
    )
    return tree
