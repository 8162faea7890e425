"""Locate the row container of a labeled chapter in the document tree."""

from __future__ import annotations

import logging

from .document import Node
from .errors import SectionNotFoundError

__all__ = ["find_section_rows"]

LOGGER = logging.getLogger(__name__)


def find_section_rows(root: Node, label: str) -> Node:
    """Return the ``tbody`` of the first table in chapter ``label``.

    The layout is ``<chapter label="6"><table><tbody><tr>…``. Chapters are
    scanned in document order and the first one that yields a row container
    wins; later duplicates are never visited.

    Raises:
        SectionNotFoundError: If no chapter labeled ``label`` holds a table body.
    """

    for chapter in root.iter_children("chapter"):
        if chapter.attributes.get("label") != label:
            continue
        for table in chapter.iter_children("table"):
            body = table.find("tbody")
            if body is not None:
                LOGGER.debug(
                    "located section table body",
                    extra={"stage": "locate", "section": label, "rows": len(body.children)},
                )
                return body
    raise SectionNotFoundError(label)
