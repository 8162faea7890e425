"""Pure text transforms over decoded registry fields.

Keywords in PS3.6 separate logical words with zero-width spaces
(``U+200B``), which keeps them readable as one word while still allowing case
conversion. The helpers here turn keywords into identifier forms, normalize
UID names, and classify tags as concrete elements or wildcard ranges.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from .records import DictionaryEntry

__all__ = [
    "ZERO_WIDTH_SPACE",
    "TAG_PATTERN",
    "RETIRED_SUFFIX",
    "strip_separators",
    "fold_keyword",
    "keyword_to_snake_case",
    "keyword_to_identifier",
    "normalize_uid_name",
    "sop_class_identifier",
    "tag_group",
    "tag_element",
    "is_range_tag",
    "parse_tag",
    "is_concrete",
    "concrete_entries",
]

ZERO_WIDTH_SPACE = "\u200b"
RETIRED_SUFFIX = " (Retired)"
TAG_PATTERN = re.compile(r"^\(([0-9A-Fa-fx]{4}),([0-9A-Fa-fx]{4})\)$")

_SEPARATOR_RUN = re.compile(f"{ZERO_WIDTH_SPACE}{{2,}}")
_SOP_CLASS_NOISE = (" ", "-", "(Retired)", "(", ")", "/")


def strip_separators(text: str) -> str:
    """Remove every zero-width space from ``text``."""

    return text.replace(ZERO_WIDTH_SPACE, "")


def fold_keyword(keyword: str) -> str:
    """Collapse runs of zero-width spaces; some registry keywords carry doubles."""

    return _SEPARATOR_RUN.sub(ZERO_WIDTH_SPACE, keyword)


def keyword_to_snake_case(keyword: str) -> str:
    """Convert ``"Length\\u200bTo\\u200bEnd"`` into ``"length_to_end"``."""

    snake = fold_keyword(keyword).replace(ZERO_WIDTH_SPACE, "_")
    while "__" in snake:
        snake = snake.replace("__", "_")
    return snake.lower()


def keyword_to_identifier(keyword: str) -> str:
    """Convert ``"Length\\u200bTo\\u200bEnd"`` into ``"LengthToEnd"``."""

    return strip_separators(keyword)


def normalize_uid_name(full_name: str) -> str:
    """Drop the colon qualifier and the retirement marker from a UID name.

    The cut at the first colon happens first, so a ``(Retired)`` marker that
    only follows the colon disappears with the qualifier.
    """

    name = full_name.split(":", 1)[0]
    return name.replace(RETIRED_SUFFIX, "")


def sop_class_identifier(normalized_name: str) -> str:
    """Squash a normalized SOP class name into ``"VerificationSOPClass"`` form."""

    identifier = normalized_name
    for noise in _SOP_CLASS_NOISE:
        identifier = identifier.replace(noise, "")
    return identifier


def tag_group(tag: str) -> str:
    return tag[1:5]


def tag_element(tag: str) -> str:
    return tag[6:10]


def is_range_tag(tag: str) -> bool:
    """Return ``True`` when either half of ``tag`` contains the wildcard ``x``."""

    return "x" in tag_group(tag) or "x" in tag_element(tag)


def parse_tag(tag: str) -> Tuple[int, int]:
    """Return ``(group, element)`` of a concrete tag.

    Raises:
        ValueError: If ``tag`` is malformed or denotes a range.
    """

    match = TAG_PATTERN.match(tag)
    if match is None:
        raise ValueError(f"malformed tag {tag!r}")
    if is_range_tag(tag):
        raise ValueError(f"tag {tag!r} denotes a range")
    return int(match.group(1), 16), int(match.group(2), 16)


def is_concrete(entry: DictionaryEntry) -> bool:
    """Return ``True`` for entries usable as named constants.

    Entries without keyword (e.g. ``(0018,0061)``) and range entries
    (e.g. ``(7Fxx,0010)``) are excluded.
    """

    return bool(entry.keyword) and not is_range_tag(entry.tag)


def concrete_entries(entries: Iterable[DictionaryEntry]) -> List[DictionaryEntry]:
    return [entry for entry in entries if is_concrete(entry)]
