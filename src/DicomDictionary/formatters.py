"""Formatting helpers for turning registry entries into tables and JSON.

The CLI renders entries either as a padded ASCII table or as a JSON array.
This module defines the header schemas for both registry kinds and the row
builders, so the presentation stays identical wherever entries are shown.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Sequence, Tuple, Union

from .normalize import keyword_to_identifier, keyword_to_snake_case
from .records import DictionaryEntry, IdentifierEntry

ElementRow = Tuple[str, str, str, str, str, str, str]
UidRow = Tuple[str, str, str]

ELEMENT_TABLE_HEADERS: Tuple[str, ...] = (
    "tag",
    "name",
    "keyword",
    "snake_case",
    "vr",
    "vm",
    "comment",
)

UID_TABLE_HEADERS: Tuple[str, ...] = ("value", "name", "kind")

__all__ = [
    "ElementRow",
    "UidRow",
    "ELEMENT_TABLE_HEADERS",
    "UID_TABLE_HEADERS",
    "format_table",
    "format_element_rows",
    "format_uid_rows",
    "entries_to_json",
]


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render a padded ASCII table."""

    column_widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            column_widths[index] = max(column_widths[index], len(cell))

    def _format_row(values: Sequence[str]) -> str:
        return " | ".join(value.ljust(column_widths[index]) for index, value in enumerate(values))

    separator = "-+-".join("-" * width for width in column_widths)
    lines = [_format_row(headers), separator]
    lines.extend(_format_row(row) for row in rows)
    return "\n".join(lines)


def format_element_rows(entries: Iterable[DictionaryEntry]) -> List[ElementRow]:
    """Convert dictionary entries into table rows with printable keywords."""

    rows: List[ElementRow] = []
    for entry in entries:
        rows.append(
            (
                entry.tag,
                entry.name,
                keyword_to_identifier(entry.keyword),
                keyword_to_snake_case(entry.keyword),
                entry.vr,
                entry.vm,
                entry.comment or "",
            )
        )
    return rows


def format_uid_rows(entries: Iterable[IdentifierEntry]) -> List[UidRow]:
    return [(entry.value, entry.normalized_name, entry.kind.label) for entry in entries]


def entries_to_json(entries: Iterable[Union[DictionaryEntry, IdentifierEntry]]) -> str:
    """Serialise entries into an indented JSON array (zero-width spaces kept)."""

    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)
