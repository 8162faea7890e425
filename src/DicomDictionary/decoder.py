# === NAVMAP v1 ===
# {
#   "module": "DicomDictionary.decoder",
#   "purpose": "Decode registry table rows into dictionary and identifier entries",
#   "sections": [
#     {"id": "cell-text", "name": "cell_text", "anchor": "function-cell-text", "kind": "function"},
#     {"id": "decode-dictionary-rows", "name": "decode_dictionary_rows", "anchor": "function-decode-dictionary-rows", "kind": "function"},
#     {"id": "decode-identifier-rows", "name": "decode_identifier_rows", "anchor": "function-decode-identifier-rows", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Row decoding for the registry tables of PS3.6.

Every row is ``<tr><td><para>text</para></td>…</tr>``. Some cells wrap their
text in ``<emphasis>`` (retired entries are printed in italics), some carry
no text at all, and a handful use footnote references instead of a value.
The decoders turn those rows into immutable records in document order and
abort on the first row they cannot interpret.

Two policies exist for required columns without text. Lenient decoding (the
default) substitutes ``""`` and records the field in ``missing``; strict
decoding raises :class:`MissingRequiredTextError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .document import Node
from .errors import MissingRequiredTextError, RowShapeError, UnknownCategoryError
from .kinds import classify_uid_kind
from .normalize import normalize_uid_name, strip_separators
from .records import DictionaryEntry, IdentifierEntry

__all__ = [
    "DICTIONARY_FIELDS",
    "IDENTIFIER_FIELDS",
    "cell_text",
    "row_texts",
    "decode_dictionary_rows",
    "decode_identifier_rows",
]

LOGGER = logging.getLogger(__name__)

DICTIONARY_FIELDS = ("tag", "name", "keyword", "vr", "vm", "comment")
IDENTIFIER_FIELDS = ("value", "full_name", "kind", "part")

# Name and keyword are legitimately empty for some entries, e.g. (0018,0061).
_DICTIONARY_REQUIRED = frozenset({0, 3, 4})
_IDENTIFIER_REQUIRED = frozenset({0, 1})

_SEE_NOTE_PREFIX = "See Note"
# Empty keyword cells wrapped in <emphasis> have been seen to read back as "1".
_KEYWORD_ARTIFACT = "1"


def cell_text(cell: Node) -> Optional[str]:
    """Return the text of a ``td`` node, unwrapping one ``emphasis`` level."""

    para = cell.find("para")
    if para is None:
        return None
    inner = para.first_child()
    if inner is not None and inner.name == "emphasis":
        para = inner
    return para.text


def row_texts(row: Node) -> List[Optional[str]]:
    return [cell_text(cell) for cell in row.iter_children("td")]


class _RowContext:
    """Resolves required text for one row under the chosen policy."""

    def __init__(self, section: str, index: int, fields: Sequence[str], strict: bool) -> None:
        self.section = section
        self.index = index
        self.fields = fields
        self.strict = strict
        self.missing: List[str] = []

    def required(self, texts: Sequence[Optional[str]], column: int) -> str:
        text = texts[column]
        if text is not None:
            return text
        if self.strict:
            raise MissingRequiredTextError(
                section=self.section, row=self.index, column=column, field=self.fields[column]
            )
        self.missing.append(self.fields[column])
        return ""

    def optional(self, texts: Sequence[Optional[str]], column: int) -> str:
        text = texts[column]
        if text is None:
            self.missing.append(self.fields[column])
            return ""
        return text


def _decode_dictionary_row(
    texts: Sequence[Optional[str]], *, section: str, index: int, strict: bool
) -> DictionaryEntry:
    if len(texts) not in (5, 6):
        raise RowShapeError(section=section, row=index, cells=len(texts))

    ctx = _RowContext(section, index, DICTIONARY_FIELDS, strict)
    tag = ctx.required(texts, 0)
    name = ctx.optional(texts, 1)
    keyword = ctx.optional(texts, 2)
    if keyword == _KEYWORD_ARTIFACT:
        LOGGER.debug(
            "discarding keyword artifact",
            extra={"stage": "decode", "section": section, "row": index, "tag": tag},
        )
        keyword = ""
    vr = ctx.required(texts, 3)
    if vr.startswith(_SEE_NOTE_PREFIX):
        # e.g. "Item" (FFFE,E000): the note states that these tags have no VR
        vr = ""
    vm = ctx.required(texts, 4)
    comment = texts[5] if len(texts) == 6 else None

    return DictionaryEntry(
        tag=tag,
        name=name,
        keyword=keyword,
        vr=vr,
        vm=vm,
        comment=comment,
        missing=tuple(ctx.missing),
    )


def decode_dictionary_rows(
    rows: Node, *, section: str, strict: bool = False
) -> List[DictionaryEntry]:
    """Decode every ``tr`` of ``rows`` into a :class:`DictionaryEntry`.

    Args:
        rows: The ``tbody`` node of a data element registry.
        section: Label of the section, used in error messages.
        strict: Raise instead of substituting ``""`` when tag, VR, or VM
            cells have no text.

    Returns:
        list[DictionaryEntry]: One entry per row in document order.

    Raises:
        RowShapeError: If a row has fewer than five or more than six cells.
        MissingRequiredTextError: In strict mode, if a required cell is empty.
    """

    entries: List[DictionaryEntry] = []
    for index, row in enumerate(rows.iter_children("tr")):
        texts = row_texts(row)
        entries.append(_decode_dictionary_row(texts, section=section, index=index, strict=strict))

    incomplete = sum(1 for entry in entries if set(entry.missing) & {"tag", "vr", "vm"})
    LOGGER.info(
        "decoded dictionary section",
        extra={
            "stage": "decode",
            "section": section,
            "entries": len(entries),
            "incomplete": incomplete,
        },
    )
    return entries


def _decode_identifier_row(
    texts: Sequence[Optional[str]], *, section: str, index: int, strict: bool
) -> IdentifierEntry:
    if len(texts) not in (3, 4):
        raise RowShapeError(section=section, row=index, cells=len(texts))

    ctx = _RowContext(section, index, IDENTIFIER_FIELDS, strict)
    value = strip_separators(ctx.required(texts, 0))
    full_name = ctx.required(texts, 1)
    category = texts[2]
    if category is None:
        raise MissingRequiredTextError(section=section, row=index, column=2, field="kind")
    try:
        kind = classify_uid_kind(category)
    except UnknownCategoryError as exc:
        raise UnknownCategoryError(exc.label, section=section, row=index) from exc
    if ctx.missing:
        LOGGER.debug(
            "identifier row has empty cells",
            extra={"stage": "decode", "section": section, "row": index, "fields": ctx.missing},
        )

    return IdentifierEntry(
        value=value,
        full_name=full_name,
        normalized_name=normalize_uid_name(full_name),
        kind=kind,
    )


def decode_identifier_rows(
    rows: Node, *, section: str, strict: bool = False
) -> List[IdentifierEntry]:
    """Decode every ``tr`` of ``rows`` into an :class:`IdentifierEntry`.

    Columns are value, name, type and part; the part reference is ignored.

    Raises:
        RowShapeError: If a row has fewer than three or more than four cells.
        MissingRequiredTextError: If the type cell is empty, or in strict mode
            if the value or name cell is empty.
        UnknownCategoryError: If the type cell names no known UID kind.
    """

    entries = [
        _decode_identifier_row(row_texts(row), section=section, index=index, strict=strict)
        for index, row in enumerate(rows.iter_children("tr"))
    ]
    LOGGER.info(
        "decoded identifier section",
        extra={"stage": "decode", "section": section, "entries": len(entries)},
    )
    return entries
