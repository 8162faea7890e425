"""Value records produced by the row decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .kinds import UidKind

__all__ = ["DictionaryEntry", "IdentifierEntry"]


@dataclass(frozen=True)
class DictionaryEntry:
    """A single entry of a data element registry (e.g. chapter 6)."""

    tag: str
    """Group/element pair in the format ``"(gggg,eeee)"``; halves may contain ``x``."""

    name: str = ""
    """Human-readable name, e.g. ``"Specific Character Set"``."""

    keyword: str = ""
    """Name with zero-width spaces between words, e.g. ``"Length\\u200bTo\\u200bEnd"``."""

    vr: str = ""
    """Two-letter value representation; empty when the registry refers to a note."""

    vm: str = ""
    """Value multiplicity as single digit or range, e.g. ``"2-n"``."""

    comment: Optional[str] = None
    """Sixth column text such as ``"RET"`` for retired elements."""

    missing: Tuple[str, ...] = ()
    """Fields whose source cell had no text and were set to ``""``."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "name": self.name,
            "keyword": self.keyword,
            "vr": self.vr,
            "vm": self.vm,
            "comment": self.comment,
        }

    def __str__(self) -> str:
        return (
            f"Tag: {self.tag}, Name: {self.name}, Keyword: {self.keyword}, "
            f"VR: {self.vr}, VM: {self.vm}, Comment: {self.comment or ''}"
        )


@dataclass(frozen=True)
class IdentifierEntry:
    """A single entry of the UID registry."""

    value: str
    """Dotted UID value, e.g. ``"1.2.840.10008.1.1"``."""

    full_name: str
    """Name as printed in the registry, e.g.
    ``"Implicit VR Little Endian: Default Transfer Syntax for DICOM"``."""

    normalized_name: str
    """``full_name`` without the colon qualifier and the ``" (Retired)"`` suffix.

    Some noise remains, e.g. ``"JPEG Lossless, Non-Hierarchical (Process 14)"``.
    """

    kind: UidKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "full_name": self.full_name,
            "normalized_name": self.normalized_name,
            "kind": self.kind.label,
        }
