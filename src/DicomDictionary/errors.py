"""Exception hierarchy shared across document parsing, decoding, and retrieval.

Extracting registries from PS3.6 spans XML parsing, section lookup, row
decoding, and HTTP retrieval. This module groups the failure modes into a
small hierarchy so callers can react to high-level categories (for example,
a malformed document vs. a row the decoder cannot interpret) while still
having access to the offending section label and row index.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "DicomDictionaryError",
    "DocumentParseError",
    "SectionNotFoundError",
    "RowDecodeError",
    "RowShapeError",
    "MissingRequiredTextError",
    "UnknownCategoryError",
    "RetrievalError",
    "ConfigurationError",
]


class DicomDictionaryError(RuntimeError):
    """Base exception for registry parsing, decoding, or retrieval failures."""


class DocumentParseError(DicomDictionaryError):
    """Raised when the source bytes cannot be parsed into a document tree."""


class ConfigurationError(DicomDictionaryError):
    """Raised when settings files or values are invalid."""


class SectionNotFoundError(DicomDictionaryError):
    """Raised when no chapter with the requested label holds a row container."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Unable to find table body of section '{label}'")
        self.label = label


class RowDecodeError(DicomDictionaryError):
    """Base class for failures tied to a single row of a section."""

    def __init__(
        self, message: str, *, section: Optional[str] = None, row: Optional[int] = None
    ) -> None:
        if section is not None and row is not None:
            message = f"section '{section}', row {row}: {message}"
        super().__init__(message)
        self.section = section
        self.row = row


class RowShapeError(RowDecodeError):
    """Raised when a row holds an unexpected number of cells."""

    def __init__(self, *, section: str, row: int, cells: int) -> None:
        super().__init__(
            f"found unexpected number of 'td' elements ({cells})", section=section, row=row
        )
        self.cells = cells


class MissingRequiredTextError(RowDecodeError):
    """Raised when a required column carries no text."""

    def __init__(self, *, section: str, row: int, column: int, field: Optional[str] = None) -> None:
        label = f"column {column}" if field is None else f"column {column} ({field})"
        super().__init__(f"{label} has no text", section=section, row=row)
        self.column = column
        self.field = field


class UnknownCategoryError(RowDecodeError):
    """Raised when a UID type label does not match any known kind."""

    def __init__(
        self, label: str, *, section: Optional[str] = None, row: Optional[int] = None
    ) -> None:
        super().__init__(f"unknown UID category {label!r}", section=section, row=row)
        self.label = label


class RetrievalError(DicomDictionaryError):
    """Raised when fetching the source document over HTTP fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


# === NAVMAP v1 ===
# {
#   "module": "DicomDictionary.errors",
#   "purpose": "Define the exception hierarchy used across parsing, decoding, and retrieval",
#   "sections": [
#     {"id": "base", "name": "Base Exceptions", "anchor": "BAS", "kind": "api"},
#     {"id": "structure", "name": "Structural Errors", "anchor": "STR", "kind": "api"},
#     {"id": "rows", "name": "Row Decoding Errors", "anchor": "ROW", "kind": "api"},
#     {"id": "retrieval", "name": "Retrieval Errors", "anchor": "RET", "kind": "api"}
#   ]
# }
# === /NAVMAP ===
