"""Parser for the registries defined in DICOM PS3.6 ("Data Dictionary").

A :class:`RegistryParser` holds the bytes of one part06.xml, obtained either
from a local file or by downloading it once, and exposes one operation per
registry. Each operation walks the (lazily parsed, immutable) document tree
independently and either returns the complete ordered list of entries or
raises.

Example:
    >>> from DicomDictionary import RegistryParser
    >>> parser = RegistryParser.from_file("part06.xml")  # doctest: +SKIP
    >>> elements = parser.parse_data_element_registry()  # doctest: +SKIP
    >>> elements[0].tag  # doctest: +SKIP
    '(0008,0001)'
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Union

import httpx

from .decoder import decode_dictionary_rows, decode_identifier_rows
from .document import Node, parse_document
from .errors import DocumentParseError
from .locator import find_section_rows
from .net import fetch_document
from .records import DictionaryEntry, IdentifierEntry
from .settings import DictionarySettings

__all__ = ["RegistryParser"]

LOGGER = logging.getLogger(__name__)


class RegistryParser:
    """Extracts dictionary and UID registries from one part06.xml document."""

    def __init__(self, content: bytes, *, settings: Optional[DictionarySettings] = None) -> None:
        self._content = content
        self.settings = settings or DictionarySettings()

    @classmethod
    def from_file(
        cls, path: Union[str, Path], *, settings: Optional[DictionarySettings] = None
    ) -> "RegistryParser":
        """Create a parser for the part06.xml stored at ``path``.

        Raises:
            DocumentParseError: If the file cannot be read.
        """

        source = Path(path)
        try:
            content = source.read_bytes()
        except OSError as exc:
            raise DocumentParseError(f"Unable to read {source}: {exc}") from exc
        LOGGER.info("loaded part06", extra={"stage": "load", "path": str(source)})
        return cls(content, settings=settings)

    @classmethod
    def download(
        cls,
        *,
        settings: Optional[DictionarySettings] = None,
        client: Optional[httpx.Client] = None,
    ) -> "RegistryParser":
        """Create a parser for a freshly downloaded part06.xml.

        Raises:
            RetrievalError: If downloading fails.
        """

        resolved = settings or DictionarySettings()
        content = fetch_document(resolved.download, client=client)
        return cls(content, settings=resolved)

    @cached_property
    def document(self) -> Node:
        """The parsed document tree."""

        return parse_document(self._content)

    @property
    def strict(self) -> bool:
        return self.settings.decoding.strict

    def parse_dictionary_section(self, label: str) -> List[DictionaryEntry]:
        """Decode the data element table of chapter ``label``.

        Raises:
            DocumentParseError: If the document is not well-formed XML.
            SectionNotFoundError: If no chapter ``label`` with a table exists.
            RowDecodeError: If a row cannot be decoded.
        """

        rows = find_section_rows(self.document, label)
        return decode_dictionary_rows(rows, section=label, strict=self.strict)

    def parse_identifier_section(self, label: str) -> List[IdentifierEntry]:
        """Decode the UID table of chapter ``label``.

        Raises:
            DocumentParseError: If the document is not well-formed XML.
            SectionNotFoundError: If no chapter ``label`` with a table exists.
            RowDecodeError: If a row cannot be decoded or names an unknown kind.
        """

        rows = find_section_rows(self.document, label)
        return decode_identifier_rows(rows, section=label, strict=self.strict)

    def parse_data_element_registry(self) -> List[DictionaryEntry]:
        """Return all entries of the "Registry of DICOM Data Elements".

        Note that **all** entries are returned, including elements:

        * without name/keyword (e.g. ``(0018,0061)``)
        * with tags defining ranges (e.g. "EscapeTriplet" -> ``(1000,xxx0)``)
        * without VR (e.g. "Item" -> ``(FFFE,E000)``)
        """

        return self.parse_dictionary_section(self.settings.sections.data_elements)

    def parse_file_meta_element_registry(self) -> List[DictionaryEntry]:
        """Return all entries of the "Registry of DICOM File Meta Elements"."""

        return self.parse_dictionary_section(self.settings.sections.file_meta_elements)

    def parse_directory_structuring_element_registry(self) -> List[DictionaryEntry]:
        """Return all entries of the "Registry of DICOM Directory Structuring Elements"."""

        return self.parse_dictionary_section(self.settings.sections.directory_structuring_elements)

    def parse_unique_identifier_registry(self) -> List[IdentifierEntry]:
        """Return all entries of the "Registry of DICOM Unique Identifiers (UIDs)"."""

        return self.parse_identifier_section(self.settings.sections.unique_identifiers)
