"""Public API for extracting the registries of DICOM PS3.6.

The package reads the DocBook rendition of the standard's data dictionary
(part06.xml), locates the registry chapters, and decodes their rows into
immutable records:

* "Registry of DICOM Data Elements"
* "Registry of DICOM File Meta Elements"
* "Registry of DICOM Directory Structuring Elements"
* "Registry of DICOM Unique Identifiers (UIDs)"

Example:
    >>> from DicomDictionary import RegistryParser, concrete_entries, keyword_to_snake_case
    >>> parser = RegistryParser.download()  # doctest: +SKIP
    >>> for entry in concrete_entries(parser.parse_data_element_registry()):  # doctest: +SKIP
    ...     print(keyword_to_snake_case(entry.keyword), entry.tag)
"""

from __future__ import annotations

__version__ = "0.3.0"

from .decoder import cell_text, decode_dictionary_rows, decode_identifier_rows
from .document import Node, parse_document
from .errors import (
    ConfigurationError,
    DicomDictionaryError,
    DocumentParseError,
    MissingRequiredTextError,
    RetrievalError,
    RowDecodeError,
    RowShapeError,
    SectionNotFoundError,
    UnknownCategoryError,
)
from .kinds import UidKind, classify_uid_kind
from .locator import find_section_rows
from .normalize import (
    concrete_entries,
    fold_keyword,
    is_concrete,
    is_range_tag,
    keyword_to_identifier,
    keyword_to_snake_case,
    normalize_uid_name,
    parse_tag,
    sop_class_identifier,
    strip_separators,
)
from .parser import RegistryParser
from .records import DictionaryEntry, IdentifierEntry
from .settings import DictionarySettings, load_settings

__all__ = [
    "__version__",
    "RegistryParser",
    "DictionaryEntry",
    "IdentifierEntry",
    "UidKind",
    "classify_uid_kind",
    "Node",
    "parse_document",
    "find_section_rows",
    "cell_text",
    "decode_dictionary_rows",
    "decode_identifier_rows",
    "strip_separators",
    "fold_keyword",
    "keyword_to_snake_case",
    "keyword_to_identifier",
    "normalize_uid_name",
    "sop_class_identifier",
    "is_range_tag",
    "parse_tag",
    "is_concrete",
    "concrete_entries",
    "DictionarySettings",
    "load_settings",
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
