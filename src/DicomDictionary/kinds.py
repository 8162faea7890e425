"""Closed classification of entries in the UID registry.

Each :class:`UidKind` member is bound to the literal "UID Type" label used in
PS3.6 Annex A. :func:`classify_uid_kind` matches labels exactly; anything
else is an error, never a fallback kind.
"""

from __future__ import annotations

from enum import Enum

from .errors import UnknownCategoryError

__all__ = ["UidKind", "classify_uid_kind"]


class UidKind(Enum):
    """Type of a unique identifier as listed in the UID registry."""

    APPLICATION_CONTEXT_NAME = "Application Context Name"
    APPLICATION_HOSTING_MODEL = "Application Hosting Model"
    CODING_SCHEME = "Coding Scheme"
    DICOM_UIDS_AS_CODING_SCHEME = "DICOM UIDs as a Coding Scheme"
    LDAP_OID = "LDAP OID"
    MAPPING_RESOURCE = "Mapping Resource"
    META_SOP_CLASS = "Meta SOP Class"
    SERVICE_CLASS = "Service Class"
    SOP_CLASS = "SOP Class"
    SYNCHRONIZATION_FRAME_OF_REFERENCE = "Synchronization Frame of Reference"
    TRANSFER_SYNTAX = "Transfer Syntax"
    WELL_KNOWN_FRAME_OF_REFERENCE = "Well-known frame of reference"
    WELL_KNOWN_PRINTER_SOP_INSTANCE = "Well-known Printer SOP Instance"
    WELL_KNOWN_PRINT_QUEUE_SOP_INSTANCE = "Well-known Print Queue SOP Instance"
    WELL_KNOWN_SOP_INSTANCE = "Well-known SOP Instance"

    @property
    def label(self) -> str:
        return self.value


_KINDS_BY_LABEL = {kind.value: kind for kind in UidKind}


def classify_uid_kind(label: str) -> UidKind:
    """Return the kind whose registry label equals ``label``.

    Matching is exact and case-sensitive.

    Raises:
        UnknownCategoryError: If ``label`` is not one of the registry labels.
    """

    try:
        return _KINDS_BY_LABEL[label]
    except KeyError:
        raise UnknownCategoryError(label) from None
