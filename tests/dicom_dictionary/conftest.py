"""Shared fixtures for the dicom_dictionary test suite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest

from DicomDictionary.document import Node, parse_document
from DicomDictionary.parser import RegistryParser


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handlers and propagation changes made by ``setup_logging``."""

    logger = logging.getLogger("DicomDictionary")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


PART06_EXCERPT = (
    Path(__file__).resolve().parents[1] / "data" / "dicom_dictionary" / "part06_excerpt.xml"
)

Cells = Sequence[Optional[str]]


def _td(text: Optional[str], italic: bool) -> str:
    if text is None:
        return "<td><para/></td>"
    if italic:
        return f'<td><para><emphasis role="italic">{text}</emphasis></para></td>'
    return f"<td><para>{text}</para></td>"


def render_rows(rows: Sequence[Cells], *, italic: bool = False) -> str:
    """Render rows of cell texts the way part06.xml does (``None`` = empty cell)."""

    return "".join(
        "<tr>" + "".join(_td(cell, italic) for cell in row) + "</tr>" for row in rows
    )


@pytest.fixture
def part06_path() -> Path:
    return PART06_EXCERPT


@pytest.fixture
def part06_bytes() -> bytes:
    return PART06_EXCERPT.read_bytes()


@pytest.fixture
def parser(part06_bytes: bytes) -> RegistryParser:
    return RegistryParser(part06_bytes)


@pytest.fixture
def make_tbody() -> Callable[..., Node]:
    """Build a ``tbody`` node from rows of cell texts."""

    def _build(rows: Sequence[Cells], *, italic: bool = False) -> Node:
        markup = (
            '<tbody xmlns="http://docbook.org/ns/docbook">'
            + render_rows(rows, italic=italic)
            + "</tbody>"
        )
        return parse_document(markup.encode("utf-8"))

    return _build


@pytest.fixture
def make_book() -> Callable[[str], bytes]:
    """Wrap chapter markup into a minimal DocBook document."""

    def _build(chapters: str) -> bytes:
        return (
            '<?xml version="1.0" encoding="utf-8"?>'
            '<book xmlns="http://docbook.org/ns/docbook" version="5.0">'
            f"{chapters}</book>"
        ).encode("utf-8")

    return _build


@pytest.fixture
def make_chapter() -> Callable[..., str]:
    """Render a chapter holding one table with the given rows."""

    def _build(label: str, rows: Sequence[Cells]) -> str:
        return (
            f'<chapter label="{label}"><title>Chapter {label}</title>'
            f"<table><caption>Table {label}</caption><tbody>{render_rows(rows)}</tbody></table>"
            "</chapter>"
        )

    return _build
