# === NAVMAP v1 ===
# {
#   "module": "tests.conftest",
#   "purpose": "Shared pytest configuration for the suite",
#   "sections": [
#     {
#       "id": "pytest-addoption",
#       "name": "pytest_addoption",
#       "anchor": "function-pytest-addoption",
#       "kind": "function"
#     },
#     {
#       "id": "pytest-configure",
#       "name": "pytest_configure",
#       "anchor": "function-pytest-configure",
#       "kind": "function"
#     },
#     {
#       "id": "pytest-collection-modifyitems",
#       "name": "pytest_collection_modifyitems",
#       "anchor": "function-pytest-collection-modifyitems",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""
Pytest Configuration

This module configures shared pytest behaviour, including sys.path
management for `src`, a CLI option for enabling tests that download the
published part06.xml, and the test strata markers.

Key Scenarios:
- Adds a command-line switch to opt into network suites
- Applies skip markers when the switch is absent

Usage:
    pytest --help  # to inspect custom options
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--online",
        action="store_true",
        default=False,
        help="Run tests that download part06.xml from dicom.nema.org",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "network: mark test as requiring access to dicom.nema.org"
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as pure unit test (no I/O, <50ms). "
        "Use for normalizer, classifier, and row decoder tests.",
    )
    config.addinivalue_line(
        "markers",
        "component: mark test as component-level (touches one subsystem, <500ms). "
        "Use for HTTP client, settings, and CLI tests.",
    )
    config.addinivalue_line(
        "markers",
        "property: mark test as property-based (Hypothesis). "
        "Use for generative testing of keyword, name, and tag transforms.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--online"):
        return
    skip_network = pytest.mark.skip(reason="requires --online")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)
