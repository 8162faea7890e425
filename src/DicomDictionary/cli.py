# === NAVMAP v1 ===
# {
#   "module": "DicomDictionary.cli",
#   "purpose": "Typer CLI listing PS3.6 registry entries",
#   "sections": [
#     {"id": "clicontext", "name": "CliContext", "anchor": "class-clicontext", "kind": "class"},
#     {"id": "main", "name": "main", "anchor": "function-main", "kind": "function"},
#     {"id": "elements", "name": "elements", "anchor": "function-elements", "kind": "function"},
#     {"id": "uids", "name": "uids", "anchor": "function-uids", "kind": "function"},
#     {"id": "sop-classes", "name": "sop_classes", "anchor": "function-sop-classes", "kind": "function"},
#     {"id": "version-cmd", "name": "version_cmd", "anchor": "function-version-cmd", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Typer CLI for listing the registries of DICOM PS3.6.

Global options select the source document and output format:

    dicom-dict --source part06.xml elements --registry file-meta
    dicom-dict --source part06.xml --format json uids --kind "Transfer Syntax"
    dicom-dict sop-classes              # downloads part06.xml first

Library errors are printed to stderr and exit with status 1.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .errors import DicomDictionaryError
from .formatters import (
    ELEMENT_TABLE_HEADERS,
    UID_TABLE_HEADERS,
    entries_to_json,
    format_element_rows,
    format_table,
    format_uid_rows,
)
from .kinds import UidKind, classify_uid_kind
from .logging_utils import setup_logging
from .normalize import concrete_entries, sop_class_identifier
from .parser import RegistryParser
from .records import DictionaryEntry
from .settings import DictionarySettings, load_settings

T = TypeVar("T")

_console = Console(stderr=True)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


class Registry(str, Enum):
    DATA = "data"
    FILE_META = "file-meta"
    DIRECTORY = "directory"


class CliContext:
    """Shared state for one CLI invocation."""

    def __init__(
        self,
        settings: DictionarySettings,
        source: Optional[Path] = None,
        format_output: OutputFormat = OutputFormat.TABLE,
    ) -> None:
        self.settings = settings
        self.source = source
        self.format_output = format_output
        self.console = _console
        self._parser: Optional[RegistryParser] = None

    @property
    def parser(self) -> RegistryParser:
        """Parser over ``--source`` or a downloaded part06.xml, created once."""

        if self._parser is None:
            if self.source is not None:
                self._parser = RegistryParser.from_file(self.source, settings=self.settings)
            else:
                self._parser = RegistryParser.download(settings=self.settings)
        return self._parser

    def run(self, action: Callable[[], T]) -> T:
        """Invoke ``action`` and turn library errors into exit status 1."""

        try:
            return action()
        except DicomDictionaryError as exc:
            self.console.print(f"[red]Error: {escape(str(exc))}[/red]", highlight=False)
            raise typer.Exit(1) from exc


app = typer.Typer(
    name="dicom-dict",
    help="List data elements and UIDs defined in DICOM PS3.6",
    no_args_is_help=True,
)

_context: Optional[CliContext] = None


def get_context() -> CliContext:
    if _context is None:
        raise RuntimeError("CLI context not initialized")
    return _context


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dicom-dict {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        "-s",
        envvar="DICOMDICT_SOURCE",
        help="Local part06.xml; downloaded when omitted",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="DICOMDICT_CONFIG",
        help="Path to config file (YAML or JSON)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on rows whose tag, VR or VM cell has no text",
    ),
    format_output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format: table, json",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """DICOM dictionary parser CLI."""
    global _context

    try:
        settings = load_settings(config)
    except DicomDictionaryError as exc:
        _console.print(f"[red]Error loading settings: {escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(1) from exc

    if strict:
        settings.decoding.strict = True

    if verbosity >= 2:
        level = "DEBUG"
    elif verbosity == 1:
        level = "INFO"
    else:
        level = settings.logging.level
    setup_logging(
        level=level,
        log_file=settings.logging.log_file,
        max_log_size_mb=settings.logging.max_log_size_mb,
    )

    _context = CliContext(settings=settings, source=source, format_output=format_output)


def _select_registry(parser: RegistryParser, registry: Registry) -> List[DictionaryEntry]:
    if registry is Registry.FILE_META:
        return parser.parse_file_meta_element_registry()
    if registry is Registry.DIRECTORY:
        return parser.parse_directory_structuring_element_registry()
    return parser.parse_data_element_registry()


@app.command()
def elements(
    registry: Registry = typer.Option(
        Registry.DATA,
        "--registry",
        "-r",
        help="Registry to list: data, file-meta, directory",
    ),
    concrete: bool = typer.Option(
        False,
        "--concrete",
        help="Skip range tags and entries without keyword",
    ),
) -> None:
    """List entries of a data element registry.

    Example:
        $ dicom-dict --source part06.xml elements --registry file-meta
    """
    ctx = get_context()
    entries = ctx.run(lambda: _select_registry(ctx.parser, registry))
    if concrete:
        entries = concrete_entries(entries)

    if ctx.format_output is OutputFormat.JSON:
        typer.echo(entries_to_json(entries))
    else:
        typer.echo(format_table(ELEMENT_TABLE_HEADERS, format_element_rows(entries)))


@app.command()
def uids(
    kind: Optional[str] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only list UIDs of this type, e.g. 'SOP Class'",
    ),
) -> None:
    """List entries of the UID registry.

    Example:
        $ dicom-dict --source part06.xml uids --kind "Transfer Syntax"
    """
    ctx = get_context()
    wanted: Optional[UidKind] = None
    if kind is not None:
        label = kind
        wanted = ctx.run(lambda: classify_uid_kind(label))
    entries = ctx.run(lambda: ctx.parser.parse_unique_identifier_registry())
    if wanted is not None:
        entries = [entry for entry in entries if entry.kind is wanted]

    if ctx.format_output is OutputFormat.JSON:
        typer.echo(entries_to_json(entries))
    else:
        typer.echo(format_table(UID_TABLE_HEADERS, format_uid_rows(entries)))


@app.command("sop-classes")
def sop_classes() -> None:
    """Print one identifier per SOP Class UID (e.g. ``VerificationSOPClass``)."""
    ctx = get_context()
    entries = ctx.run(lambda: ctx.parser.parse_unique_identifier_registry())
    for entry in entries:
        if entry.kind is not UidKind.SOP_CLASS:
            continue
        identifier = sop_class_identifier(entry.normalized_name)
        if identifier:
            typer.echo(identifier)


@app.command("version")
def version_cmd() -> None:
    """Show version information."""
    typer.echo(f"dicom-dict {__version__}")


__all__ = ["app", "CliContext", "get_context", "main"]
