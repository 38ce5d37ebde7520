"""
graphdelta diff command.

Compute the difference between two JSON-LD API graphs.

This command has three modes: ruleset, diff-only, and directory.
  Ruleset mode (default) compares two documents and applies a ruleset to
  determine if any changes are breaking.
  Diff-only mode compares two documents without applying a ruleset.
  Directory mode compares all documents in two directories.

Exit statuses:
  0 - No breaking changes (ruleset mode) or no differences (diff-only / directory)
  1 - Breaking changes (ruleset mode) or differences found (diff-only / directory)
  2 - Evaluation could not be completed
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from graphdelta.diff.application.directory_differ import diff_directories
from graphdelta.diff.application.graph_differencer import GraphDifferencer
from graphdelta.reports.formatter import format_changes
from graphdelta.shared.domain.exceptions import GraphDeltaError
from graphdelta.shared.infrastructure.config import settings
from graphdelta.shared.infrastructure.logging import get_logger

console = Console()
logger = get_logger(__name__)

EXIT_CHANGES = 1
EXIT_FAILED = 2


class OutputFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=EXIT_FAILED)


def _resolve_format(fmt: Optional[OutputFormat], out_file: Optional[Path], diff_only: bool) -> str:
    if fmt is not None:
        return fmt.value
    if settings.output_format:
        return settings.output_format
    # Files and diff-only output default to JSON, the console to text
    return "json" if out_file or diff_only else "text"


def diff(
    base: Path = typer.Argument(..., help="The base document (ruleset / diff-only mode) or directory (directory mode)"),
    new: Path = typer.Argument(..., help="The new document (ruleset / diff-only mode) or directory (directory mode)"),
    ruleset: Optional[Path] = typer.Option(
        None, "--ruleset", "-r", help="Path to ruleset to apply to diff [default: packaged rules]"
    ),
    diff_only: bool = typer.Option(False, "--diff-only", help="Only show differences without evaluating a ruleset"),
    directory: bool = typer.Option(False, "--dir", help="Find the differences for all documents in two directories"),
    out_file: Optional[Path] = typer.Option(None, "--out-file", "-o", help="File to store the computed difference"),
    fmt: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Format of the output. Defaults to JSON if --out-file is specified, otherwise text.",
    ),
    strip_prefix: bool = typer.Option(
        False, "--strip-prefix", help="Remove each document's directory from ids before comparing"
    ),
):
    """
    Compute the difference between two JSON-LD API graphs.

    Example:
        graphdelta diff v1/shop.json v2/shop.json
        graphdelta diff --diff-only v1/shop.json v2/shop.json
        graphdelta diff --dir apis-v1 apis-v2 -o changes.json
    """
    if ruleset and (diff_only or directory):
        _fail("--ruleset cannot be combined with --diff-only or --dir")
    if diff_only and directory:
        _fail("--diff-only cannot be combined with --dir")

    output_format = _resolve_format(fmt, out_file, diff_only)

    try:
        if directory:
            changes = diff_directories(base, new, strip_prefix=strip_prefix)
            failed = changes.has_changes()
        elif diff_only:
            changes = GraphDifferencer(base, new, strip_prefix=strip_prefix).find_changes()
            failed = changes.has_changes()
        else:
            ruleset_path = ruleset or settings.diff_ruleset
            changes = GraphDifferencer(base, new, strip_prefix=strip_prefix).find_and_categorize_changes(
                ruleset_path
            )
            failed = changes.has_breaking_changes()
        output = format_changes(changes, output_format)
    except GraphDeltaError as e:
        logger.error("diff_failed", base=str(base), new=str(new), error=str(e))
        _fail(str(e))

    if out_file:
        try:
            out_file.write_text(output, encoding="utf-8")
        except OSError as e:
            _fail(f"Could not write {out_file}: {e}")
        console.print(f"[green]Changes written to {escape(str(out_file))}[/green]")
    else:
        typer.echo(output)

    if failed:
        raise typer.Exit(code=EXIT_CHANGES)
