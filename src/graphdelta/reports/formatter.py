"""
Change report formatter.

Renders GraphChanges and CollectionChanges as JSON or as console text.
Text output is rendered by rich into an uncolored in-memory console, so
the same string can be printed or written to a file.
"""

import io
import json
from typing import Any, List, Union

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from graphdelta.changes.collection_changes import CollectionChanges
from graphdelta.changes.graph_changes import GraphChanges
from graphdelta.diff.domain.models import NodeDiff
from graphdelta.rules.domain.enums import RuleCategory
from graphdelta.shared.domain.exceptions import ReportError

FORMATS = ("json", "text")

_CATEGORY_STYLES = {
    RuleCategory.BREAKING: "red",
    RuleCategory.NON_BREAKING: "green",
    RuleCategory.IGNORED: "dim",
}

Changes = Union[GraphChanges, CollectionChanges]


def format_changes(changes: Changes, fmt: str = "text", width: int = 120) -> str:
    """
    Render changes in the requested format.

    Raises:
        ReportError: If the format is unknown
    """
    if fmt not in FORMATS:
        raise ReportError(f'Could not render format "{fmt}": supported formats are {", ".join(FORMATS)}')
    if fmt == "json":
        return json.dumps(changes.to_json(), indent=2, default=str)

    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None)
    if isinstance(changes, CollectionChanges):
        _render_collection(console, changes)
    else:
        _render_graph_changes(console, changes)
    return buffer.getvalue()


def _render_graph_changes(console: Console, changes: GraphChanges) -> None:
    console.print(f"Base: {escape(changes.base_document)}")
    console.print(f"New:  {escape(changes.new_document)}")

    if not changes.has_changes():
        console.print("No differences found")
        return

    categorized = changes.get_nodes_with_categorized_changes()
    if categorized:
        console.print(_changes_table(categorized))
        console.print(_summary_table(changes))
    else:
        console.print(_differences_table(changes.node_diffs))


def _render_collection(console: Console, changes: CollectionChanges) -> None:
    console.print(f"Base directory: {escape(changes.base_path)}")
    console.print(f"New directory:  {escape(changes.new_path)}")

    if not changes.has_changes() and not changes.has_errors():
        console.print("No differences found")
        return

    for name in changes.removed:
        console.print(f"Removed: {escape(name)}")
    for name in changes.added:
        console.print(f"Added:   {escape(name)}")
    for name, error in changes.errored.items():
        console.print(f"Failed:  {escape(name)}: {escape(error)}")

    for name, graph_changes in changes.changed.items():
        console.rule(escape(name))
        _render_graph_changes(console, graph_changes)

    if any(c.has_categorized_changes() for c in changes.changed.values()):
        console.print(_summary_rows(changes.get_category_summary(), "Total"))


def _changes_table(node_diffs: List[NodeDiff]) -> Table:
    table = Table(title="Categorized Changes", box=box.ROUNDED)
    table.add_column("Node", style="cyan", overflow="fold")
    table.add_column("Rule")
    table.add_column("Category")
    table.add_column("Change", overflow="fold")

    for node_diff in node_diffs:
        for change in node_diff.categorized_changes:
            style = _CATEGORY_STYLES[change.category]
            table.add_row(
                escape(node_diff.id),
                escape(change.rule_name),
                f"[{style}]{change.category.value}[/{style}]",
                escape(_describe_change(change.change)),
            )
    return table


def _differences_table(node_diffs: List[NodeDiff]) -> Table:
    table = Table(title="Differences", box=box.ROUNDED)
    table.add_column("Node", style="cyan", overflow="fold")
    table.add_column("Removed", overflow="fold")
    table.add_column("Added", overflow="fold")

    for node_diff in node_diffs:
        table.add_row(escape(node_diff.id), escape(_compact(node_diff.removed)), escape(_compact(node_diff.added)))
    return table


def _summary_table(changes: GraphChanges) -> Table:
    return _summary_rows(changes.get_category_summary(), "Summary")


def _summary_rows(summary: dict, title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE, show_header=False)
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for category, count in summary.items():
        table.add_row(category.value, str(count))
    return table


def _describe_change(change: Any) -> str:
    if change is None:
        return ""
    values = [v for v in change if v is not None]
    if len(values) == 2:
        return f"{_compact(values[0])} -> {_compact(values[1])}"
    if len(values) == 1:
        return _compact(values[0])
    return ""


def _compact(value: Any) -> str:
    if value is None or value == {}:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)
