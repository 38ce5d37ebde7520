"""
graphdelta rules commands.
Inspect and validate rulesets used to categorize differences.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from graphdelta.rules.defaults import DEFAULT_RULES_PATH
from graphdelta.rules.domain.enums import RuleCategory
from graphdelta.rules.domain.models import Rule
from graphdelta.rules.infrastructure.ruleset_loader import load_ruleset
from graphdelta.shared.domain.exceptions import RuleSetError

app = typer.Typer(no_args_is_help=True)
console = Console()


def _load_or_exit(path: Path) -> List[Rule]:
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {escape(str(path))}")
        raise typer.Exit(code=1)
    try:
        return load_ruleset(path)
    except RuleSetError as e:
        console.print(f"[red]Validation Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _rules_table(rules: List[Rule]) -> Table:
    table = Table(title="Rules", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Event")
    table.add_column("Category")
    table.add_column("Changed Property", style="dim")
    for rule in rules:
        table.add_row(
            escape(rule.name),
            escape(rule.event_type),
            rule.category.value,
            escape(rule.changed_property or "-"),
        )
    return table


@app.command()
def validate(
    ruleset_file: Path = typer.Argument(..., help="Path to ruleset file (YAML or JSON)"),
):
    """
    Validate a ruleset file.

    Checks syntax, rule names, categories, operators and changed properties.

    Example:
        graphdelta rules validate rules/api-rules.yaml
    """
    console.print(Panel.fit(
        f"[bold cyan]Validating Ruleset[/bold cyan]\n"
        f"[dim]File:[/dim] {escape(str(ruleset_file))}",
        title="Validation",
        border_style="cyan",
    ))

    rules = _load_or_exit(ruleset_file)

    summary = Table(title="Validation Summary", box=box.ROUNDED, show_header=False)
    summary.add_column("Check", style="cyan bold", width=30)
    summary.add_column("Status", style="white")
    summary.add_row("Syntax", "[green]✓ Valid[/green]")
    summary.add_row("Total Rules", f"[green]{len(rules)}[/green]")
    for category in RuleCategory:
        count = sum(1 for r in rules if r.category == category)
        summary.add_row(f"{category.value} Rules", str(count))

    names = [r.name for r in rules]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        summary.add_row("Duplicate Names", f"[yellow]⚠ {escape(', '.join(duplicates))}[/yellow]")
    else:
        summary.add_row("Duplicate Names", "[green]✓ None[/green]")

    console.print(summary)
    console.print("\n[bold green]✓ Ruleset is valid[/bold green]")


@app.command("list")
def list_rules(
    ruleset_file: Optional[Path] = typer.Argument(None, help="Ruleset to list [default: packaged rules]"),
):
    """List the rules of a ruleset."""
    rules = _load_or_exit(ruleset_file or DEFAULT_RULES_PATH)
    console.print(_rules_table(rules))
