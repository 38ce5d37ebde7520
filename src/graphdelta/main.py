"""
graphdelta CLI
==============

The main entry point for the graphdelta command-line interface.

Usage:
    graphdelta diff <base> <new>          # Categorize changes with the default ruleset
    graphdelta diff --diff-only <b> <n>   # Raw differences as JSON
    graphdelta diff --dir <b-dir> <n-dir> # Compare two directories of documents
    graphdelta rules validate <file>      # Validate a ruleset
    graphdelta rules list [file]          # List the rules of a ruleset
    graphdelta version                    # Show version
"""

import typer
from rich.console import Console
from rich.panel import Panel

from graphdelta import __version__
from graphdelta.cli.commands import diff, rules
from graphdelta.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="graphdelta",
    help="Find and categorize changes between JSON-LD API graphs",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

app.command(name="diff")(diff.diff)
app.add_typer(rules.app, name="rules", help="Inspect and validate diff rulesets")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Find and categorize changes between JSON-LD API graphs."""
    configure_logging(level="DEBUG" if verbose else None)


@app.command()
def version():
    """Show graphdelta version information"""
    console.print(Panel.fit(
        "[bold cyan]graphdelta[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About graphdelta",
        border_style="cyan",
    ))


def main():
    """Entry point for setuptools."""
    app()


if __name__ == "__main__":
    app()
