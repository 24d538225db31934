"""
Command-Line Interface

Evaluates a captured page snapshot and prints the verdicts, either as a
rich table or as JSON. Exits non-zero when any element fails so the
check can gate CI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import load_config
from .evaluator import ContrastEvaluator
from .models import RuleReport
from .page import SnapshotError, load_snapshot


console = Console()
err_console = Console(stderr=True)

VERDICT_STYLES = {
    "passed": "green",
    "failed": "red",
    "warning": "yellow",
    "inapplicable": "dim",
}


@click.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    default="rich",
    type=click.Choice(["rich", "json"], case_sensitive=False),
    help="Output format: rich (colored terminal) or json",
)
@click.option(
    "--only",
    "only",
    default=None,
    type=click.Choice(["passed", "failed", "warning", "inapplicable"], case_sensitive=False),
    help="Only show evaluations with this verdict",
)
@click.option(
    "--env-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to .env file (defaults to ./.env)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every branch taken (DEBUG level)")
@click.version_option(version=__version__)
def main(
    snapshot: Path,
    output: str,
    only: Optional[str],
    env_file: Optional[Path],
    verbose: bool,
):
    """
    Check text contrast (ACT rule QW-ACT-R76) on a page snapshot.

    SNAPSHOT is a JSON file with the page's nodes in DOM order, each with
    its parent index, text, visibility, role, attributes and computed styles.

    Examples:

      # Rich table of every evaluated element
      act-contrast page.json

      # Only the failures, as JSON
      act-contrast page.json --only failed --output json
    """
    try:
        config = load_config(env_file)
    except ValidationError as e:
        err_console.print(f"[red]❌ Invalid configuration: {escape(str(e))}[/red]")
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )

    try:
        page = load_snapshot(snapshot)
    except SnapshotError as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(2)

    report = ContrastEvaluator(config).evaluate(page)

    if output == "json":
        _output_json(report, only)
    else:
        _output_rich(report, only, snapshot)

    sys.exit(1 if report.has_failures else 0)


def _output_rich(report: RuleReport, only: Optional[str], snapshot: Path):
    """Output evaluations as a rich table with a summary panel"""

    console.print()
    console.print(Panel.fit(
        f"[bold]Text Contrast ({report.rule_id})[/bold]\n"
        f"Snapshot: {escape(str(snapshot))}",
        border_style="cyan"
    ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Element", style="cyan", overflow="fold")
    table.add_column("Verdict", justify="center")
    table.add_column("Code", justify="center")
    table.add_column("Ratio", justify="right")
    table.add_column("Description")

    for evaluation in report.evaluations:
        if only and evaluation.verdict != only:
            continue
        style = VERDICT_STYLES[evaluation.verdict]
        ratio = ""
        if evaluation.contrast_ratio is not None:
            ratio = f"{evaluation.contrast_ratio:.2f}:1"
            if evaluation.required_ratio is not None:
                ratio += f" (>{evaluation.required_ratio:g})"
        table.add_row(
            escape(evaluation.element),
            f"[{style}]{evaluation.verdict}[/]",
            evaluation.result_code,
            ratio,
            escape(evaluation.description),
        )

    console.print(table)

    if report.has_failures:
        console.print(f"\n[bold red]✗ {report.summary()}[/bold red]")
    else:
        console.print(f"\n[bold green]✓ {report.summary()}[/bold green]")
    console.print()


def _output_json(report: RuleReport, only: Optional[str]):
    """Output evaluations as JSON"""
    if only:
        report = report.model_copy(update={
            "evaluations": [e for e in report.evaluations if e.verdict == only]
        })
    print(report.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
