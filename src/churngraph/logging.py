from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import rich.console as console_
import rich.table as table_
from loguru import logger

import churngraph.report as report_

if TYPE_CHECKING:
    from churngraph.pipeline import GroupResult


console = console_.Console()


def setup_logging(verbose: bool = False) -> None:
    """
    Configure loguru logging for CLI.

    Sets up colored stderr output with configurable verbosity.
    Should be called once at CLI entry point.

    Args:
        verbose: Enable DEBUG level logging. Defaults to False (INFO level).
    """
    logger.remove()  # remove default handler

    level = "DEBUG" if verbose else "INFO"

    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {message}",
        level=level,
        colorize=True,
    )


def print_success(message: str) -> None:
    """
    Print a success message with checkmark.

    Args:
        message: Success message to display
    """
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """
    Print an error message with X mark.

    Args:
        message: Error message to display
    """
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """
    Print a warning message with warning symbol.

    Args:
        message: Warning message to display
    """
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print a plain message without markup processing."""
    console.print(message, markup=False, highlight=False)


def print_group_result(group: "GroupResult") -> None:
    """
    Display the high-centrality nodes and trait breakdown of one group.

    Args:
        group: Analysis outcome for a churn-status group
    """
    console.print(f"[bold]{group.name} High Centrality Nodes[/bold]")

    if group.high_centrality_nodes:
        print_info(", ".join(str(node) for node in group.high_centrality_nodes))

    for line in report_.format_report_lines(group.report):
        print_info(line)

    if group.report.skipped_nodes:
        print_warning(f"Skipped {len(group.report.skipped_nodes)} invalid node indices")

    console.print()


def print_centrality_table(group: "GroupResult", max_rows: int = 10) -> None:
    """
    Display the highest closeness centrality scores of a group.

    Args:
        group: Analysis outcome for a churn-status group
        max_rows: Number of nodes to display. Defaults to 10.
    """
    table = table_.Table(title=f"Centrality: {group.name}", title_style="cyan")
    table.add_column("Node", style="cyan", justify="right")
    table.add_column("Closeness", justify="right")
    table.add_column("Selected", style="green")

    selected = set(group.high_centrality_nodes)
    ranked = sorted(group.centrality.items(), key=lambda item: (-item[1], item[0]))

    for node, score in ranked[:max_rows]:
        table.add_row(str(node), f"{score:.4f}", "yes" if node in selected else "-")

    console.print(table)
    console.print(f"[dim]{group.size:,} customers in group[/dim]\n")
