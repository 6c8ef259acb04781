"""Presentation of trait reports as text lines."""

from __future__ import annotations

import typing as T

from churngraph.traits import CategoryBreakdown, TraitReport

NO_NODES_MESSAGE = "No high centrality nodes."
BREAKDOWN_HEADING = "Prevalent characteristic categories and their compositions:"


def format_percentage(value: float) -> str:
    """Render a percentage without a trailing ".0", e.g. 50.0 -> "50"."""
    return f"{value:g}"


def sort_breakdown(categories: T.Iterable[CategoryBreakdown]) -> list[CategoryBreakdown]:
    """Order categories by name and values within each category by name."""
    return [
        CategoryBreakdown(
            category=category.category,
            total=category.total,
            percentage=category.percentage,
            values=sorted(category.values, key=lambda share: share.value),
        )
        for category in sorted(categories, key=lambda c: c.category)
    ]


def format_breakdown_lines(categories: T.Iterable[CategoryBreakdown]) -> list[str]:
    """
    Format a category breakdown as report lines.

    Args:
        categories: Breakdown to format, sorted by the caller if needed

    Returns:
        One "<category>, (Total Count: <n> - <pct>%)" line per category,
        each followed by "  <value>: <count> (<pct>%)" lines
    """
    lines = []
    for category in categories:
        lines.append(
            f"{category.category}, (Total Count: {category.total} - "
            f"{format_percentage(category.percentage)}%)"
        )
        for share in category.values:
            lines.append(
                f"  {share.value}: {share.count} ({format_percentage(share.percentage)}%)"
            )
    return lines


def format_report_lines(report: TraitReport) -> list[str]:
    """
    Format a full group report with deterministic ordering.

    Args:
        report: Trait report for one customer group

    Returns:
        Report lines, or the no-nodes notice for an empty report
    """
    if report.is_empty:
        return [NO_NODES_MESSAGE]
    return [BREAKDOWN_HEADING, *format_breakdown_lines(sort_breakdown(report.categories))]
