"""
app/services/report_formatter.py

Plain-text rendering of agent leaderboard reports for console output.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from app.domain.listing_report import ReportResult

REPORT_WIDTH = 80
COMPARISON_WIDTH = 100
TABLE_WIDTH = 70
NAME_COLUMN_WIDTH = 50
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def truncate(value: str | None, max_length: int) -> str:
    """
    Shorten ``value`` to ``max_length`` characters, ending with ``...`` when cut.
    """

    if not value:
        return ""
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def format_report(result: ReportResult) -> str:
    lines = [
        "",
        "=" * REPORT_WIDTH,
        f"TOP 10 REAL ESTATE AGENTS - {result.category_name.upper()}",
        "=" * REPORT_WIDTH,
        f"Search Query: {result.search_query}",
        f"Total Objects Found: {result.total_objects_found:,}",
        f"Report Date: {result.report_date:{DATE_FORMAT}} UTC",
        f"Processing Time: {result.processing_time.total_seconds():.2f} seconds",
        "",
    ]

    if result.top_agents:
        lines.append(f"{'Rank':<6} {'Real Estate Agent Name':<{NAME_COLUMN_WIDTH}} {'Properties':<10}")
        lines.append("-" * TABLE_WIDTH)
        for agent in result.top_agents:
            name = truncate(agent.agent_name, NAME_COLUMN_WIDTH - 1)
            lines.append(f"{agent.rank:<6} {name:<{NAME_COLUMN_WIDTH}} {agent.property_count:<10,}")
    else:
        lines.append("No real estate agents found for this search query.")

    lines.append("")
    return "\n".join(lines)


def format_comparison(
    results: Sequence[ReportResult],
    *,
    generated_at: datetime | None = None,
) -> str:
    """
    Render every report followed by a one-line-per-report summary.
    """

    generated = generated_at or datetime.now(timezone.utc)
    lines = [
        "",
        "=" * COMPARISON_WIDTH,
        "REAL ESTATE AGENTS REPORT",
        "=" * COMPARISON_WIDTH,
        f"Report Generated: {generated:{DATE_FORMAT}} UTC",
        "",
    ]
    lines.extend(format_report(result) for result in results)
    lines.extend(["=" * COMPARISON_WIDTH, "SUMMARY", "=" * COMPARISON_WIDTH])
    lines.extend(
        f"{result.category_name}: {result.total_objects_found:,} properties, "
        f"processed in {result.processing_time.total_seconds():.2f} seconds"
        for result in results
    )
    lines.extend(["", "Report completed successfully!", "=" * COMPARISON_WIDTH])
    return "\n".join(lines)
