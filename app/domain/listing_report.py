"""
app/domain/listing_report.py

Domain models for agent leaderboard reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any


@dataclass(frozen=True)
class ReportRequest:
    """
    One search query to report on, with its display label.
    """

    search_query: str
    category_name: str


@dataclass(frozen=True)
class ContributorRanking:
    """
    One leaderboard row. ``rank`` is 1-based and gap-free.
    """

    agent_name: str | None
    agent_id: int
    property_count: int
    rank: int


@dataclass(frozen=True)
class ReportResult:
    """
    Leaderboard for one search query plus run metadata.
    """

    category_name: str
    search_query: str
    total_objects_found: int
    total_pages_processed: int
    report_date: datetime
    processing_time: timedelta
    top_agents: tuple[ContributorRanking, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_name": self.category_name,
            "search_query": self.search_query,
            "total_objects_found": self.total_objects_found,
            "total_pages_processed": self.total_pages_processed,
            "report_date": self.report_date.isoformat(),
            "processing_time_seconds": round(self.processing_time.total_seconds(), 3),
            "top_agents": [
                {
                    "rank": agent.rank,
                    "agent_id": agent.agent_id,
                    "agent_name": agent.agent_name,
                    "property_count": agent.property_count,
                }
                for agent in self.top_agents
            ],
        }
