"""
app/services package marker.
"""

from app.services.report_formatter import format_comparison, format_report, truncate
from app.services.ranking_service import TOP_AGENT_LIMIT, rank_contributors
from app.services.report_service import (
    DEFAULT_REPORTS,
    REPORT_PAGE_SIZE,
    ListingReportService,
    calculate_pages_processed,
    get_listing_report_service,
)

__all__ = [
    "DEFAULT_REPORTS",
    "REPORT_PAGE_SIZE",
    "TOP_AGENT_LIMIT",
    "ListingReportService",
    "calculate_pages_processed",
    "get_listing_report_service",
    "format_comparison",
    "format_report",
    "rank_contributors",
    "truncate",
]
