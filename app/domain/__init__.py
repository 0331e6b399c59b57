"""
app/domain package marker.
"""

from app.domain.listing_report import ContributorRanking, ReportRequest, ReportResult

__all__ = [
    "ContributorRanking",
    "ReportRequest",
    "ReportResult",
]
