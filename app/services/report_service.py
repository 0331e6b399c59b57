"""
app/services/report_service.py

Orchestration service for agent leaderboard reports.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Final

from app.config import get_listing_api_settings
from app.connectors import BaseConnector, CancellationToken, ListingAPIConnector
from app.domain.listing_report import ReportRequest, ReportResult
from app.logging_utils import log_event
from app.services.ranking_service import TOP_AGENT_LIMIT, rank_contributors

logger = logging.getLogger(__name__)

REPORT_PAGE_SIZE: Final[int] = 25
"""Page size used to derive ``total_pages_processed`` from the record count."""

DEFAULT_REPORTS: Final[tuple[ReportRequest, ...]] = (
    ReportRequest(search_query="/amsterdam/", category_name="All Properties in Amsterdam"),
    ReportRequest(search_query="/amsterdam/tuin/", category_name="Properties with Garden in Amsterdam"),
)


def calculate_pages_processed(total_objects: int, page_size: int = REPORT_PAGE_SIZE) -> int:
    """
    Number of pages needed to hold ``total_objects`` records.
    """

    if page_size <= 0:
        raise ValueError("page_size must be positive.")
    return -(-total_objects // page_size)


class ListingReportService:
    """
    Fetches listings through a connector and builds agent leaderboards.
    """

    def __init__(
        self,
        *,
        connector: BaseConnector,
        top_n: int = TOP_AGENT_LIMIT,
    ) -> None:
        self._connector = connector
        self._top_n = top_n

    def generate_report(
        self,
        search_query: str,
        category_name: str,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ReportResult:
        """
        Build the leaderboard for one search query.

        Errors from fetching, cancellation included, are logged and re-raised.
        """

        started = time.perf_counter()
        log_event(
            logger,
            logging.INFO,
            "report_generation_started",
            category=category_name,
            search_query=search_query,
        )

        try:
            records = self._connector.fetch_all(search_query, cancel_token=cancel_token)
            rankings = rank_contributors(records, top_n=self._top_n)
        except Exception as exc:
            log_event(
                logger,
                logging.ERROR,
                "report_generation_failed",
                exc_info=True,
                category=category_name,
                search_query=search_query,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        processing_time = timedelta(seconds=time.perf_counter() - started)
        result = ReportResult(
            category_name=category_name,
            search_query=search_query,
            total_objects_found=len(records),
            total_pages_processed=calculate_pages_processed(len(records)),
            report_date=datetime.now(timezone.utc),
            processing_time=processing_time,
            top_agents=tuple(rankings),
        )
        log_event(
            logger,
            logging.INFO,
            "report_generation_completed",
            category=category_name,
            search_query=search_query,
            total_objects_found=result.total_objects_found,
            agents_ranked=len(result.top_agents),
            processing_seconds=round(processing_time.total_seconds(), 1),
        )
        return result

    def generate_reports(
        self,
        report_requests: Sequence[ReportRequest] = DEFAULT_REPORTS,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> list[ReportResult]:
        """
        Generate one report per request, in order. The first failure aborts the run.
        """

        return [
            self.generate_report(
                request.search_query,
                request.category_name,
                cancel_token=cancel_token,
            )
            for request in report_requests
        ]


@lru_cache(maxsize=1)
def get_listing_report_service() -> ListingReportService:
    """
    Build and cache the listing report service.
    """

    connector = ListingAPIConnector(settings=get_listing_api_settings())
    return ListingReportService(connector=connector)
