"""
Run the real-estate agent leaderboard report from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import signal

from app.connectors import CancellationToken
from app.domain.listing_report import ReportRequest
from app.logging_utils import configure_logging
from app.services import DEFAULT_REPORTS, format_comparison, get_listing_report_service

logger = logging.getLogger(__name__)


def _parse_report(raw: str) -> ReportRequest:
    query, separator, category = raw.partition("=")
    if not separator or not query.strip() or not category.strip():
        raise argparse.ArgumentTypeError(f"Expected QUERY=CATEGORY, got '{raw}'.")
    return ReportRequest(search_query=query.strip(), category_name=category.strip())


def main() -> int:
    parser = argparse.ArgumentParser(description="Rank real-estate agents by listing count.")
    parser.add_argument(
        "--report",
        dest="reports",
        action="append",
        type=_parse_report,
        default=None,
        metavar="QUERY=CATEGORY",
        help="Search query and label to report on. Repeatable; defaults to the Amsterdam reports.",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print results as JSON instead of text tables.",
    )
    args = parser.parse_args()

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    cancel_token = CancellationToken()
    signal.signal(signal.SIGINT, lambda _signum, _frame: cancel_token.cancel())

    service = get_listing_report_service()
    try:
        results = service.generate_reports(
            args.reports or DEFAULT_REPORTS,
            cancel_token=cancel_token,
        )
    except Exception as exc:
        logger.error("Report run failed error=%s", exc)
        print(f"Error: {exc}")
        return 1

    if args.as_json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
    else:
        print(format_comparison(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
