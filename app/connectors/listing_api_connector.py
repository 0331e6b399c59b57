"""
app/connectors/listing_api_connector.py

Paged listing feed connector.
"""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from app.config import ListingAPISettings
from app.connectors.base import BaseConnector, ConnectorDecodeError, ConnectorRequestError
from app.connectors.cancellation import CancellationToken, OperationCancelledError
from app.connectors.rate_limiter import RequestGate, pacing_interval_ms
from app.connectors.retry import RetryPolicy
from app.logging_utils import log_event
from app.schemas.listing_feed import ListingPage, ListingRecord

logger = logging.getLogger(__name__)

LISTING_TYPE = "koop"


class ListingAPIConnector(BaseConnector):
    """
    Connector for the listing partner feed.

    Pages are fetched one at a time: each request goes through the instance's
    request gate, and consecutive pages are spaced by the configured
    requests-per-minute budget.
    """

    def __init__(
        self,
        *,
        settings: ListingAPISettings,
        session: requests.Session | None = None,
        gate: RequestGate | None = None,
    ) -> None:
        super().__init__(
            source="listing_api",
            timeout_seconds=settings.http_timeout_seconds,
            retry_policy=RetryPolicy(
                max_retries=settings.retry_attempts,
                base_delay_seconds=settings.retry_delay_seconds,
            ),
            gate=gate,
            session=session,
        )
        self._settings = settings

    def build_url(self, search_query: str, page: int) -> str:
        return (
            f"{self._settings.base_url}/{self._settings.api_key}/"
            f"?type={LISTING_TYPE}&zo={search_query}&page={page}&pagesize={self._settings.page_size}"
        )

    def fetch_page(
        self,
        search_query: str,
        page: int = 1,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> ListingPage | None:
        """
        Fetch and decode one page.

        Returns None when the feed answers with a non-success status. Transport
        failures surviving the retry budget, undecodable bodies and
        cancellation are raised.
        """

        token = cancel_token or CancellationToken()
        url = self.build_url(search_query, page)
        logger.info("Fetching listing page source=%s query=%s page=%s", self.source, search_query, page)

        try:
            response = self._request(url=url, cancel_token=token)
            if not 200 <= response.status_code < 300:
                logger.error(
                    "Listing API request failed source=%s status=%s query=%s page=%s",
                    self.source,
                    response.status_code,
                    search_query,
                    page,
                )
                return None
            return self._decode_page(response)
        except OperationCancelledError:
            logger.warning(
                "Listing page fetch cancelled source=%s query=%s page=%s",
                self.source,
                search_query,
                page,
            )
            raise
        except ConnectorRequestError as exc:
            logger.error(
                "Error fetching listing page source=%s query=%s page=%s error=%s",
                self.source,
                search_query,
                page,
                exc,
            )
            raise
        except Exception:
            logger.exception(
                "Unexpected error fetching listing page source=%s query=%s page=%s",
                self.source,
                search_query,
                page,
            )
            raise

    def fetch_all(
        self,
        search_query: str,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> list[ListingRecord]:
        """
        Fetch every page for ``search_query``.

        Stops early, keeping what was collected, when a page comes back with a
        non-success status. Cancellation during a fetch or a pacing wait is
        raised rather than returned as a partial result.
        """

        token = cancel_token or CancellationToken()
        records: list[ListingRecord] = []
        page = 1
        total_pages = 1

        while True:
            listing_page = self.fetch_page(search_query, page, cancel_token=token)
            if listing_page is None:
                logger.warning(
                    "Failed to retrieve listing page source=%s query=%s page=%s records_so_far=%s",
                    self.source,
                    search_query,
                    page,
                    len(records),
                )
                break

            records.extend(listing_page.objects)
            total_pages = listing_page.paging.total_pages
            logger.info(
                "Processed listing page source=%s page=%s/%s records_so_far=%s",
                self.source,
                page,
                total_pages,
                len(records),
            )
            page += 1

            if page <= total_pages:
                self._pace(token)
            if page > total_pages or token.cancelled:
                break

        log_event(
            logger,
            logging.INFO,
            "listing_fetch_completed",
            source=self.source,
            search_query=search_query,
            pages_fetched=page - 1,
            records=len(records),
        )
        return records

    def _pace(self, cancel_token: CancellationToken) -> None:
        delay_ms = pacing_interval_ms(self._settings.max_requests_per_minute)
        cancel_token.wait(delay_ms / 1000)

    def _decode_page(self, response: requests.Response) -> ListingPage:
        payload = self._decode_json(response)
        try:
            return ListingPage.model_validate(payload)
        except ValidationError as exc:
            raise ConnectorDecodeError(
                f"{self.source}: response did not match the listing page schema."
            ) from exc
