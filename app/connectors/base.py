"""
app/connectors/base.py

Base connector abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.connectors.cancellation import CancellationToken
from app.connectors.rate_limiter import RequestGate
from app.connectors.retry import RetryExhaustedError, RetryPolicy
from app.schemas.listing_feed import ListingRecord

logger = logging.getLogger(__name__)


class ConnectorRequestError(RuntimeError):
    """
    Raised when a connector cannot fetch data after retries.
    """


class ConnectorDecodeError(ConnectorRequestError):
    """
    Raised when a successful response body cannot be decoded.
    """


class BaseConnector(ABC):
    """
    Connector interface for fetching every listing matching a search query.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        timeout_seconds: float,
        retry_policy: RetryPolicy,
        gate: RequestGate | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = timeout_seconds
        self._retry_policy = retry_policy
        self._gate = gate or RequestGate()

    @abstractmethod
    def fetch_all(
        self,
        search_query: str,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> list[ListingRecord]:
        """
        Fetch every record for ``search_query`` across all pages.
        """

    def _request(
        self,
        *,
        url: str,
        cancel_token: CancellationToken,
    ) -> requests.Response:
        """
        Execute one GET through the request gate with transport retries.

        The response is returned whatever its status code; only transport
        failures are retried. Any requests error that is not retried, or that
        outlives the retry budget, is raised as ConnectorRequestError.
        """

        with self._gate.hold(cancel_token):
            try:
                response = self._retry_policy.execute(
                    lambda: self._session.get(url, timeout=self._timeout_seconds),
                    cancel_token=cancel_token,
                    description=f"{self.source} request",
                )
            except RetryExhaustedError as exc:
                logger.error(
                    "Connector request exhausted retries source=%s attempts=%s error=%s",
                    self.source,
                    exc.attempts,
                    exc.last_error,
                )
                raise ConnectorRequestError(
                    f"{self.source}: request failed after retries."
                ) from exc.last_error
            except requests.RequestException as exc:
                logger.error(
                    "Connector request failed source=%s error_type=%s error=%s",
                    self.source,
                    type(exc).__name__,
                    exc,
                )
                raise ConnectorRequestError(f"{self.source}: request failed.") from exc

        cancel_token.raise_if_cancelled()
        return response

    def _decode_json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ConnectorDecodeError(f"{self.source}: response was not valid JSON.") from exc
