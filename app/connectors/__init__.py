"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, ConnectorDecodeError, ConnectorRequestError
from app.connectors.cancellation import CancellationToken, OperationCancelledError
from app.connectors.listing_api_connector import ListingAPIConnector
from app.connectors.rate_limiter import RequestGate, pacing_interval_ms
from app.connectors.retry import RetryExhaustedError, RetryPolicy

__all__ = [
    "BaseConnector",
    "CancellationToken",
    "ConnectorDecodeError",
    "ConnectorRequestError",
    "ListingAPIConnector",
    "OperationCancelledError",
    "RequestGate",
    "RetryExhaustedError",
    "RetryPolicy",
    "pacing_interval_ms",
]
