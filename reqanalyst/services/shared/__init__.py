"""Pieces shared across services.

- HTTPClient: JSON-over-HTTP base with timeouts and retries
- HTTPClientError: Raised for any failed outbound call
"""

from .http_client import HTTPClient, HTTPClientError

__all__ = [
    "HTTPClient",
    "HTTPClientError",
]
