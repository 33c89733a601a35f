"""JSON-over-HTTP transport for outbound API calls.

The model client posts chat requests through this. Each call gets a bounded
timeout, timeouts and refused connections are retried a few times, and every
failure comes back as one exception type.
"""

import logging
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.ConnectError)


class HTTPClientError(Exception):
    """The call failed. status_code is set when the server did answer."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class HTTPClient:
    """Base for clients that POST JSON and read JSON back."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Created on first use."""
        if self._client is None:
            self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    def _post(self, path: str, body: dict) -> httpx.Response:
        return self.client.post(path, json=body, headers=self.headers)

    def post_json(self, path: str, json: dict) -> Any:
        """POST a JSON body and return the decoded reply.

        Raises:
            HTTPClientError: Error status, undecodable body, or retries used up
        """
        try:
            response = self._post(path, json)
        except httpx.TimeoutException as e:
            logger.warning(f"Timed out posting to {path}")
            raise HTTPClientError(f"Request timed out: {path}") from e
        except httpx.ConnectError as e:
            logger.warning(f"Could not connect for {path}: {e}")
            raise HTTPClientError(f"Connection failed: {path}") from e

        if response.is_error:
            logger.warning(f"HTTP {response.status_code} from {path}: {response.text[:200]}")
            raise HTTPClientError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise HTTPClientError(f"Invalid JSON from {path}", response.status_code) from e
