"""
HTTP plumbing shared by the market data clients.

Market data providers are queried with plain GET requests carrying the
API key as a query parameter. This module owns the pooled session,
the retry loop for transient failures and session cleanup, so provider
clients only build parameters and parse payloads.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_EXCEPTIONS = (requests.exceptions.Timeout, requests.exceptions.ConnectionError)


class BaseAPIClient:
    """
    GET-only HTTP client with exponential backoff.

    Transient failures (timeouts, dropped connections and 5xx responses)
    are retried up to ``max_retries`` times, sleeping
    ``retry_delay * 2**attempt`` seconds between attempts. Any other
    response is handed back untouched; interpreting 4xx codes and
    payload-level errors is the provider client's job.

    Example:
        class QuoteClient(BaseAPIClient):
            BASE_URL = "https://quotes.example.com"

            def latest(self, symbol: str) -> Dict[str, Any]:
                return self.get("/latest", params={"symbol": symbol}).json()
    """

    BASE_URL: str = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: int = 30,
    ):
        """
        Initialize the client and its pooled session.

        Args:
            base_url: Provider root URL; falls back to the class BASE_URL
            max_retries: Retries allowed after the first attempt
            retry_delay: Backoff base in seconds
            timeout: Per-request timeout in seconds
        """
        if base_url:
            self.BASE_URL = base_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"homepage-api {self.__class__.__name__}",
        })

        logger.info(f"{self.__class__.__name__} ready for {self.BASE_URL or '<no base url>'}")

    def _get_full_url(self, endpoint: str) -> str:
        """Join BASE_URL and an endpoint path such as ``/query``."""
        if not self.BASE_URL:
            raise ValueError(f"{self.__class__.__name__} has no BASE_URL configured")
        return f"{self.BASE_URL.rstrip('/')}/{endpoint.lstrip('/')}"

    def _should_retry(self, response: requests.Response) -> bool:
        """Whether a response is a transient provider failure."""
        return response.status_code >= 500

    def _make_request_with_retry(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Send a request, retrying transient failures with backoff.

        Args:
            method: HTTP method
            url: Full request URL
            params: Query parameters (never logged; they carry the API key)

        Returns:
            The first non-retryable response

        Raises:
            requests.exceptions.Timeout: If every attempt timed out
            requests.exceptions.ConnectionError: If every attempt failed to connect
            requests.exceptions.HTTPError: If the provider still answers 5xx
                after the last retry
        """
        attempt = 0
        while True:
            logger.debug(f"{method} {url} (attempt {attempt + 1})")
            try:
                response = self.session.request(method, url, params=params, timeout=self.timeout)
            except RETRYABLE_EXCEPTIONS as e:
                if attempt >= self.max_retries:
                    logger.error(f"Giving up on {url} after {attempt} retries: {e}")
                    raise
                reason = f"network error ({e.__class__.__name__})"
            else:
                if not self._should_retry(response):
                    logger.debug(f"{url} answered {response.status_code}")
                    return response
                if attempt >= self.max_retries:
                    logger.error(
                        f"{url} still failing with {response.status_code} "
                        f"after {attempt} retries"
                    )
                    self._handle_error_response(response)
                    return response
                reason = f"HTTP {response.status_code}"

            delay = self._calculate_backoff_delay(attempt)
            attempt += 1
            logger.warning(
                f"{reason} from {url}; retry {attempt}/{self.max_retries} in {delay}s"
            )
            time.sleep(delay)

    def _calculate_backoff_delay(self, retry_count: int) -> float:
        """Seconds to wait before retry number ``retry_count + 1``."""
        return self.retry_delay * (2 ** retry_count)

    def _handle_error_response(self, response: requests.Response) -> None:
        """
        Raise for a response that exhausted its retries.

        Raises:
            requests.exceptions.HTTPError: Always, for 4xx/5xx responses
        """
        response.raise_for_status()

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        GET an endpoint relative to BASE_URL.

        Args:
            endpoint: Endpoint path
            params: Query parameters

        Returns:
            HTTP response
        """
        return self._make_request_with_retry("GET", self._get_full_url(endpoint), params=params)

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
        logger.info(f"{self.__class__.__name__} closed")

    def __enter__(self) -> "BaseAPIClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
