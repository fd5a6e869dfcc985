"""Job catalog API client with connection reuse and retry logic."""

import logging
from typing import Optional, Dict, Any, List

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

from core.exceptions import CatalogUnavailableError
from core.matcher.dto import JobPostingDTO

logger = logging.getLogger(__name__)


def _is_retryable_error(exc: Exception) -> bool:
    """
    Determine if an exception is retryable.

    Only retries on:
    - Timeouts
    - Server errors (5xx)
    - Connection errors without a response

    Does NOT retry on client errors (4xx).
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, requests.HTTPError):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None and 400 <= response.status_code < 500:
            return False
        return True

    return False


class JobCatalogClient:
    """
    Read-only client for the external job-posting catalog.

    Responsibilities:
    - Own a requests.Session for connection reuse
    - Fetch the "active postings" feed with retry on transient failures
    - Convert feed items into JobPostingDTOs
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        active_postings_path: str = "/job-posts",
        request_timeout_seconds: int = 30,
        retry_attempts: int = 3,
        retry_wait_seconds: int = 2
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Base URL for the catalog API
            active_postings_path: Path of the active postings query
            request_timeout_seconds: Default timeout for individual HTTP requests
            retry_attempts: Attempts per request before giving up
            retry_wait_seconds: Fixed wait between attempts
        """
        self.base_url = (base_url or "http://localhost:8000").rstrip("/")
        self.active_postings_path = active_postings_path
        self.request_timeout_seconds = request_timeout_seconds

        self.session = requests.Session()
        self._get_json = retry(
            stop=stop_after_attempt(max(1, retry_attempts)),
            wait=wait_fixed(retry_wait_seconds),
            retry=retry_if_exception(_is_retryable_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )(self._get_json_once)

        logger.info(
            f"JobCatalogClient initialized: base_url={self.base_url}, "
            f"request_timeout={request_timeout_seconds}s, retry_attempts={retry_attempts}"
        )

    @classmethod
    def from_config(cls, catalog_config) -> "JobCatalogClient":
        return cls(
            base_url=catalog_config.url,
            active_postings_path=catalog_config.active_postings_path,
            request_timeout_seconds=catalog_config.request_timeout_seconds,
            retry_attempts=catalog_config.retry_attempts,
            retry_wait_seconds=catalog_config.retry_wait_seconds
        )

    def _get_json_once(self, path: str, params: Dict[str, Any], timeout: float) -> Any:
        response = self.session.get(f"{self.base_url}{path}", params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()

    def fetch_active_postings(self, timeout: Optional[float] = None) -> List[JobPostingDTO]:
        """
        Fetch all currently published postings.

        Accepts either a bare JSON list or an envelope {"data": [...]}.

        Raises:
            CatalogUnavailableError: request failed after retries or the
                response body was not a posting list
        """
        timeout = timeout or self.request_timeout_seconds
        try:
            body = self._get_json(self.active_postings_path, {"status": "published"}, timeout)
        except (requests.RequestException, ValueError) as e:
            raise CatalogUnavailableError(f"Catalog request failed: {e}") from e

        items = body.get("data") if isinstance(body, dict) else body
        if not isinstance(items, list):
            raise CatalogUnavailableError("Catalog returned an unexpected response shape")

        postings = [JobPostingDTO.from_payload(item) for item in items if isinstance(item, dict)]
        logger.info(f"Fetched {len(postings)} active postings from catalog")
        return postings

    def close(self):
        """Close the session and release resources."""
        self.session.close()
        logger.info("JobCatalogClient session closed")
