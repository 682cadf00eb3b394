"""Shared HTTP plumbing for third-party provider clients."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class ProviderClient:
    """Base class holding base URL, timeout and retry policy for one provider."""

    provider_name = "provider"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.http_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.http_backoff_seconds
        self.headers = dict(headers or {})

    def _get_client(self) -> httpx.Client:
        # one client per call keeps provider clients safe to share between threads
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers=self.headers,
            follow_redirects=True,
        )

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return decoded JSON.

        Timeouts, transport errors and 429/5xx responses are retried with
        exponential backoff. Other HTTP errors raise ``ValueError``; exhausted
        transport retries raise ``ConnectionError``.
        """
        url = self._url(path)
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.request(method, url, **kwargs)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as exc:
                    status_code = exc.response.status_code
                    attempt += 1
                    if status_code not in RETRYABLE_STATUS_CODES or attempt > self.max_retries:
                        raise ValueError(
                            f"{self.provider_name} request failed with HTTP {status_code}: {exc.response.text[:200]}"
                        ) from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(
                        f"{self.provider_name} returned {status_code}, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries})"
                    )
                    time.sleep(wait_time)
                except httpx.TimeoutException as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"{self.provider_name} request timed out after {self.max_retries} retries: {exc}")
                        raise ConnectionError(f"{self.provider_name} request to {url} timed out") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"{self.provider_name} timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.TransportError, OSError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(f"Failed to connect to {self.provider_name} at {self.base_url}: {exc}") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(
                        f"{self.provider_name} network error, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {exc}"
                    )
                    time.sleep(wait_time)
                except ValueError as exc:
                    # JSON decoding failure; the provider answered but not with JSON
                    raise ValueError(f"{self.provider_name} returned an invalid JSON body") from exc
        finally:
            client.close()

    def get_json(self, path: str, **kwargs: Any) -> Any:
        return self._request("GET", path, **kwargs)

    def post_json(self, path: str, **kwargs: Any) -> Any:
        return self._request("POST", path, **kwargs)
