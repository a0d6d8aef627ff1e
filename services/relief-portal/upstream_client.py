"""HTTP client for fetching third-party widget pages.

Uses httpx with explicit timeouts and tenacity for retry with
exponential backoff on connection errors, timeouts and 5xx responses.
"""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import settings

logger = logging.getLogger(__name__)

TEXT_TYPE_MARKERS = ("html", "xml", "json", "javascript")


def _is_text_type(content_type: str) -> bool:
    """True for text/*, HTML, XML, JSON and script bodies. A missing content-type counts as text."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not media_type:
        return True
    return media_type.startswith("text/") or any(m in media_type for m in TEXT_TYPE_MARKERS)


class UpstreamUnavailable(Exception):
    """Upstream page is temporarily unavailable (retryable: 5xx, connection error, timeout)."""


class UpstreamError(Exception):
    """Upstream fetch failed in a way retrying will not fix (4xx, bad body, protocol error)."""


class UpstreamClient:
    """Fetches page text with browser-like headers and no caching."""

    def __init__(
        self,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        retry_backoff: float | None = None,
        user_agent: str | None = None,
    ):
        self._retry_attempts = retry_attempts if retry_attempts is not None else settings.UPSTREAM_RETRY_ATTEMPTS
        self._retry_delay = retry_delay if retry_delay is not None else settings.UPSTREAM_RETRY_DELAY
        self._retry_backoff = retry_backoff if retry_backoff is not None else settings.UPSTREAM_RETRY_BACKOFF

        read_timeout = timeout if timeout is not None else settings.UPSTREAM_TIMEOUT_SECONDS
        conn_timeout = connect_timeout if connect_timeout is not None else settings.UPSTREAM_CONNECT_TIMEOUT

        self._client = httpx.Client(
            timeout=httpx.Timeout(
                connect=float(conn_timeout),
                read=float(read_timeout),
                write=10.0,
                pool=10.0,
            ),
            follow_redirects=True,
            headers={
                "User-Agent": user_agent or settings.UPSTREAM_USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
                "Cache-Control": "no-cache",
                "Pragma": "no-cache",
            },
        )

    def close(self):
        self._client.close()

    def fetch_text(self, url: str) -> str:
        """Fetch a page and return its decoded text.

        Raises UpstreamUnavailable (after retries) or UpstreamError.
        """

        @retry(
            retry=retry_if_exception_type(UpstreamUnavailable),
            stop=stop_after_attempt(max(1, self._retry_attempts)),
            wait=wait_exponential(
                multiplier=self._retry_delay,
                exp_base=self._retry_backoff,
                max=10,
            ),
            reraise=True,
            before_sleep=lambda state: logger.warning(
                "Upstream unavailable, retrying in %.1fs (attempt %d/%d)",
                state.next_action.sleep,  # type: ignore[union-attr]
                state.attempt_number,
                self._retry_attempts,
            ),
        )
        def _do_fetch() -> str:
            return self._send_get(url)

        return _do_fetch()

    def _send_get(self, url: str) -> str:
        """Send a single GET to the upstream page."""
        try:
            resp = self._client.get(url)
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            logger.warning("Upstream fetch failed for %s: %s", url, e)
            raise UpstreamUnavailable(f"Cannot reach {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise UpstreamError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Upstream HTTP error for %s: %s", url, e)
            raise UpstreamError(f"Upstream HTTP error: {e}") from e

        if resp.status_code >= 500:
            logger.warning("Upstream returned %d for %s", resp.status_code, url)
            raise UpstreamUnavailable(f"Upstream returned HTTP {resp.status_code}")

        if not resp.is_success:
            logger.warning("Upstream returned %d for %s", resp.status_code, url)
            raise UpstreamError(f"Upstream returned HTTP {resp.status_code}")

        content_type = resp.headers.get("content-type", "")
        if not _is_text_type(content_type):
            logger.warning("Upstream returned non-text body (%s) for %s", content_type, url)
            raise UpstreamError(f"Upstream body is not text: {content_type}")

        text = resp.text

        # Page content is never logged, only its size
        logger.info("Fetched %s (%d chars)", url, len(text))
        return text
