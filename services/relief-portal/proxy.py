"""Fetch-and-extract wrapper behind GET /api/gfm.

Every failure on this path becomes a soft failure so callers always get a
well-formed TotalsResult and keep showing their last known totals.
"""

import logging

from models import TotalsResult
from scraper import extract_totals
from upstream_client import UpstreamClient, UpstreamError, UpstreamUnavailable

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def _soft_failure(message: str) -> TotalsResult:
    return TotalsResult(success=False, error_message=message or UNKNOWN_ERROR_MESSAGE)


def fetch_totals(url: str, client: UpstreamClient) -> TotalsResult:
    """Fetch the page at url and label its goal and raised amounts."""
    try:
        html = client.fetch_text(url)
    except UpstreamUnavailable as e:
        logger.error("Upstream unavailable after retries: %s", e)
        return _soft_failure(str(e))
    except UpstreamError as e:
        logger.error("Upstream fetch failed: %s", e)
        return _soft_failure(str(e))

    try:
        result = extract_totals(html)
    except Exception as e:
        logger.exception("Totals extraction failed for %s", url)
        return _soft_failure(str(e))

    if result.success:
        logger.info(
            "Totals for %s: goal=%s raised=%s (%s)",
            url, result.goal, result.raised, result.currency_symbol,
        )
    else:
        logger.info("No totals in page from %s", url)
    return result
