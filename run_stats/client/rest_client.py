"""
REST Client
===========
Posts BuildStats snapshots to the statistics service.

One synchronous POST per call with an explicit timeout. No retry, no
backoff, no batching: the caller decides what a failure means. Any transport
error or non-2xx response is raised as StatsDeliveryError.
"""
import logging
from typing import Optional

import httpx

from run_stats.core.config import get_request_timeout
from run_stats.models.build_stats import BuildStats

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": "run-stats-reporter",
}


class StatsDeliveryError(Exception):
    """Raised when a snapshot could not be delivered to the statistics service."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def post_to_service(url: str, build: BuildStats, timeout: Optional[float] = None) -> int:
    """
    POST the build snapshot as JSON to ``url``.

    Returns
    -------
    int
        HTTP status code of the accepted response.
    """
    if not url:
        raise StatsDeliveryError("Statistics service URL is not configured")

    payload = build.to_payload()
    if timeout is None:
        timeout = get_request_timeout()

    try:
        with httpx.Client(headers=HEADERS, timeout=timeout) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        raise StatsDeliveryError(
            f"Statistics service rejected build {build.full_job_name}#{build.number} "
            f"with HTTP {status_code}",
            url=url,
            status_code=status_code,
        ) from e
    except httpx.HTTPError as e:
        raise StatsDeliveryError(f"Failed to reach statistics service at {url}: {e}", url=url) from e

    logger.debug("Posted build %s#%s to %s (HTTP %d)",
                 build.full_job_name, build.number, url, response.status_code)
    return response.status_code
