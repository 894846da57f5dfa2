"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    STATISTICS_URL         — Base URL of the statistics service (required for delivery)
    STATS_REQUEST_TIMEOUT  — Seconds before a POST to the service is abandoned (default: 10)
    CI_ROOT_URL            — Root URL reported as ciUrl when the host supplies none

Live Reconfiguration:
    Values are read from the process environment on every call rather than
    captured at import time, so a changed STATISTICS_URL applies to the next
    delivery attempt without a restart.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from run_stats.core.constants import BUILDS_RESOURCE

load_dotenv()

DEFAULT_REQUEST_TIMEOUT = 10.0


def get_statistics_url() -> str:
    return os.getenv("STATISTICS_URL", "").strip()


def get_build_endpoint() -> str:
    """Return the builds resource URL, or "" when the service is not configured."""
    base = get_statistics_url()
    if not base:
        return ""
    return f"{base.rstrip('/')}/{BUILDS_RESOURCE}"


def get_request_timeout() -> float:
    raw = os.getenv("STATS_REQUEST_TIMEOUT")
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_REQUEST_TIMEOUT


def get_ci_root_url() -> Optional[str]:
    return os.getenv("CI_ROOT_URL") or None
