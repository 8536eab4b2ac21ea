"""
HubSpot SDK client configuration.

Requires environment variables:
- HUBSPOT_ACCESS_TOKEN: Private app access token
"""

from functools import lru_cache

import structlog
from hubspot import HubSpot
from urllib3.util.retry import Retry

from app.config import get_settings

logger = structlog.get_logger()

# Rate limits and transient server errors are retried by the transport
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class HubSpotConfigError(RuntimeError):
    """Raised when HubSpot is used without an access token."""


@lru_cache(maxsize=1)
def get_hubspot_client() -> HubSpot:
    """Get a cached HubSpot client with retries on 429s and 5xx errors."""
    settings = get_settings()

    if not settings.hubspot_access_token:
        raise HubSpotConfigError(
            "HubSpot access token must be set. Set HUBSPOT_ACCESS_TOKEN"
        )

    retry = Retry(
        total=settings.hubspot_max_retries,
        backoff_factor=0.5,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=None,
    )
    logger.info("HubSpot client initialized", max_retries=settings.hubspot_max_retries)
    return HubSpot(access_token=settings.hubspot_access_token, retry=retry)


def check_connection() -> int:
    """Fetch one page of contacts and return how many came back."""
    client = get_hubspot_client()
    page = client.crm.contacts.basic_api.get_page(limit=10)
    return len(page.results)
