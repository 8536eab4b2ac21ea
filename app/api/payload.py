"""
Request body helpers shared by the webhook routes.
"""

from typing import Any

import structlog
from fastapi import Request

logger = structlog.get_logger()


async def read_json(request: Request) -> Any:
    """Decode the JSON body, or return None if it is missing or invalid."""
    try:
        payload = await request.json()
    except Exception as e:
        logger.error("Failed to parse webhook payload", path=request.url.path, error=str(e))
        return None

    logger.debug("Webhook payload", path=request.url.path, payload=payload)
    return payload
