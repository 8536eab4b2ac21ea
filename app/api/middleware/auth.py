"""
Shared-secret authentication for Vapi webhooks.

Vapi sends the secret configured on each tool in the ``x-vapi-secret``
header. Checking is off unless VAPI_AUTH_ENABLED is set, so tools can be
wired up before the secret is configured on both sides.
"""

import hmac
from typing import Optional

import structlog
from fastapi import HTTPException, Request, Security, status
from fastapi.security.api_key import APIKeyHeader

from app.config import get_settings

logger = structlog.get_logger()

VAPI_SECRET_HEADER = "x-vapi-secret"

vapi_secret_header = APIKeyHeader(name=VAPI_SECRET_HEADER, auto_error=False)


async def verify_vapi_secret(
    request: Request,
    secret: Optional[str] = Security(vapi_secret_header),
) -> None:
    """
    Validate the Vapi shared secret.

    Raises 500 if checking is enabled but no secret is configured, and 403
    if the header is missing or wrong.

    Usage:
        app.include_router(router, dependencies=[Depends(verify_vapi_secret)])
    """
    settings = get_settings()

    logger.debug(
        "Inbound Vapi request",
        path=request.url.path,
        vapi_secret="present" if secret else "missing",
        content_type=request.headers.get("content-type"),
        user_agent=request.headers.get("user-agent"),
    )

    if not settings.vapi_auth_enabled:
        return

    expected = settings.vapi_secret_token
    if not expected:
        logger.error("VAPI_SECRET_TOKEN not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    if not secret or not hmac.compare_digest(secret.encode(), expected.encode()):
        logger.warning("Rejected Vapi request", path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing Vapi secret token",
        )
