"""
Vapi API client for managing the assistant's tools.
"""

from typing import Any

import httpx
import structlog

from app.vapi.config import get_vapi_config

logger = structlog.get_logger()


class VapiToolService:
    """Service for reading and updating Vapi tools."""

    def __init__(self, private_key: str | None = None, base_url: str | None = None):
        self.config = get_vapi_config()
        self.base_url = (base_url or self.config.vapi_base_url).rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {private_key or self.config.vapi_private_key}",
            "Content-Type": "application/json",
        }
        self.timeout = self.config.vapi_timeout_seconds

    async def get_tool(self, tool_id: str) -> dict[str, Any]:
        """
        Fetch a tool from Vapi.

        Args:
            tool_id: The Vapi tool ID

        Returns:
            Tool data from Vapi
        """
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.base_url}/tool/{tool_id}",
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

    async def update_tool(self, tool_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """
        Update a tool in place.

        Args:
            tool_id: The Vapi tool ID
            body: Fields to update (function, server, messages)

        Returns:
            The updated tool from Vapi

        Raises:
            httpx.HTTPError: If the Vapi API call fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.patch(
                    f"{self.base_url}/tool/{tool_id}",
                    headers=self.headers,
                    json=body,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error("Vapi tool update failed", tool_id=tool_id, error=str(e))
            raise

        logger.info(
            "Vapi tool updated",
            tool_id=tool_id,
            name=data.get("function", {}).get("name"),
        )
        return data


# Singleton instance
_vapi_tool_service: VapiToolService | None = None


def get_vapi_tool_service() -> VapiToolService:
    """Get or create the VapiToolService singleton."""
    global _vapi_tool_service
    if _vapi_tool_service is None:
        _vapi_tool_service = VapiToolService()
    return _vapi_tool_service
