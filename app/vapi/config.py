"""
Vapi.ai configuration for managing the assistant's tools.

Requires environment variables:
- VAPI_PRIVATE_KEY: Private API key for the Vapi account
- SERVER_URL: Public base URL of this backend (used as the tool server URL)
- SEARCH_PROPERTIES_ID / SCHEDULE_VIEWING_ID / CREATE_CONTACT_ID / LOG_CALL_ID:
  Ids of the tools to update (any subset)
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class VapiConfig(BaseSettings):
    """Configuration for Vapi tool management."""

    # Required credentials
    vapi_private_key: str = ""

    # API settings
    vapi_base_url: str = "https://api.vapi.ai"
    vapi_timeout_seconds: float = 30.0

    # Where Vapi should send tool calls
    server_url: str = ""
    vapi_secret_token: str = ""

    # Tool ids
    search_properties_id: str = ""
    schedule_viewing_id: str = ""
    create_contact_id: str = ""
    log_call_id: str = ""

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        extra = "ignore"

    def tool_ids(self) -> dict[str, str]:
        """Configured tool ids, keyed by tool definition name."""
        ids = {
            "searchProperties": self.search_properties_id,
            "scheduleViewing": self.schedule_viewing_id,
            "createContact": self.create_contact_id,
            "logCall": self.log_call_id,
        }
        return {name: tool_id for name, tool_id in ids.items() if tool_id}


@lru_cache(maxsize=1)
def get_vapi_config() -> VapiConfig:
    """Get cached Vapi configuration from environment."""
    return VapiConfig()


def validate_vapi_config() -> bool:
    """Validate that the key and at least one tool id are present."""
    config = get_vapi_config()
    return bool(config.vapi_private_key and config.tool_ids())
