from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Server
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    # Vapi inbound auth
    vapi_auth_enabled: bool = False
    vapi_secret_token: str = ""

    # HubSpot
    hubspot_access_token: str = ""
    hubspot_max_retries: int = 3
    hubspot_property_interest_field: str = ""

    # Viewing scheduling
    viewing_timezone: str = ""  # empty = server local time
    viewing_start_hour: int = 9
    viewing_end_hour: int = 17
    viewing_duration_minutes: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
