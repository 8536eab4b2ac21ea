"""
Models for the CRM tools exposed to the voice assistant.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class ContactSyncParams(BaseModel):
    """Arguments of the createContact tool."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    email: str | None = None
    firstName: str = ""
    lastName: str = ""
    phone: str = ""
    propertyInterest: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # The assistant sends explicit nulls for fields the caller did not give
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CallLogParams(ContactSyncParams):
    """Arguments of the logCall tool: the caller plus the call details."""

    notes: str = ""
    status: str = "COMPLETED"
    duration: int | None = None  # milliseconds
    fromNumber: str = ""
    toNumber: str = ""
    recordingUrl: str = ""
