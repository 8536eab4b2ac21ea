"""
Models for the property tools exposed to the voice assistant.

Field names follow the camelCase keys Vapi sends and expects back.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Property(BaseModel):
    """A property listing."""

    id: str
    address: str
    price: int
    bedrooms: int
    propertyType: str
    description: str


class PriceRange(BaseModel):
    """Price bounds; Vapi's nested tool schema capitalizes the keys."""

    min: float | None = Field(default=None, validation_alias=AliasChoices("min", "Min"))
    max: float | None = Field(default=None, validation_alias=AliasChoices("max", "Max"))


class PropertySearchParams(BaseModel):
    """Filters for a property search. Every filter is optional."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    priceRange: PriceRange | None = None
    bedrooms: int | None = None
    location: str | None = None
    propertyType: str | None = None


class ViewingScheduleParams(BaseModel):
    """
    Arguments of the scheduleViewing tool.

    Everything is optional here so the scheduling service can report
    exactly which field is missing.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    propertyId: str | None = None
    datetime: str | None = None
    clientName: str | None = None
    clientPhone: str | None = None
    clientEmail: str | None = None


class PropertyRef(BaseModel):
    id: str
    address: str


class ViewingDetails(BaseModel):
    confirmationNumber: str
    scheduledTime: str
    propertyDetails: PropertyRef


class ViewingConfirmation(BaseModel):
    """Result returned to the assistant after a viewing is booked."""

    success: bool = True
    message: str = "Viewing scheduled successfully"
    details: ViewingDetails
