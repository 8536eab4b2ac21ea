"""
Property search and viewing scheduling for the voice assistant.

Listings come from an in-memory list until a real listings source is
connected. Scheduling validates the request, issues a confirmation number
and mirrors the booking into HubSpot when the caller gave an email.
"""

import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import structlog

from app.config import get_settings
from app.hubspot.crm import (
    ContactData,
    MeetingData,
    create_meeting_engagement,
    create_or_update_contact,
)
from app.models.property import (
    Property,
    PropertyRef,
    PropertySearchParams,
    ViewingConfirmation,
    ViewingDetails,
    ViewingScheduleParams,
)

logger = structlog.get_logger()


MOCK_PROPERTIES: list[Property] = [
    Property(
        id="prop1",
        address="123 Main St, San Francisco, CA",
        price=1200000,
        bedrooms=3,
        propertyType="Single Family Home",
        description="Beautiful home in prime location",
    ),
    Property(
        id="prop2",
        address="456 Market St, San Francisco, CA",
        price=800000,
        bedrooms=2,
        propertyType="Condo",
        description="Modern condo with city views",
    ),
    Property(
        id="prop3",
        address="789 Congress Ave, Austin, Texas",
        price=950000,
        bedrooms=3,
        propertyType="Single Family Home",
        description="Spacious family home close to downtown Austin",
    ),
    Property(
        id="prop4",
        address="101 Barton Springs Rd, Austin, Texas",
        price=750000,
        bedrooms=3,
        propertyType="Townhouse",
        description="Modern townhome with access to Barton Springs",
    ),
    Property(
        id="prop5",
        address="222 East 6th St, Austin, Texas",
        price=650000,
        bedrooms=2,
        propertyType="Condo",
        description="Downtown condo in the heart of the entertainment district",
    ),
]


class ViewingRequestError(ValueError):
    """The viewing request is incomplete or cannot be honoured."""


# ══════════════════════════════════════════════════════════
# Search
# ══════════════════════════════════════════════════════════


def search_properties(params: PropertySearchParams | None = None) -> list[Property]:
    """Filter the listings. All given filters must match."""
    params = params or PropertySearchParams()
    logger.info("Searching properties", params=params.model_dump(exclude_none=True))

    results = list(MOCK_PROPERTIES)

    price_range = params.priceRange
    if price_range is not None:
        if price_range.min is not None:
            results = [p for p in results if p.price >= price_range.min]
        if price_range.max is not None:
            results = [p for p in results if p.price <= price_range.max]

    if params.bedrooms:
        results = [p for p in results if p.bedrooms == params.bedrooms]

    if params.propertyType:
        wanted = params.propertyType.lower()
        results = [p for p in results if p.propertyType.lower() == wanted]

    if params.location:
        location = params.location.lower()
        results = [p for p in results if location in p.address.lower()]

    logger.info("Property search complete", matches=len(results))
    return results


def get_property(property_id: str) -> Property | None:
    """Look up a listing by id."""
    return next((p for p in MOCK_PROPERTIES if p.id == property_id), None)


# ══════════════════════════════════════════════════════════
# Scheduling
# ══════════════════════════════════════════════════════════


def _format_hour(hour: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"


def _parse_viewing_time(value: str, tz_name: str) -> datetime:
    """
    Parse an ISO-8601 datetime into an aware datetime in the viewing timezone.

    Naive values are taken to be in that timezone (server local time when
    none is configured).
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ViewingRequestError(
            f"Invalid datetime format: {value}. Please use ISO format YYYY-MM-DDTHH:MM:SS"
        ) from None

    tz = ZoneInfo(tz_name) if tz_name else None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz) if tz else parsed.astimezone()
    return parsed.astimezone(tz)


def _confirmation_number() -> str:
    return f"VIEW-{str(int(time.time() * 1000))[-6:]}"


def _sync_viewing_to_crm(
    params: ViewingScheduleParams,
    prop: Property,
    start: datetime,
    duration_minutes: int,
) -> None:
    """Upsert the client and book the meeting in HubSpot. Never raises."""
    if not params.clientEmail:
        logger.info("No email provided, skipping HubSpot contact creation")
        return

    first_name, _, last_name = params.clientName.strip().partition(" ")

    try:
        contact = create_or_update_contact(
            ContactData(
                email=params.clientEmail,
                first_name=first_name,
                last_name=last_name.strip(),
                phone=params.clientPhone,
                property_interest=prop.address,
            )
        )
        create_meeting_engagement(
            contact.id,
            MeetingData(
                title=f"Property viewing: {prop.address}",
                description=f"Viewing of {prop.id} booked by phone for {params.clientName}",
                start_time=start.isoformat(),
                end_time=(start + timedelta(minutes=duration_minutes)).isoformat(),
            ),
        )
        logger.info("Viewing synced to HubSpot", contact_id=contact.id)
    except Exception as e:
        # The viewing stands even if the CRM is unavailable
        logger.error("Error updating HubSpot for viewing", error=str(e))


def schedule_viewing(params: ViewingScheduleParams | None) -> ViewingConfirmation:
    """
    Validate and book a property viewing.

    Args:
        params: The scheduleViewing tool arguments

    Returns:
        Confirmation with a generated confirmation number

    Raises:
        ViewingRequestError: If a required field is missing, the property is
            unknown, or the time is invalid, in the past or outside hours
    """
    if params is None:
        raise ViewingRequestError("No parameters provided")
    if not params.propertyId:
        raise ViewingRequestError("Property ID is required")
    if not params.datetime:
        raise ViewingRequestError("Datetime is required")
    if not params.clientName:
        raise ViewingRequestError("Client name is required")
    if not params.clientPhone:
        raise ViewingRequestError("Client phone is required")

    prop = get_property(params.propertyId)
    if prop is None:
        logger.warning(
            "Property not found",
            property_id=params.propertyId,
            available=[p.id for p in MOCK_PROPERTIES],
        )
        raise ViewingRequestError(f"Property not found with ID: {params.propertyId}")

    settings = get_settings()
    start = _parse_viewing_time(params.datetime, settings.viewing_timezone)

    if start < datetime.now(timezone.utc):
        raise ViewingRequestError(
            "Cannot schedule a viewing in the past. Please select a future date and time."
        )

    if not settings.viewing_start_hour <= start.hour < settings.viewing_end_hour:
        raise ViewingRequestError(
            f"Viewings can only be scheduled between "
            f"{_format_hour(settings.viewing_start_hour)} and "
            f"{_format_hour(settings.viewing_end_hour)}."
        )

    confirmation_number = _confirmation_number()

    _sync_viewing_to_crm(params, prop, start, settings.viewing_duration_minutes)

    logger.info(
        "Viewing scheduled",
        property_id=prop.id,
        scheduled_time=params.datetime,
        confirmation_number=confirmation_number,
    )

    return ViewingConfirmation(
        details=ViewingDetails(
            confirmationNumber=confirmation_number,
            scheduledTime=params.datetime,
            propertyDetails=PropertyRef(id=prop.id, address=prop.address),
        )
    )
