"""
Contact and engagement sync with HubSpot CRM.

Contacts are deduplicated by email. Calls and meetings are created as CRM
objects associated to the contact.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from hubspot.crm.contacts import (
    Filter,
    FilterGroup,
    PublicObjectSearchRequest,
    SimplePublicObjectInput,
    SimplePublicObjectInputForCreate,
)
from hubspot.crm.objects.calls import (
    AssociationSpec as CallAssociationSpec,
    PublicAssociationsForObject as CallAssociation,
    PublicObjectId as CallObjectId,
    SimplePublicObjectInputForCreate as CallInput,
)
from hubspot.crm.objects.meetings import (
    AssociationSpec as MeetingAssociationSpec,
    PublicAssociationsForObject as MeetingAssociation,
    PublicObjectId as MeetingObjectId,
    SimplePublicObjectInputForCreate as MeetingInput,
)

from app.config import get_settings
from app.hubspot.client import get_hubspot_client

logger = structlog.get_logger()

# HubSpot-defined association type ids
CALL_TO_CONTACT_ASSOCIATION = 194
MEETING_TO_CONTACT_ASSOCIATION = 200

CONTACT_SEARCH_PROPERTIES = ["email", "firstname", "lastname", "phone"]


@dataclass
class ContactData:
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    property_interest: str = ""


@dataclass
class CallData:
    from_number: str = ""
    to_number: str = ""
    notes: str = ""
    status: str = ""
    duration: int | None = None  # milliseconds
    recording_url: str = ""


@dataclass
class MeetingData:
    title: str
    start_time: str
    end_time: str
    description: str = ""


@dataclass
class ContactSyncResult:
    id: str
    created: bool


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _contact_properties(contact: ContactData) -> dict[str, str]:
    """Map contact fields to HubSpot properties, leaving out blanks."""
    properties = {
        "firstname": contact.first_name,
        "lastname": contact.last_name,
        "phone": contact.phone,
    }

    interest_field = get_settings().hubspot_property_interest_field
    if interest_field:
        properties[interest_field] = contact.property_interest

    return {name: value for name, value in properties.items() if value}


def find_contact_id(email: str) -> str | None:
    """Return the id of the contact with this email, if there is one."""
    client = get_hubspot_client()

    search_request = PublicObjectSearchRequest(
        filter_groups=[
            FilterGroup(filters=[Filter(property_name="email", operator="EQ", value=email)])
        ],
        sorts=[],
        properties=CONTACT_SEARCH_PROPERTIES,
        limit=1,
        after="0",
    )
    response = client.crm.contacts.search_api.do_search(
        public_object_search_request=search_request
    )

    if response.results:
        return response.results[0].id
    return None


def create_or_update_contact(contact: ContactData) -> ContactSyncResult:
    """
    Upsert a contact keyed by email.

    Args:
        contact: The caller's details

    Returns:
        The contact id and whether it was newly created

    Raises:
        HubSpotConfigError: If no access token is configured
        ApiException: If a HubSpot call fails after retries
    """
    client = get_hubspot_client()
    properties = _contact_properties(contact)

    try:
        contact_id = find_contact_id(contact.email)

        if contact_id:
            client.crm.contacts.basic_api.update(
                contact_id,
                simple_public_object_input=SimplePublicObjectInput(properties=properties),
            )
            logger.info("Updated HubSpot contact", contact_id=contact_id)
            return ContactSyncResult(id=contact_id, created=False)

        created = client.crm.contacts.basic_api.create(
            simple_public_object_input_for_create=SimplePublicObjectInputForCreate(
                properties={"email": contact.email, **properties},
                associations=[],
            )
        )
        logger.info("Created HubSpot contact", contact_id=created.id)
        return ContactSyncResult(id=created.id, created=True)

    except Exception as e:
        logger.error("Error in create_or_update_contact", error=str(e))
        raise


def log_call_engagement(contact_id: str, call: CallData) -> str:
    """Create a call record on the contact's timeline and return its id."""
    client = get_hubspot_client()

    call_input = CallInput(
        properties={
            "hs_timestamp": _now_iso(),
            "hs_call_body": call.notes or "",
            "hs_call_status": call.status or "COMPLETED",
            "hs_call_duration": str(call.duration) if call.duration is not None else "0",
            "hs_call_from_number": call.from_number,
            "hs_call_to_number": call.to_number,
            "hs_call_recording_url": call.recording_url or "",
        },
        associations=[
            CallAssociation(
                to=CallObjectId(id=contact_id),
                types=[
                    CallAssociationSpec(
                        association_category="HUBSPOT_DEFINED",
                        association_type_id=CALL_TO_CONTACT_ASSOCIATION,
                    )
                ],
            )
        ],
    )

    try:
        created = client.crm.objects.calls.basic_api.create(
            simple_public_object_input_for_create=call_input
        )
    except Exception as e:
        logger.error("Error in log_call_engagement", contact_id=contact_id, error=str(e))
        raise

    logger.info("Logged HubSpot call", contact_id=contact_id, call_id=created.id)
    return created.id


def create_meeting_engagement(contact_id: str, meeting: MeetingData) -> str:
    """Create a scheduled meeting associated to the contact and return its id."""
    client = get_hubspot_client()

    meeting_input = MeetingInput(
        properties={
            # Places the meeting on the contact timeline at the booked slot
            "hs_timestamp": meeting.start_time,
            "hs_meeting_title": meeting.title,
            "hs_meeting_body": meeting.description or "",
            "hs_meeting_start_time": meeting.start_time,
            "hs_meeting_end_time": meeting.end_time,
            "hs_meeting_outcome": "SCHEDULED",
        },
        associations=[
            MeetingAssociation(
                to=MeetingObjectId(id=contact_id),
                types=[
                    MeetingAssociationSpec(
                        association_category="HUBSPOT_DEFINED",
                        association_type_id=MEETING_TO_CONTACT_ASSOCIATION,
                    )
                ],
            )
        ],
    )

    try:
        created = client.crm.objects.meetings.basic_api.create(
            simple_public_object_input_for_create=meeting_input
        )
    except Exception as e:
        logger.error("Error in create_meeting_engagement", contact_id=contact_id, error=str(e))
        raise

    logger.info("Created HubSpot meeting", contact_id=contact_id, meeting_id=created.id)
    return created.id
