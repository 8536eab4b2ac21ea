"""
HubSpot CRM integration.

Contact upserts keyed by email, call and meeting engagements, and
processing of HubSpot's own webhook notifications.
"""

from app.hubspot.client import HubSpotConfigError, check_connection, get_hubspot_client
from app.hubspot.crm import (
    CallData,
    ContactData,
    ContactSyncResult,
    MeetingData,
    create_meeting_engagement,
    create_or_update_contact,
    log_call_engagement,
)
from app.hubspot.events import process_events

__all__ = [
    # Client
    "HubSpotConfigError",
    "check_connection",
    "get_hubspot_client",
    # CRM
    "CallData",
    "ContactData",
    "ContactSyncResult",
    "MeetingData",
    "create_meeting_engagement",
    "create_or_update_contact",
    "log_call_engagement",
    # Webhooks
    "process_events",
]
