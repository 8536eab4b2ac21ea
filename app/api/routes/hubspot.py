"""
HubSpot endpoints.

``public_router`` holds the connectivity check and HubSpot's own webhook,
which must be reachable without the Vapi secret. ``router`` holds the Vapi
tools that write to the CRM.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.payload import read_json
from app.hubspot.crm import (
    CallData,
    ContactData,
    create_or_update_contact,
    log_call_engagement,
)
from app.hubspot.events import process_events
from app.models.contact import CallLogParams, ContactSyncParams
from app.vapi.tool_call import ToolCall, extract_tool_call, tool_result

logger = structlog.get_logger()

public_router = APIRouter()
router = APIRouter()

CONTACT_FIELDS = ("email", "firstName", "lastName", "phone", "propertyInterest")


# ══════════════════════════════════════════════════════════
# Public endpoints
# ══════════════════════════════════════════════════════════


@public_router.get("/test-connection")
async def test_connection() -> dict[str, str]:
    """Confirm the HubSpot routes are reachable."""
    return {
        "status": "success",
        "message": "HubSpot route is accessible",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@public_router.post("/webhook", response_class=PlainTextResponse)
async def hubspot_webhook(request: Request, background_tasks: BackgroundTasks) -> str:
    """
    Receive HubSpot webhook notifications.

    HubSpot retries slow deliveries, so the events are processed after the
    200 has been sent.
    """
    payload = await read_json(request)
    if payload is not None:
        background_tasks.add_task(process_events, payload)
    return "OK"


# ══════════════════════════════════════════════════════════
# Vapi tools
# ══════════════════════════════════════════════════════════


@router.post("/sync-contact")
async def sync_contact(request: Request) -> Any:
    """Create or update the caller as a HubSpot contact, keyed by email."""
    payload = await read_json(request)
    tool_call = _contact_tool_call(payload)

    if not tool_call.id:
        logger.error("Missing toolCallId in request", path=request.url.path)
        return JSONResponse(status_code=400, content={"error": "Missing toolCallId in request"})

    try:
        params = ContactSyncParams.model_validate(tool_call.arguments)
    except ValueError as e:
        return _bad_request(tool_call.id, str(e))

    if not params.email:
        logger.error("Missing required email parameter", tool_call_id=tool_call.id)
        return _bad_request(tool_call.id, "Email is required")

    try:
        result = await run_in_threadpool(create_or_update_contact, _contact_data(params))
    except Exception as e:
        logger.error("Error syncing contact to HubSpot", tool_call_id=tool_call.id, error=str(e))
        return JSONResponse(
            status_code=500,
            content=tool_result(
                tool_call.id,
                {
                    "success": False,
                    "error": "Failed to sync contact with HubSpot",
                    "details": str(e),
                },
            ),
        )

    return tool_result(
        tool_call.id,
        {
            "success": True,
            "contactId": result.id,
            "message": (
                "Contact created successfully"
                if result.created
                else "Contact updated successfully"
            ),
        },
    )


@router.post("/log-call")
async def log_call(request: Request) -> Any:
    """Record a finished call on the caller's HubSpot timeline."""
    payload = await read_json(request)
    tool_call = extract_tool_call(payload if isinstance(payload, dict) else {}, allow_direct=True)

    if not tool_call.id:
        logger.error("Missing toolCallId in request", path=request.url.path)
        return JSONResponse(status_code=400, content={"error": "Missing toolCallId in request"})

    try:
        params = CallLogParams.model_validate(tool_call.arguments)
    except ValueError as e:
        return _bad_request(tool_call.id, str(e))

    if not params.email:
        return _bad_request(tool_call.id, "Email is required")

    call = CallData(
        from_number=params.fromNumber,
        to_number=params.toNumber,
        notes=params.notes,
        status=params.status,
        duration=params.duration,
        recording_url=params.recordingUrl,
    )

    def _sync() -> tuple[str, str]:
        contact = create_or_update_contact(_contact_data(params))
        return contact.id, log_call_engagement(contact.id, call)

    try:
        contact_id, call_id = await run_in_threadpool(_sync)
    except Exception as e:
        logger.error("Error logging call to HubSpot", tool_call_id=tool_call.id, error=str(e))
        return JSONResponse(
            status_code=500,
            content=tool_result(
                tool_call.id,
                {
                    "success": False,
                    "error": "Failed to log call with HubSpot",
                    "details": str(e),
                },
            ),
        )

    return tool_result(
        tool_call.id,
        {
            "success": True,
            "contactId": contact_id,
            "callId": call_id,
            "message": "Call logged successfully",
        },
    )


# ══════════════════════════════════════════════════════════
# Helper Functions
# ══════════════════════════════════════════════════════════


def _contact_tool_call(payload: Any) -> ToolCall:
    """Extract the tool call; direct bodies only contribute contact fields."""
    tool_call = extract_tool_call(payload if isinstance(payload, dict) else {}, allow_direct=True)
    if tool_call.shape == "direct":
        tool_call.arguments = {
            name: tool_call.arguments.get(name) for name in CONTACT_FIELDS
        }
    return tool_call


def _contact_data(params: ContactSyncParams) -> ContactData:
    return ContactData(
        email=params.email,
        first_name=params.firstName,
        last_name=params.lastName,
        phone=params.phone,
        property_interest=params.propertyInterest,
    )


def _bad_request(tool_call_id: str, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=tool_result(tool_call_id, {"success": False, "error": error}),
    )
