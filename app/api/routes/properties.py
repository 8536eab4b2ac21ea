"""
Vapi tool endpoints for property search and viewing scheduling.

Mounted under /api/vapi/property behind the Vapi secret check.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.payload import read_json
from app.models.property import PriceRange, PropertySearchParams, ViewingScheduleParams
from app.services.property_service import (
    ViewingRequestError,
    schedule_viewing,
    search_properties,
)
from app.vapi.tool_call import (
    ToolCall,
    UnrecognizedPayloadError,
    extract_tool_call,
    tool_result,
)

logger = structlog.get_logger()

router = APIRouter()

# Upper bound used when the assistant gives a price range without a maximum
DEFAULT_MAX_PRICE = 10_000_000


@router.post("/search")
async def search(request: Request) -> Any:
    """
    Search listings by price range, bedrooms, property type and location.

    Accepts the nested and flat tool-call shapes only.
    """
    payload = await read_json(request)

    try:
        tool_call = extract_tool_call(payload)
    except UnrecognizedPayloadError:
        logger.error("Unrecognized request format", path=request.url.path)
        return JSONResponse(status_code=400, content={"error": "Invalid request format"})

    if not tool_call.id:
        logger.error("Missing toolCallId in request", path=request.url.path)
        return JSONResponse(status_code=400, content={"error": "Missing toolCallId in request"})

    try:
        params = _search_params(tool_call)
        properties = search_properties(params)
    except Exception as e:
        logger.error("Error searching properties", tool_call_id=tool_call.id, error=str(e))
        return JSONResponse(
            status_code=500,
            content=tool_result(
                tool_call.id,
                {
                    "success": False,
                    "error": "Failed to search properties",
                    "message": str(e),
                },
            ),
        )

    return tool_result(
        tool_call.id,
        {
            "success": True,
            "properties": [p.model_dump() for p in properties],
        },
    )


@router.post("/schedule-viewing")
async def schedule(request: Request) -> Any:
    """
    Book a viewing of a listing.

    Accepts the nested, flat and direct shapes. Validation problems are
    returned as 400 so the assistant can ask the caller again.
    """
    payload = await read_json(request)
    tool_call = extract_tool_call(payload if isinstance(payload, dict) else {}, allow_direct=True)

    if not tool_call.id:
        logger.error("Missing toolCallId in request", path=request.url.path)
        return JSONResponse(status_code=400, content={"error": "Missing toolCallId in request"})

    logger.info("Scheduling viewing", tool_call_id=tool_call.id, shape=tool_call.shape)

    try:
        params = ViewingScheduleParams.model_validate(tool_call.arguments)
        confirmation = await run_in_threadpool(schedule_viewing, params)
    except (ViewingRequestError, ValidationError) as e:
        logger.warning("Viewing request rejected", tool_call_id=tool_call.id, error=str(e))
        return _scheduling_failure(tool_call.id, 400, str(e))
    except Exception as e:
        logger.error("Error during scheduling", tool_call_id=tool_call.id, error=str(e))
        return _scheduling_failure(tool_call.id, 500, str(e))

    return tool_result(tool_call.id, confirmation.model_dump())


# ══════════════════════════════════════════════════════════
# Helper Functions
# ══════════════════════════════════════════════════════════


def _search_params(tool_call: ToolCall) -> PropertySearchParams:
    """Build search filters, filling in price bounds for nested tool calls."""
    params = PropertySearchParams.model_validate(tool_call.arguments)

    if tool_call.shape == "nested" and params.priceRange is not None:
        params.priceRange = PriceRange(
            min=params.priceRange.min or 0,
            max=params.priceRange.max or DEFAULT_MAX_PRICE,
        )

    return params


def _scheduling_failure(tool_call_id: str, status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=tool_result(
            tool_call_id,
            {
                "success": False,
                "message": "Failed to schedule viewing",
                "error": error,
            },
        ),
    )
