"""
Endpoint tests for /api/vapi/property.
"""

from app.vapi.tool_call import UNKNOWN_TOOL_CALL_ID
from testing.sample_payloads import (
    FUTURE_VIEWING_TIME,
    SAMPLE_TOOL_CALL_ID,
    SEARCH_ARGS,
    VIEWING_ARGS,
    flat_payload,
    nested_payload,
)

SEARCH_URL = "/api/vapi/property/search"
SCHEDULE_URL = "/api/vapi/property/schedule-viewing"


def _result(response):
    body = response.json()
    assert len(body["results"]) == 1
    return body["results"][0]


# ══════════════════════════════════════════════════════════
# Search
# ══════════════════════════════════════════════════════════


def test_search_nested_payload(client):
    response = client.post(SEARCH_URL, json=nested_payload(SEARCH_ARGS))

    assert response.status_code == 200
    result = _result(response)
    assert result["toolCallId"] == SAMPLE_TOOL_CALL_ID
    assert result["result"]["success"] is True
    assert [p["id"] for p in result["result"]["properties"]] == ["prop4"]
    assert result["result"]["properties"][0] == {
        "id": "prop4",
        "address": "101 Barton Springs Rd, Austin, Texas",
        "price": 750000,
        "bedrooms": 3,
        "propertyType": "Townhouse",
        "description": "Modern townhome with access to Barton Springs",
    }


def test_search_string_arguments_match_object_arguments(client):
    as_object = client.post(SEARCH_URL, json=nested_payload(SEARCH_ARGS))
    as_string = client.post(SEARCH_URL, json=nested_payload(SEARCH_ARGS, as_string=True))

    assert as_object.json() == as_string.json()


def test_search_flat_payload(client):
    response = client.post(SEARCH_URL, json=flat_payload({"location": "San Francisco"}))

    assert response.status_code == 200
    assert [p["id"] for p in _result(response)["result"]["properties"]] == ["prop1", "prop2"]


def test_search_without_filters_in_either_shape(client):
    nested = client.post(SEARCH_URL, json=nested_payload({}))
    flat = client.post(SEARCH_URL, json=flat_payload({}))

    assert nested.status_code == flat.status_code == 200
    assert len(_result(flat)["result"]["properties"]) == 5
    assert nested.json() == flat.json()


def test_search_with_no_matches_is_still_a_success(client):
    response = client.post(SEARCH_URL, json=flat_payload({"location": "Denver"}))

    assert response.status_code == 200
    assert _result(response)["result"] == {"success": True, "properties": []}


def test_nested_price_range_fills_missing_bounds(client):
    payload = nested_payload({"priceRange": {"Min": 900000}})

    response = client.post(SEARCH_URL, json=payload)

    assert [p["id"] for p in _result(response)["result"]["properties"]] == ["prop1", "prop3"]


def test_nested_price_range_with_only_max(client):
    payload = nested_payload({"priceRange": {"Max": 700000}})

    response = client.post(SEARCH_URL, json=payload)

    assert [p["id"] for p in _result(response)["result"]["properties"]] == ["prop5"]


def test_search_unrecognized_payload(client):
    response = client.post(SEARCH_URL, json={"hello": "world"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request format"}


def test_search_invalid_json(client):
    response = client.post(
        SEARCH_URL, content=b"{not json", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request format"}


def test_search_missing_tool_call_id(client):
    response = client.post(SEARCH_URL, json=nested_payload(SEARCH_ARGS, tool_call_id=None))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing toolCallId in request"}


def test_search_failure_is_wrapped(client, monkeypatch):
    def broken(params):
        raise RuntimeError("listings unavailable")

    monkeypatch.setattr("app.api.routes.properties.search_properties", broken)

    response = client.post(SEARCH_URL, json=nested_payload(SEARCH_ARGS))

    assert response.status_code == 500
    assert _result(response) == {
        "toolCallId": SAMPLE_TOOL_CALL_ID,
        "result": {
            "success": False,
            "error": "Failed to search properties",
            "message": "listings unavailable",
        },
    }


def test_search_bad_argument_types_are_wrapped(client):
    response = client.post(SEARCH_URL, json=flat_payload({"bedrooms": "lots"}))

    assert response.status_code == 500
    assert _result(response)["result"]["error"] == "Failed to search properties"


# ══════════════════════════════════════════════════════════
# Schedule viewing
# ══════════════════════════════════════════════════════════


def test_schedule_viewing_nested(client):
    response = client.post(
        SCHEDULE_URL, json=nested_payload(VIEWING_ARGS, name="scheduleViewing")
    )

    assert response.status_code == 200
    result = _result(response)
    assert result["toolCallId"] == SAMPLE_TOOL_CALL_ID
    assert result["result"]["success"] is True
    assert result["result"]["message"] == "Viewing scheduled successfully"
    details = result["result"]["details"]
    assert details["scheduledTime"] == FUTURE_VIEWING_TIME
    assert details["propertyDetails"] == {
        "id": "prop3",
        "address": "789 Congress Ave, Austin, Texas",
    }
    assert details["confirmationNumber"].startswith("VIEW-")


def test_schedule_viewing_flat(client):
    response = client.post(SCHEDULE_URL, json=flat_payload(VIEWING_ARGS))

    assert response.status_code == 200
    assert _result(response)["result"]["success"] is True


def test_schedule_viewing_direct_body(client):
    response = client.post(SCHEDULE_URL, json={"toolCallId": "direct-7", **VIEWING_ARGS})

    assert response.status_code == 200
    assert _result(response)["toolCallId"] == "direct-7"


def test_schedule_viewing_direct_body_without_id(client):
    response = client.post(SCHEDULE_URL, json=VIEWING_ARGS)

    assert response.status_code == 200
    assert _result(response)["toolCallId"] == UNKNOWN_TOOL_CALL_ID


def test_schedule_viewing_nested_without_id(client):
    response = client.post(
        SCHEDULE_URL, json=nested_payload(VIEWING_ARGS, tool_call_id=None)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing toolCallId in request"}


def test_schedule_viewing_rejects_unknown_property(client):
    payload = flat_payload({**VIEWING_ARGS, "propertyId": "prop42"})

    response = client.post(SCHEDULE_URL, json=payload)

    assert response.status_code == 400
    assert _result(response)["result"] == {
        "success": False,
        "message": "Failed to schedule viewing",
        "error": "Property not found with ID: prop42",
    }


def test_schedule_viewing_rejects_missing_phone(client):
    arguments = {k: v for k, v in VIEWING_ARGS.items() if k != "clientPhone"}

    response = client.post(SCHEDULE_URL, json=flat_payload(arguments))

    assert response.status_code == 400
    assert _result(response)["result"]["error"] == "Client phone is required"


def test_schedule_viewing_rejects_evening_slot(client):
    payload = flat_payload({**VIEWING_ARGS, "datetime": "2099-06-01T19:00:00"})

    response = client.post(SCHEDULE_URL, json=payload)

    assert response.status_code == 400
    assert "between 9 AM and 5 PM" in _result(response)["result"]["error"]


def test_schedule_viewing_unexpected_failure(client, monkeypatch):
    def broken(params):
        raise RuntimeError("calendar offline")

    monkeypatch.setattr("app.api.routes.properties.schedule_viewing", broken)

    response = client.post(SCHEDULE_URL, json=flat_payload(VIEWING_ARGS))

    assert response.status_code == 500
    assert _result(response)["result"] == {
        "success": False,
        "message": "Failed to schedule viewing",
        "error": "calendar offline",
    }


def test_schedule_viewing_syncs_to_hubspot(client, hubspot_sdk):
    payload = flat_payload({**VIEWING_ARGS, "clientEmail": "jane@example.com"})

    response = client.post(SCHEDULE_URL, json=payload)

    assert response.status_code == 200
    hubspot_sdk.crm.contacts.basic_api.create.assert_called_once()
    hubspot_sdk.crm.objects.meetings.basic_api.create.assert_called_once()
