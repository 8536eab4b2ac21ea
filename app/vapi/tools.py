"""
Function-calling tool definitions for the Vapi assistant.

The JSON files under ``vapi_tools/`` describe each tool's name, description
and parameter schema. Before they are sent to Vapi the server block is
filled in so tool calls reach the matching endpoint of this backend.
"""

import copy
import json
from pathlib import Path
from typing import Any

TOOL_DEFINITIONS_DIR = Path(__file__).resolve().parents[2] / "vapi_tools"

TOOL_FILES = {
    "searchProperties": "search_properties.json",
    "scheduleViewing": "schedule_viewing.json",
    "createContact": "create_contact.json",
    "logCall": "log_call.json",
}

TOOL_PATHS = {
    "searchProperties": "/api/vapi/property/search",
    "scheduleViewing": "/api/vapi/property/schedule-viewing",
    "createContact": "/api/vapi/hubspot/sync-contact",
    "logCall": "/api/vapi/hubspot/log-call",
}


def load_tool_definition(name: str, directory: Path | None = None) -> dict[str, Any]:
    """
    Load a tool definition by tool name.

    Raises:
        KeyError: If the tool name is unknown
        FileNotFoundError: If the definition file is missing
    """
    path = (directory or TOOL_DEFINITIONS_DIR) / TOOL_FILES[name]
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_tool_update(
    definition: dict[str, Any],
    server_url: str,
    path: str,
    secret: str = "",
) -> dict[str, Any]:
    """
    Build the body for Vapi's PATCH /tool/{id}.

    The tool type is fixed at creation, so it is left out of the update.
    """
    body = {k: copy.deepcopy(v) for k, v in definition.items() if k != "type"}

    server: dict[str, Any] = {"url": server_url.rstrip("/") + path}
    if secret:
        server["secret"] = secret
    body["server"] = server

    return body
