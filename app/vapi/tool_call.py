"""
Normalization of Vapi tool-call webhook payloads.

Vapi has delivered tool calls to this backend in more than one shape:

    Nested (current server messages):
        {"message": {"toolCalls": [{"id": "...",
                                    "function": {"name": "...", "arguments": {...} | "<json>"}}]}}

    Flat (legacy tool format):
        {"toolCallId": "...", "parameters": {...}}

Some routes also accept the arguments posted directly as the body
("direct" shape). Whatever the shape, routes answer with the same envelope:

    {"results": [{"toolCallId": "...", "result": {...}}]}
"""

import json
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog

logger = structlog.get_logger()

PayloadShape = Literal["nested", "flat", "direct"]

UNKNOWN_TOOL_CALL_ID = "unknown"


class UnrecognizedPayloadError(ValueError):
    """Raised when a payload matches none of the known tool-call shapes."""


@dataclass
class ToolCall:
    """A tool invocation extracted from a Vapi webhook payload."""

    id: str | None
    arguments: dict[str, Any] = field(default_factory=dict)
    shape: PayloadShape = "nested"
    name: str | None = None


def parse_arguments(raw: Any) -> dict[str, Any]:
    """
    Coerce tool-call arguments to a dict.

    Vapi sends arguments either as an object or as a JSON-encoded string.
    Anything that does not decode to an object becomes an empty dict, which
    surfaces later as a missing-field error rather than a crash.
    """
    if isinstance(raw, dict):
        return raw

    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse tool-call arguments", error=str(e))
            return {}
        if isinstance(parsed, dict):
            return parsed
        logger.warning("Tool-call arguments are not an object", type=type(parsed).__name__)
        return {}

    if raw is not None:
        logger.warning("Unexpected tool-call arguments type", type=type(raw).__name__)
    return {}


def extract_tool_call(payload: Any, allow_direct: bool = False) -> ToolCall:
    """
    Detect the payload shape and pull out the tool-call id and arguments.

    Args:
        payload: Decoded JSON body of the webhook request
        allow_direct: Treat an unrecognized body as the arguments themselves

    Returns:
        The extracted ToolCall

    Raises:
        UnrecognizedPayloadError: If no shape matches and allow_direct is False
    """
    if not isinstance(payload, dict):
        raise UnrecognizedPayloadError("Request body must be a JSON object")

    message = payload.get("message")
    tool_calls = message.get("toolCalls") if isinstance(message, dict) else None

    if isinstance(tool_calls, list) and tool_calls:
        first = tool_calls[0] if isinstance(tool_calls[0], dict) else {}
        function = first.get("function")
        if not isinstance(function, dict):
            function = {}
        return ToolCall(
            id=first.get("id"),
            arguments=parse_arguments(function.get("arguments")),
            shape="nested",
            name=function.get("name"),
        )

    if payload.get("toolCallId") and payload.get("parameters") is not None:
        return ToolCall(
            id=payload["toolCallId"],
            arguments=parse_arguments(payload["parameters"]),
            shape="flat",
        )

    if allow_direct:
        return ToolCall(
            id=payload.get("toolCallId") or UNKNOWN_TOOL_CALL_ID,
            arguments=payload,
            shape="direct",
        )

    raise UnrecognizedPayloadError("Invalid request format")


def tool_result(tool_call_id: str | None, result: dict[str, Any]) -> dict[str, Any]:
    """Wrap a result in the envelope Vapi expects."""
    return {
        "results": [
            {
                "toolCallId": tool_call_id,
                "result": result,
            }
        ]
    }
