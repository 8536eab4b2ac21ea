"""
Vapi integration.

Normalizes the tool-call webhooks Vapi sends to this backend and manages
the assistant's tool definitions through the Vapi API.
"""

from app.vapi.config import VapiConfig, get_vapi_config, validate_vapi_config
from app.vapi.service import VapiToolService, get_vapi_tool_service
from app.vapi.tool_call import (
    ToolCall,
    UnrecognizedPayloadError,
    extract_tool_call,
    parse_arguments,
    tool_result,
)
from app.vapi.tools import TOOL_PATHS, build_tool_update, load_tool_definition

__all__ = [
    # Config
    "VapiConfig",
    "get_vapi_config",
    "validate_vapi_config",
    # Tool calls
    "ToolCall",
    "UnrecognizedPayloadError",
    "extract_tool_call",
    "parse_arguments",
    "tool_result",
    # Tool definitions
    "TOOL_PATHS",
    "build_tool_update",
    "load_tool_definition",
    # Service
    "VapiToolService",
    "get_vapi_tool_service",
]
