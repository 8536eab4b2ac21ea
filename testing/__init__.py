"""
Tests for the real estate voice assistant backend.

Contains sample Vapi payloads and the pytest suite.
"""

from testing.sample_payloads import (
    SAMPLE_TOOL_CALL_ID,
    flat_payload,
    nested_payload,
)

__all__ = [
    "SAMPLE_TOOL_CALL_ID",
    "flat_payload",
    "nested_payload",
]
