"""API middleware modules."""

from .auth import verify_vapi_secret

__all__ = ["verify_vapi_secret"]
