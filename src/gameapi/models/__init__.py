"""Pydantic models for the game API client.

Usage:
    from gameapi.models import LoginRequest, LoginResponse
"""

from gameapi.models.api import LoginRequest, LoginResponse
from gameapi.models.base import ApiModel

__all__ = [
    # Base
    "ApiModel",
    # HTTP API
    "LoginRequest",
    "LoginResponse",
]
