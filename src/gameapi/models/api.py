"""HTTP API request/response models.

This module contains Pydantic models for HTTP API interactions with the game backend.
"""

from pydantic import Field

from gameapi.models.base import ApiModel

# =============================================================================
# Login API
# =============================================================================


class LoginRequest(ApiModel):
    """Request body for POST user/login endpoint."""

    email: str = ""
    password: str = Field(default="", repr=False)


class LoginResponse(ApiModel):
    """Response from POST user/login endpoint."""

    id: int = 0
    name: str = ""
    hash: str = ""  # Session credential for subsequent requests
