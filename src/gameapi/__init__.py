"""Authenticated HTTP client layer for the game backend API.

Usage:
    from gameapi import ClientConfig, GameApiService

    async with GameApiService(ClientConfig.from_env()) as api:
        result = await api.login("player@example.com", "secret")
"""

from gameapi.client import (
    ApiResult,
    CredentialStore,
    GameApiError,
    GameApiService,
    Outcome,
)
from gameapi.config import ClientConfig

__all__ = [
    "ApiResult",
    "ClientConfig",
    "CredentialStore",
    "GameApiError",
    "GameApiService",
    "Outcome",
]
