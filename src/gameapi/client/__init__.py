"""HTTP client module for the game backend.

This module provides the request lifecycle: JSON codec, request builder,
shared credential store, response validation, async dispatch and the
endpoint service built on top of them.

Usage:
    from gameapi.client import GameApiService

    async with GameApiService() as api:
        result = await api.login("player@example.com", "secret")
"""

from gameapi.client.api_service import LOGIN_ROUTE, ApiResult, GameApiService
from gameapi.client.codec import decode, encode
from gameapi.client.credentials import CredentialStore
from gameapi.client.exceptions import ClientNotConnectedError, DecodeError, GameApiError
from gameapi.client.request_builder import HttpMethod, RequestBuilder
from gameapi.client.transport import CompletionHandler, Dispatcher, TransportResponse
from gameapi.client.validation import (
    Outcome,
    ValidationResult,
    classify,
    is_ok,
    response_is_valid,
)

__all__ = [
    # Service
    "GameApiService",
    "ApiResult",
    "LOGIN_ROUTE",
    # Codec
    "encode",
    "decode",
    # Requests
    "CredentialStore",
    "HttpMethod",
    "RequestBuilder",
    # Dispatch
    "CompletionHandler",
    "Dispatcher",
    "TransportResponse",
    # Validation
    "Outcome",
    "ValidationResult",
    "classify",
    "is_ok",
    "response_is_valid",
    # Errors
    "GameApiError",
    "ClientNotConnectedError",
    "DecodeError",
]
