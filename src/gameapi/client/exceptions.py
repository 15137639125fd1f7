"""Custom exceptions for the game API client.

Transport failures, error status codes and partial bodies are reported as
result outcomes rather than raised. These exceptions cover misuse of the
client and the opt-in strict decoding mode.
"""


class GameApiError(Exception):
    """Base exception for game API client errors."""

    pass


class ClientNotConnectedError(GameApiError):
    """Raised when a request is dispatched before connect()."""

    pass


class DecodeError(GameApiError):
    """Raised by strict decoding when a body does not match its model."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []
