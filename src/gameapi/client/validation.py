"""Response classification.

A completed dispatch is classified before anything reads its body. Only a
VALID outcome may be decoded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from gameapi.client.transport import TransportResponse

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Classification of a completed request attempt."""

    TRANSPORT_FAILED = "transport_failed"  # Network, DNS, timeout
    INVALID = "invalid"  # Transport completed, response unusable
    VALID = "valid"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a response check, with the status code as a diagnostic."""

    outcome: Outcome
    status_code: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.outcome is Outcome.VALID


def is_ok(status_code: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status_code <= 299


def classify(
    succeeded: bool,
    response: TransportResponse | None,
) -> ValidationResult:
    """Classify a transport completion.

    Args:
        succeeded: Whether the transport completed the exchange.
        response: The response, or None if none was produced.

    Returns:
        TRANSPORT_FAILED when the transport failed, whatever the response.
        INVALID when no response is present or its status is not 2xx.
        VALID otherwise.
    """
    if not succeeded:
        return ValidationResult(Outcome.TRANSPORT_FAILED)
    if response is None:
        return ValidationResult(Outcome.INVALID)
    if is_ok(response.status_code):
        return ValidationResult(Outcome.VALID, response.status_code)

    logger.warning("Http response returned error code: %d", response.status_code)
    return ValidationResult(Outcome.INVALID, response.status_code)


def response_is_valid(succeeded: bool, response: TransportResponse | None) -> bool:
    """Return True only for a completed exchange with a 2xx status."""
    return classify(succeeded, response).is_valid
