"""Shared holder for the current authorization credential."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class CredentialStore:
    """Single-writer cell holding the token sent on every request.

    Reads never block and return either the previous or the newly set
    token. Writes are serialized; concurrent logins resolve last-write-wins.
    Share one instance between services to make the credential process-wide.
    """

    def __init__(self, initial: str):
        self.initial = initial
        self._token = initial
        self._lock = threading.Lock()

    def get(self) -> str:
        """Return the current credential."""
        return self._token

    def set(self, token: str) -> None:
        """Replace the current credential."""
        with self._lock:
            self._token = token
        logger.debug("Authorization credential updated")

    @property
    def is_placeholder(self) -> bool:
        """True until a credential other than the initial one has been set."""
        return self._token == self.initial
