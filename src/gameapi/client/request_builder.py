"""Outbound request construction.

Requests are plain ``httpx.Request`` values: building one never touches the
network. The authorization header holds the credential observed at build
time, not at send time.
"""

from __future__ import annotations

from enum import Enum

from httpx import Request

from gameapi.client.credentials import CredentialStore
from gameapi.config import ClientConfig

JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """HTTP verbs supported by the backend transport."""

    GET = "GET"
    POST = "POST"


class RequestBuilder:
    """Builds fully configured requests from a route and optional body.

    Example:
        builder = RequestBuilder(ClientConfig(), CredentialStore("placeholder"))
        request = builder.post_request("user/login", '{"email": "a@b.com"}')
    """

    def __init__(self, config: ClientConfig, credentials: CredentialStore):
        self.config = config
        self.credentials = credentials

    def url_for(self, route: str) -> str:
        """Return the absolute URL for a route relative to the base URL."""
        return self.config.base_url + route.lstrip("/")

    def headers(self) -> dict[str, str]:
        """Return the headers sent on every request.

        The authorization value is a snapshot of the credential store.
        """
        return {
            "User-Agent": f"X-{self.config.client_agent}",
            "Content-Type": JSON_CONTENT_TYPE,
            "Accepts": JSON_CONTENT_TYPE,
            self.config.authorization_header: self.credentials.get(),
        }

    def build_request(
        self,
        route: str,
        method: HttpMethod | str,
        body: str | None = None,
    ) -> Request:
        """Construct a request for ``route``.

        Args:
            route: Path relative to the configured base URL.
            method: GET or POST. Strings are coerced through HttpMethod.
            body: Optional JSON body.

        Returns:
            An unsent httpx Request.

        Raises:
            ValueError: If ``method`` is not a supported verb.
        """
        verb = HttpMethod(method)
        return Request(
            verb.value,
            self.url_for(route),
            headers=self.headers(),
            content=body.encode("utf-8") if body is not None else None,
        )

    def get_request(self, route: str) -> Request:
        """Construct a GET request without a body."""
        return self.build_request(route, HttpMethod.GET)

    def post_request(self, route: str, body: str) -> Request:
        """Construct a POST request carrying a JSON body."""
        return self.build_request(route, HttpMethod.POST, body)
