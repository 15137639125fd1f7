"""Asynchronous dispatch with completion routing.

``Dispatcher.send`` schedules a request on the running event loop and returns
at once. When the exchange finishes, the bound completion handler is called
exactly once as ``on_complete(request, response, succeeded, *bound_args)``.
Requests still in flight when the dispatcher closes are abandoned and their
handlers are never called.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable

from httpx import AsyncBaseTransport, AsyncClient, HTTPError, Request

from gameapi.client.exceptions import ClientNotConnectedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and body text of a completed exchange."""

    status_code: int
    body: str


CompletionHandler = Callable[..., None]


class Dispatcher:
    """Submits requests through a pooled httpx.AsyncClient.

    Example:
        async with Dispatcher(timeout=10.0) as dispatcher:
            task = dispatcher.send(request, on_complete, caller_id)
            await task
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: AsyncBaseTransport | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            timeout: Transport timeout in seconds. Expiry surfaces as a failed
                completion.
            transport: Optional httpx transport, e.g. httpx.MockTransport.
        """
        self.timeout = timeout
        self._transport = transport
        self._client: AsyncClient | None = None
        self._in_flight: set[asyncio.Task[None]] = set()

    async def __aenter__(self) -> Dispatcher:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def connected(self) -> bool:
        return self._client is not None

    @property
    def in_flight(self) -> int:
        """Number of dispatched requests whose completion has not run."""
        return len(self._in_flight)

    async def connect(self) -> None:
        """Create the underlying HTTP client. Safe to call repeatedly."""
        if self._client is None:
            self._client = AsyncClient(timeout=self.timeout, transport=self._transport)
            logger.debug("Dispatcher connected")

    async def close(self) -> None:
        """Abandon in-flight requests and release the HTTP client."""
        pending = list(self._in_flight)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug("Abandoned %d in-flight request(s)", len(pending))
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Dispatcher closed")

    def send(
        self,
        request: Request,
        on_complete: CompletionHandler,
        *bound_args: Any,
        **bound_kwargs: Any,
    ) -> asyncio.Task[None]:
        """Dispatch ``request`` without waiting for it.

        Args:
            request: Request produced by RequestBuilder.
            on_complete: Handler called with ``(request, response, succeeded)``
                followed by the bound arguments.
            *bound_args: Extra positional context passed to the handler.
            **bound_kwargs: Extra keyword context passed to the handler.

        Returns:
            The task running the exchange; awaiting it is optional.

        Raises:
            ClientNotConnectedError: If connect() has not been called.
        """
        if self._client is None:
            raise ClientNotConnectedError("Dispatcher not connected. Call connect() first.")

        task = asyncio.get_running_loop().create_task(
            self._process(self._client, request, on_complete, bound_args, bound_kwargs)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        logger.debug("Sent %s %s", request.method, request.url)
        return task

    async def _process(
        self,
        client: AsyncClient,
        request: Request,
        on_complete: CompletionHandler,
        bound_args: tuple[Any, ...],
        bound_kwargs: dict[str, Any],
    ) -> None:
        try:
            response = await client.send(request)
        except HTTPError as e:
            # Timeouts are HTTPError subclasses too
            logger.warning("Transport failure for %s %s: %s", request.method, request.url, e)
            on_complete(request, None, False, *bound_args, **bound_kwargs)
            return

        completed = TransportResponse(status_code=response.status_code, body=response.text)
        on_complete(request, completed, True, *bound_args, **bound_kwargs)
