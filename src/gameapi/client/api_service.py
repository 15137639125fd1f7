"""Authenticated endpoint operations for the game backend.

Every endpoint follows the same lifecycle:

    Idle -> Building -> Sent -> Validating -> {Failed, Succeeded}

The payload is encoded, a request is built with the current credential,
dispatched, and classified on completion. Only a valid response is decoded;
an optional hook may then update shared state (login stores the returned
hash) before the result is delivered to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from httpx import AsyncBaseTransport, Request
from pydantic import BaseModel

from gameapi.client.codec import decode, encode
from gameapi.client.credentials import CredentialStore
from gameapi.client.exceptions import ClientNotConnectedError
from gameapi.client.request_builder import HttpMethod, RequestBuilder
from gameapi.client.transport import Dispatcher, TransportResponse
from gameapi.client.validation import Outcome, classify
from gameapi.config import ClientConfig
from gameapi.models import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

LOGIN_ROUTE = "user/login"


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Result delivered to the caller once a request has been classified."""

    outcome: Outcome
    payload: T | None = None
    status_code: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.VALID


ResultCallback = Callable[[ApiResult[T]], None]


class GameApiService:
    """Async client for the game backend REST API.

    All requests carry the credential held by ``credentials``; a successful
    login replaces it. Pass the same CredentialStore to several services to
    share one credential between them.

    Example:
        async with GameApiService(ClientConfig(base_url="http://murk.dev/api/")) as api:
            result = await api.login("player@example.com", "secret")
            if result.succeeded:
                print(result.payload.name)
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        credentials: CredentialStore | None = None,
        transport: AsyncBaseTransport | None = None,
    ):
        """Initialize the service.

        Args:
            config: Client configuration (defaults to ClientConfig()).
            credentials: Shared credential store. A new one seeded with
                ``config.initial_credential`` is created when omitted.
            transport: Optional httpx transport passed to the dispatcher.
        """
        self.config = config or ClientConfig()
        self.credentials = credentials or CredentialStore(self.config.initial_credential)
        self.requests = RequestBuilder(self.config, self.credentials)
        self._dispatcher = Dispatcher(timeout=self.config.timeout, transport=transport)
        self._pending: set[asyncio.Future[ApiResult]] = set()

    async def __aenter__(self) -> GameApiService:
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

    async def connect(self) -> None:
        await self._dispatcher.connect()
        logger.debug("Game API service connected to %s", self.config.base_url)

    async def close(self) -> None:
        """Abandon in-flight requests and cancel their undelivered results."""
        await self._dispatcher.close()
        for future in list(self._pending):
            future.cancel()
        self._pending.clear()
        logger.debug("Game API service closed")

    # =========================================================================
    # Public API Methods
    # =========================================================================

    def login(
        self,
        email: str,
        password: str,
        on_result: ResultCallback[LoginResponse] | None = None,
    ) -> asyncio.Future[ApiResult[LoginResponse]]:
        """Log in and adopt the returned hash as the session credential.

        Args:
            email: Account email.
            password: Account password.
            on_result: Optional continuation called with the result.

        Returns:
            Future resolving to the login result. On failure the credential
            is left untouched.
        """
        request = LoginRequest(email=email, password=password)
        return self.post(
            LOGIN_ROUTE,
            request,
            LoginResponse,
            on_success=self._on_login_success,
            on_result=on_result,
        )

    def get(
        self,
        route: str,
        response_model: type[T],
        *,
        on_success: Callable[[T], None] | None = None,
        on_result: ResultCallback[T] | None = None,
    ) -> asyncio.Future[ApiResult[T]]:
        """Dispatch a GET request and decode a valid response into ``response_model``."""
        return self._call(HttpMethod.GET, route, None, response_model, on_success, on_result)

    def post(
        self,
        route: str,
        payload: BaseModel,
        response_model: type[T],
        *,
        on_success: Callable[[T], None] | None = None,
        on_result: ResultCallback[T] | None = None,
    ) -> asyncio.Future[ApiResult[T]]:
        """Dispatch a POST request with an encoded ``payload``.

        Args:
            route: Path relative to the base URL.
            payload: Request model, encoded as the JSON body.
            response_model: Model class the response body is decoded into.
            on_success: Hook run with the decoded payload before delivery,
                e.g. to update the credential.
            on_result: Optional continuation called with the result.

        Returns:
            Future resolving to the classified, decoded result. If decoding
            or ``on_success`` raises, the future fails with that exception
            and ``on_result`` is not called. An exception raised by
            ``on_result`` itself is logged and does not affect the future.
        """
        return self._call(HttpMethod.POST, route, payload, response_model, on_success, on_result)

    # =========================================================================
    # Request Lifecycle
    # =========================================================================

    def _call(
        self,
        method: HttpMethod,
        route: str,
        payload: BaseModel | None,
        response_model: type[T],
        on_success: Callable[[T], None] | None,
        on_result: ResultCallback[T] | None,
    ) -> asyncio.Future[ApiResult[T]]:
        logger.debug("Building %s %s", method.value, route)
        body = encode(payload) if payload is not None else None
        request = self.requests.build_request(route, method, body)

        future: asyncio.Future[ApiResult[T]] = asyncio.get_running_loop().create_future()
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)

        try:
            self._dispatcher.send(
                request,
                self._on_complete,
                response_model,
                future,
                on_success,
                on_result,
            )
        except ClientNotConnectedError:
            future.cancel()
            raise
        return future

    def _on_complete(
        self,
        request: Request,
        response: TransportResponse | None,
        succeeded: bool,
        response_model: type[T],
        future: asyncio.Future[ApiResult[T]],
        on_success: Callable[[T], None] | None,
        on_result: ResultCallback[T] | None,
    ) -> None:
        logger.debug("Validating %s %s", request.method, request.url)
        validation = classify(succeeded, response)

        if not validation.is_valid or response is None:
            logger.debug(
                "Failed %s %s: %s", request.method, request.url, validation.outcome.value
            )
            self._deliver(
                ApiResult(validation.outcome, status_code=validation.status_code),
                future,
                on_result,
            )
            return

        try:
            record = decode(response.body, response_model)
            if on_success is not None:
                on_success(record)
        except Exception as e:
            # The awaited future carries the error; on_result is not called
            logger.warning("Handling response of %s %s failed: %s", request.method, request.url, e)
            if not future.done():
                future.set_exception(e)
            return

        logger.debug("Succeeded %s %s", request.method, request.url)
        self._deliver(
            ApiResult(Outcome.VALID, payload=record, status_code=response.status_code),
            future,
            on_result,
        )

    def _deliver(
        self,
        result: ApiResult[T],
        future: asyncio.Future[ApiResult[T]],
        on_result: ResultCallback[T] | None,
    ) -> None:
        if not future.done():
            future.set_result(result)
        if on_result is not None:
            try:
                on_result(result)
            except Exception:
                # The future already holds the result
                logger.exception("Result continuation raised for outcome %s", result.outcome.value)

    def _on_login_success(self, response: LoginResponse) -> None:
        self.credentials.set(response.hash)
        logger.info("Logged in as id=%d name=%s", response.id, response.name)
