"""Asynchronous dispatch of request descriptors with cancellable handles."""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from typing import Any, Optional

import httpx

from giphy_core.client.contracts import CompletionHandler, OperationState, ResponseShape
from giphy_core.client.decoder import decode, parse_body, service_error
from giphy_core.client.errors import DecodeError, GiphyError, HTTPStatusError, TransportError
from giphy_core.client.router import RequestDescriptor
from giphy_core.config.settings import settings
from giphy_core.models import Category
from giphy_core.utils.logger import sanitize_for_log, sanitize_log_extra

logger = logging.getLogger(__name__)

_operation_ids = itertools.count(1)


class Operation:
    """
    Handle for one in-flight call.

    The state moves CREATED -> RUNNING -> one of COMPLETED, FAILED or
    CANCELLED, and the terminal transition happens exactly once. The
    completion handler only runs on COMPLETED or FAILED, so a cancelled
    handle never reports back.

    Awaiting the handle returns the decoded result, raises the
    ``GiphyError`` for a failed call, or raises ``asyncio.CancelledError``
    for a cancelled one.
    """

    def __init__(
        self,
        descriptor: RequestDescriptor,
        shape: ResponseShape,
        on_complete: Optional[CompletionHandler] = None,
        *,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.id = next(_operation_ids)
        self.descriptor = descriptor
        self.shape = shape
        self._on_complete = on_complete
        self._state = OperationState.CREATED
        self._lock = threading.Lock()
        self._loop = loop
        self._task: Optional[asyncio.Task[None]] = None
        self._outcome: asyncio.Future[Any] = loop.create_future()

    def __repr__(self) -> str:
        return f"<Operation {self.id} {self.descriptor.path} {self._state.value}>"

    def __await__(self):
        return self.wait().__await__()

    @property
    def state(self) -> OperationState:
        return self._state

    def done(self) -> bool:
        return self._state.is_terminal

    def cancelled(self) -> bool:
        return self._state is OperationState.CANCELLED

    def cancel(self) -> bool:
        """
        Cancel the call; returns False if it already reached a terminal state.

        Safe to call from any thread. Off the loop thread the task and the
        awaitable outcome are cancelled via ``call_soon_threadsafe``.
        """
        if not self._transition(OperationState.CANCELLED):
            return False
        if self._on_loop_thread():
            self._cancel_pending()
        elif not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._cancel_pending)
        logger.debug(
            "Giphy request cancelled",
            extra=sanitize_log_extra(operation_id=self.id, path=self.descriptor.path),
        )
        return True

    async def wait(self) -> Any:
        return await asyncio.shield(self._outcome)

    def _start(self, task: asyncio.Task[None]) -> None:
        with self._lock:
            if self._state is OperationState.CREATED:
                self._state = OperationState.RUNNING
        self._task = task

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def _cancel_pending(self) -> None:
        if self._task is not None:
            self._task.cancel()
        if not self._outcome.done():
            self._outcome.cancel()

    def _transition(self, target: OperationState) -> bool:
        with self._lock:
            if self._state.is_terminal:
                return False
            self._state = target
            return True

    def _resolve(self, result: Any, error: Optional[GiphyError]) -> bool:
        target = OperationState.FAILED if error is not None else OperationState.COMPLETED
        if not self._transition(target):
            return False

        if error is not None:
            self._outcome.set_exception(error)
            # Mark retrieved; callers that never await should not get a GC warning
            self._outcome.exception()
        else:
            self._outcome.set_result(result)

        if self._on_complete is not None:
            try:
                self._on_complete(result, error)
            except Exception:
                logger.exception(
                    "Completion handler raised",
                    extra=sanitize_log_extra(operation_id=self.id, path=self.descriptor.path),
                )
        return True


class Dispatcher:
    """
    Sends descriptors over an ``httpx.AsyncClient`` and decodes the replies.

    ``execute`` never blocks: it schedules a task on the running loop and
    returns the ``Operation`` handle straight away. One failed call never
    affects the dispatcher or other calls.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = (base_url or settings.GIPHY_API_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds or settings.GIPHY_REQUEST_TIMEOUT_SECONDS),
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent or settings.USER_AGENT,
            },
            transport=transport,
        )
        self._in_flight: set[Operation] = set()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def execute(
        self,
        descriptor: RequestDescriptor,
        shape: ResponseShape,
        on_complete: Optional[CompletionHandler] = None,
        *,
        root: Optional[Category] = None,
    ) -> Operation:
        """Schedule ``descriptor``; must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        operation = Operation(descriptor, shape, on_complete, loop=loop)
        task = loop.create_task(self._run(operation, root))
        self._in_flight.add(operation)
        task.add_done_callback(lambda _: self._in_flight.discard(operation))
        operation._start(task)
        logger.debug(
            "Giphy request dispatched",
            extra=sanitize_log_extra(operation_id=operation.id, path=descriptor.path, shape=shape.value),
        )
        return operation

    async def aclose(self) -> None:
        for operation in list(self._in_flight):
            operation.cancel()
        if self._owns_client:
            await self._client.aclose()

    async def _run(self, operation: Operation, root: Optional[Category]) -> None:
        descriptor = operation.descriptor
        try:
            result = await self._perform(descriptor, operation.shape, root)
        except GiphyError as exc:
            logger.warning(
                "Giphy request failed",
                extra=sanitize_log_extra(
                    operation_id=operation.id,
                    path=descriptor.path,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    status_code=getattr(exc, "status_code", None),
                ),
            )
            operation._resolve(None, exc)
        except Exception as exc:
            logger.exception(
                "Giphy request raised unexpected error",
                extra=sanitize_log_extra(operation_id=operation.id, path=descriptor.path),
            )
            operation._resolve(None, GiphyError(f"Unexpected error: {exc}"))
        else:
            operation._resolve(result, None)

    async def _perform(
        self,
        descriptor: RequestDescriptor,
        shape: ResponseShape,
        root: Optional[Category],
    ) -> Any:
        response = await self._send(descriptor)
        body = response.content

        if response.status_code >= 400:
            try:
                payload: Optional[dict[str, Any]] = parse_body(body)
            except DecodeError:
                payload = None
            raise service_error(payload, response.status_code) or HTTPStatusError(response.status_code)

        payload = parse_body(body)
        error = service_error(payload, response.status_code)
        if error is not None:
            raise error
        return decode(payload, shape, root=root)

    async def _send(self, descriptor: RequestDescriptor) -> httpx.Response:
        url = descriptor.url(self._base_url)
        try:
            return await self._client.request(descriptor.method, url)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request to {descriptor.path} timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {descriptor.path} failed: {sanitize_for_log(str(exc))}") from exc
