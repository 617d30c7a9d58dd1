"""
Transport collaborators that move a ``RequestDescriptor`` over the wire.

The transport owns the worker pool: ``submit`` sends the request and runs
the response handler on a worker thread, so builders never block the
caller.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

import httpx

from .config import StackConfig, get_logger
from .core.dispatch import CallbackDispatcher, Parser
from .core.errors import describe_transport_failure
from .core.request import RequestDescriptor, TransportResponse
from .core.utils import build_transport_headers
from .exceptions import ErrorMessages

T = TypeVar("T")

logger = get_logger("transport")


class Transport(ABC):
    """Sends requests and hands raw responses to a handler on a worker thread."""

    def __init__(self, max_workers: int = 4, executor: Optional[Executor] = None):
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="content-delivery"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abstractmethod
    def send(self, request: RequestDescriptor) -> TransportResponse:
        """Perform one exchange.

        Network failures should come back as a ``TransportResponse`` with
        status 0 and the failure text. Anything ``send`` raises is converted
        the same way by ``submit``.
        """

    def submit(
        self,
        request: RequestDescriptor,
        handler: Callable[[TransportResponse], T],
    ) -> "Future[T]":
        return self._executor.submit(lambda: handler(self._send_safely(request)))

    def _send_safely(self, request: RequestDescriptor) -> TransportResponse:
        """Run ``send``; any exception it raises becomes a status-0 response."""
        try:
            return self.send(request)
        except Exception as e:
            message = describe_transport_failure(e)
            logger.warning("%s %s failed: %s", request.method, request.path, message)
            return TransportResponse(status_code=0, text=message)

    def execute(
        self,
        request: RequestDescriptor,
        dispatcher: CallbackDispatcher[T],
        parser: Parser[T],
        missing_message: str = ErrorMessages.INVALID_JSON_RESPONSE,
    ) -> "Future[Optional[T]]":
        """Send ``request`` and route the outcome through ``dispatcher``."""
        return self.submit(
            request,
            lambda response: dispatcher.dispatch(response, parser, missing_message),
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)


class HttpxTransport(Transport):
    """Default transport backed by a shared ``httpx.Client``."""

    def __init__(
        self,
        config: StackConfig,
        client: Optional[httpx.Client] = None,
        executor: Optional[Executor] = None,
    ):
        super().__init__(config.max_workers, executor)
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=build_transport_headers(),
            proxy=config.http_proxy,
        )

    def send(self, request: RequestDescriptor) -> TransportResponse:
        logger.debug("%s %s", request.method, request.path)
        try:
            response = self._client.request(
                request.method,
                request.path,
                params=httpx.QueryParams(list(request.params)),
                headers=request.header_map,
            )
        except httpx.HTTPError as e:
            message = describe_transport_failure(e)
            logger.warning("%s %s failed: %s", request.method, request.path, message)
            return TransportResponse(status_code=0, text=message)

        logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
        return TransportResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        super().close()
        if self._owns_client:
            self._client.close()
