"""
Shared plumbing for the fluent request builders.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, TypeVar

from .config import get_logger
from .core.dispatch import Callback, CallbackDispatcher, Parser
from .core.filters import FilterExpression
from .core.request import (
    RequestDescriptor,
    build_request,
    merge_headers,
    with_environment,
)
from .core.utils import value_list
from .exceptions import ErrorMessages

if TYPE_CHECKING:
    from .client import Stack

T = TypeVar("T")

logger = get_logger("builder")


def prepare_request(
    stack: "Stack",
    path: str,
    local_headers: Mapping[str, Any],
    params: Mapping[str, Any],
    expression: Optional[FilterExpression] = None,
    include_empty_query: bool = False,
    send_environment: bool = True,
) -> RequestDescriptor:
    """Merge stack and local headers and freeze the request."""
    headers = merge_headers(stack.headers, local_headers)
    merged = with_environment(params, headers) if send_environment else dict(params)
    logger.debug("Prepared request for %s", path)
    return build_request(path, headers, expression, merged, include_empty_query)


def submit_request(
    stack: "Stack",
    request: RequestDescriptor,
    callback: Optional[Callback[T]],
    parser: Parser[T],
    operation: str,
    missing_message: str = ErrorMessages.INVALID_JSON_RESPONSE,
) -> "Future[Optional[T]]":
    dispatcher = CallbackDispatcher(callback, operation)
    return stack.transport.execute(request, dispatcher, parser, missing_message)


class RequestBuilder:
    """Holds builder-local headers and parameters for one logical operation."""

    def __init__(self, stack: "Stack"):
        self._stack = stack
        self.headers: Dict[str, Any] = {}
        self.params: Dict[str, Any] = {}

    @property
    def stack(self) -> "Stack":
        return self._stack

    def set_header(self, key: str, value: Any):
        """Add a header sent with this builder's requests only."""
        if key and value:
            self.headers[key] = value
        return self

    def remove_header(self, key: str):
        self.headers.pop(key, None)
        return self

    def add_param(self, key: str, value: Any):
        """Add an arbitrary query parameter; ``None`` removes it."""
        if value is None:
            self.params.pop(key, None)
        else:
            self.params[key] = value
        return self

    def _append_param(self, key: str, values: Any) -> None:
        self.params.setdefault(key, []).extend(value_list(values))

    def _prepare(
        self,
        path: str,
        expression: Optional[FilterExpression] = None,
        params: Optional[Mapping[str, Any]] = None,
        include_empty_query: bool = False,
        send_environment: bool = True,
    ) -> RequestDescriptor:
        return prepare_request(
            self._stack,
            path,
            self.headers,
            self.params if params is None else params,
            expression,
            include_empty_query,
            send_environment,
        )

    def _submit(
        self,
        request: RequestDescriptor,
        callback: Optional[Callback[T]],
        parser: Parser[T],
        operation: str,
        missing_message: str = ErrorMessages.INVALID_JSON_RESPONSE,
    ) -> "Future[Optional[T]]":
        return submit_request(
            self._stack, request, callback, parser, operation, missing_message
        )
