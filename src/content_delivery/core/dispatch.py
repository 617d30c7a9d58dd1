"""
Routing of transport outcomes to completion callbacks.

A callback is any ``callable(result, error)``. For each operation it is
called exactly once: ``(value, None)`` on success or ``(None, error)`` on
failure.
"""

import json
from typing import Any, Callable, Generic, Optional, TypeVar

from ..config import get_logger
from ..exceptions import ErrorMessages
from ..models import ErrorResponse
from .errors import parse_error_body
from .request import TransportResponse

T = TypeVar("T")

Callback = Callable[[Optional[T], Optional[ErrorResponse]], None]
Parser = Callable[[Any], Optional[T]]

logger = get_logger("dispatch")


class CallbackDispatcher(Generic[T]):
    """Delivers the terminal outcome of one operation to its callback."""

    def __init__(self, callback: Optional[Callback[T]], operation: str = "request"):
        self._callback = callback
        self.operation = operation
        self.completed = False

    def _finish(self, result: Optional[T], error: Optional[ErrorResponse]) -> None:
        if self.completed:
            raise RuntimeError(f"{self.operation} already completed")
        self.completed = True
        if self._callback is not None:
            self._callback(result, error)

    def succeed(self, result: T) -> None:
        self._finish(result, None)

    def fail(self, error: ErrorResponse) -> None:
        if not error.message:
            error = ErrorResponse(ErrorMessages.UNKNOWN_ERROR, error.code, error.detail)
        self._finish(None, error)

    def dispatch(
        self,
        response: TransportResponse,
        parser: Parser[T],
        missing_message: str = ErrorMessages.INVALID_JSON_RESPONSE,
    ) -> Optional[T]:
        """Parse ``response`` and deliver the outcome.

        A parser returning ``None`` fails the operation with ``missing_message``.

        ``ResponseTypeError`` raised by ``parser`` propagates to the caller
        without reaching the callback.
        """
        if not response.ok:
            error = parse_error_body(response.text)
            logger.warning(
                "%s failed (status %s): %s", self.operation, response.status_code, error.message
            )
            self.fail(error)
            return None

        try:
            payload = json.loads(response.text) if response.text else None
        except ValueError:
            payload = None

        if payload is None:
            self.fail(ErrorResponse(ErrorMessages.INVALID_JSON_RESPONSE, response.status_code))
            return None

        result = parser(payload)
        if result is None:
            self.fail(ErrorResponse(missing_message, response.status_code))
            return None

        self.succeed(result)
        return result
