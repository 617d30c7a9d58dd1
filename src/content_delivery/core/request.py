"""
Pure functions for shaping requests.

Turns a filter tree plus auxiliary parameters into an immutable request
descriptor that any transport can send. Nothing here performs I/O.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from .filters import FilterExpression, compact_json

QUERY_PARAM = "query"

INCLUDE = "include[]"
ONLY_BASE = "only[BASE][]"
EXCEPT_BASE = "except[BASE][]"
ONLY_REFERENCE = "only"
EXCEPT_REFERENCE = "except"
ENVIRONMENT = "environment"

ParamPairs = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One read-only request, ready for the transport.

    Attributes:
        path: API path including the version prefix, e.g. ``/v3/assets``
        headers: Header name/value pairs sent with the request
        params: Query parameters as ordered ``(name, value)`` pairs
        method: Always ``GET`` for the delivery API
    """

    path: str
    headers: Tuple[Tuple[str, str], ...] = ()
    params: ParamPairs = ()
    method: str = field(default="GET")

    @property
    def header_map(self) -> Dict[str, str]:
        return dict(self.headers)

    def param(self, name: str) -> Optional[str]:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def query_string(self) -> str:
        return str(httpx.QueryParams(list(self.params)))

    def url(self, base_url: str) -> str:
        query = self.query_string()
        return f"{base_url.rstrip('/')}{self.path}" + (f"?{query}" if query else "")


def encode_param_value(value: Any) -> List[str]:
    """Encode one auxiliary parameter value into its wire strings."""
    if isinstance(value, bool):
        return ["true" if value else "false"]
    if isinstance(value, (list, tuple)):
        encoded: List[str] = []
        for item in value:
            encoded.extend(encode_param_value(item))
        return encoded
    if isinstance(value, dict):
        return [compact_json(value)]
    return [str(value)]


def serialize_filter(expression: FilterExpression) -> str:
    """Serialize a filter tree for the ``query`` parameter."""
    return expression.to_json()


def build_query_params(
    expression: Optional[FilterExpression],
    params: Mapping[str, Any],
    include_empty_query: bool = False,
) -> ParamPairs:
    """Build the ordered parameter pairs for a request.

    The serialized filter tree always comes first under ``query``; auxiliary
    parameters follow in insertion order. ``None`` values are dropped.
    """
    pairs: List[Tuple[str, str]] = []

    if expression is not None and (expression or include_empty_query):
        pairs.append((QUERY_PARAM, serialize_filter(expression)))

    for name, value in params.items():
        if value is None or name == QUERY_PARAM:
            continue
        for encoded in encode_param_value(value):
            pairs.append((name, encoded))

    return tuple(pairs)


def build_request(
    path: str,
    headers: Mapping[str, Any],
    expression: Optional[FilterExpression] = None,
    params: Optional[Mapping[str, Any]] = None,
    include_empty_query: bool = False,
) -> RequestDescriptor:
    """Freeze a request for the transport."""
    frozen_headers = tuple(
        (str(name), str(value)) for name, value in headers.items() if value is not None
    )
    return RequestDescriptor(
        path=path,
        headers=frozen_headers,
        params=build_query_params(expression, params or {}, include_empty_query),
    )


def merge_headers(
    stack_headers: Mapping[str, Any], local_headers: Mapping[str, Any]
) -> Dict[str, Any]:
    """Overlay builder-local headers on the stack headers."""
    merged = dict(stack_headers)
    merged.update(local_headers)
    return merged


def with_environment(
    params: Mapping[str, Any], headers: Mapping[str, Any]
) -> Dict[str, Any]:
    """Copy the ``environment`` header into the parameters, as the API expects."""
    merged = dict(params)
    if ENVIRONMENT in headers and headers[ENVIRONMENT]:
        merged.setdefault(ENVIRONMENT, headers[ENVIRONMENT])
    return merged


@dataclass(frozen=True)
class TransportResponse:
    """
    What the transport hands back for one request.

    ``status_code`` is 0 when the exchange failed before any status arrived;
    ``text`` then carries the failure description.
    """

    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
