"""
Core pure functions for the SDK.

This package contains I/O-free functions for building filter trees,
shaping requests, normalizing responses, mapping models and dispatching
callbacks.
"""

from .filters import (
    FilterExpression,
    compact_json,
    level_term,
    list_string_form,
    combine,
)

from .request import (
    RequestDescriptor,
    TransportResponse,
    build_query_params,
    build_request,
    encode_param_value,
    merge_headers,
    serialize_filter,
    with_environment,
)

from .responses import (
    JSONValue,
    unwrap,
    extract_entity,
    extract_collection,
    extract_count,
)

from .errors import (
    parse_error_body,
    classify_request_exception,
    describe_transport_failure,
)

from .mapping import (
    map_entry,
    map_asset,
    map_content_type,
    map_global_field,
    parse_publish_details,
    entry_from_response,
    entries_from_response,
    asset_from_response,
    assets_from_response,
    query_result_from_response,
    content_type_from_response,
    content_types_from_response,
    global_field_from_response,
    global_fields_from_response,
    taxonomy_result_from_response,
    sync_result_from_response,
)

from .dispatch import Callback, CallbackDispatcher

from .utils import (
    build_stack_headers,
    build_transport_headers,
    normalize_locale,
    format_sync_date,
    image_transform_url,
    value_list,
)

__all__ = [
    # Filter functions
    "FilterExpression",
    "compact_json",
    "level_term",
    "list_string_form",
    "combine",
    # Request functions
    "RequestDescriptor",
    "TransportResponse",
    "build_query_params",
    "build_request",
    "encode_param_value",
    "merge_headers",
    "serialize_filter",
    "with_environment",
    # Response functions
    "JSONValue",
    "unwrap",
    "extract_entity",
    "extract_collection",
    "extract_count",
    "parse_error_body",
    "classify_request_exception",
    "describe_transport_failure",
    # Mapping functions
    "map_entry",
    "map_asset",
    "map_content_type",
    "map_global_field",
    "parse_publish_details",
    "entry_from_response",
    "entries_from_response",
    "asset_from_response",
    "assets_from_response",
    "query_result_from_response",
    "content_type_from_response",
    "content_types_from_response",
    "global_field_from_response",
    "global_fields_from_response",
    "taxonomy_result_from_response",
    "sync_result_from_response",
    # Dispatch
    "Callback",
    "CallbackDispatcher",
    # Utils
    "build_stack_headers",
    "build_transport_headers",
    "normalize_locale",
    "format_sync_date",
    "image_transform_url",
    "value_list",
]
