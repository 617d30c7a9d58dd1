"""
Custom exceptions for the content delivery SDK.

Transport and API failures are never raised: they reach the caller through
the completion callback as an ``ErrorResponse``. The exceptions below cover
the synchronous failures only.
"""

from typing import Dict, Any, Optional


class DeliveryError(Exception):
    """Base exception for synchronous SDK errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DeliveryError):
    """Raised when a required credential or identifier is missing."""

    pass


class ResponseTypeError(DeliveryError, TypeError):
    """Raised when a response field has a shape the SDK cannot accept."""

    def __init__(self, key: str, message: str):
        super().__init__(message, {"key": key})
        self.key = key


class QueryBuildError(DeliveryError):
    """Raised when a builder is asked for something it cannot express."""

    pass


class ErrorMessages:
    MISSING_API_KEY = (
        "Missing API key. Provide a valid key from your stack settings and try again."
    )
    MISSING_DELIVERY_TOKEN = (
        "Missing delivery token. Provide a valid token from your stack settings "
        "and try again."
    )
    MISSING_ENVIRONMENT = (
        "Missing environment. Provide a valid environment name and try again."
    )
    CONTENT_TYPE_UID_REQUIRED = (
        "Content type UID is required. Provide a valid UID and try again."
    )
    ENTRY_UID_REQUIRED = "Missing entry UID. Provide a valid UID and try again."
    ASSET_UID_REQUIRED = "Missing asset UID. Provide a valid UID and try again."
    GLOBAL_FIELD_UID_REQUIRED = (
        "Missing global field UID. Provide a valid UID and try again."
    )
    INVALID_COLLECTION_TYPE = (
        "Invalid type for '{key}' key. Provide {key} as a List or ArrayList "
        "and try again."
    )
    INVALID_JSON_RESPONSE = (
        "Invalid JSON response. Check the server response format and try again."
    )
    UNKNOWN_ERROR = "An unknown error occurred."
    NO_RESPONSE = "Unexpected error: No response received from server."
    EMPTY_QUERY_LIST = "At least one query is required to build a combined filter."
    NO_ENTRY_FOUND = "No entry matched the query."
