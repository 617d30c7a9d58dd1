"""
Utility functions for stack-level request details.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import urlencode

SDK_USER_AGENT = "content-delivery-sdk/1.0"


def build_stack_headers(
    api_key: str,
    delivery_token: str,
    environment: str,
    branch: Optional[str] = None,
) -> Dict[str, str]:
    """Build the static headers every delivery request carries."""
    headers = {
        "api_key": api_key,
        "access_token": delivery_token,
        "environment": environment,
    }
    if branch:
        headers["branch"] = branch
    return headers


def build_transport_headers() -> Dict[str, str]:
    return {"User-Agent": SDK_USER_AGENT, "Accept": "application/json"}


def value_list(values: Union[str, Iterable[Any]]) -> List[Any]:
    """A bare string is one value, never a sequence of characters."""
    if isinstance(values, str):
        return [values]
    return list(values)


def normalize_locale(code: str) -> str:
    """``en_us`` → ``en-us``; the API uses dashes only."""
    return code.replace("_", "-")


def format_sync_date(value: Union[str, date, datetime]) -> str:
    """Format the ``start_from`` value of a sync request as ISO-8601 UTC."""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    return value.strftime("%Y-%m-%dT00:00:00.000Z")


def image_transform_url(image_url: str, parameters: Mapping[str, Any]) -> str:
    """Append image transformation parameters to an asset URL."""
    if not parameters:
        return image_url
    separator = "&" if "?" in image_url else "?"
    return image_url + separator + urlencode({k: str(v) for k, v in parameters.items()})
