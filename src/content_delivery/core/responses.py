"""
Pure functions for normalizing response payloads.

Delivery API responses wrap their payload under a key (``entry``,
``entries``, ``asset``, ``assets``, ``items``...) or return it directly.
These helpers find the entity source and degrade to empty results for
malformed shapes. The one exception is a strict collection, which raises
``ResponseTypeError`` when the wrapper value is not a list.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import get_logger
from ..exceptions import ErrorMessages, ResponseTypeError
from ..models import as_int

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

logger = get_logger("responses")


def unwrap(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` when the payload carries the wrapper key."""
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload


def extract_entity(payload: Any, key: str) -> Optional[Dict[str, Any]]:
    """Extract a single entity, wrapped or bare; ``None`` when there is no object."""
    source = unwrap(payload, key)
    if isinstance(source, dict):
        return source
    return None


def extract_collection(
    payload: Any, key: str, strict: bool = False
) -> List[Dict[str, Any]]:
    """Extract the object elements of the collection under ``key``.

    Elements that are not objects are skipped. A missing key yields an empty
    list. A non-list value yields an empty list, or raises when ``strict``.
    """
    if not isinstance(payload, dict) or key not in payload or payload[key] is None:
        return []

    raw = payload[key]
    if not isinstance(raw, list):
        if strict:
            raise ResponseTypeError(
                key, ErrorMessages.INVALID_COLLECTION_TYPE.format(key=key)
            )
        logger.debug("Ignoring '%s': expected a list, got %s", key, type(raw).__name__)
        return []

    items = []
    for position, element in enumerate(raw):
        if isinstance(element, dict):
            items.append(element)
        else:
            logger.debug(
                "Skipping %s[%d]: expected an object, got %s",
                key,
                position,
                type(element).__name__,
            )
    return items


def extract_count(payload: Any, fallback: Sequence[str] = ("entries",)) -> int:
    """Read the total count: ``count`` wins, then the first numeric fallback field."""
    if not isinstance(payload, dict):
        return 0
    for key in ("count", *fallback):
        count = as_int(payload.get(key))
        if count is not None:
            return count
    return 0


def optional_list(payload: Any, key: str) -> Optional[List[Any]]:
    """Return the list under ``key`` or ``None`` when absent or not a list."""
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    return None


def optional_dict(payload: Any, key: str) -> Optional[Dict[str, Any]]:
    if isinstance(payload, dict) and isinstance(payload.get(key), dict):
        return payload[key]
    return None
