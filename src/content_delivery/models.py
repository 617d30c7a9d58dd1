"""
Data models for delivery API responses.

Models are built once per deserialized response item and never change
afterwards. Each one keeps its own deep copy of the source JSON so that
caller-defined fields stay reachable through the typed accessors of
``JSONFieldAccess``.
"""

import copy
import math
from dataclasses import dataclass, field
from datetime import datetime
from numbers import Number
from typing import Any, Dict, List, Optional, Tuple


def is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def as_int(value: Any, default: Any = None) -> Any:
    """Integer part of a finite JSON number; ``default`` for anything else."""
    if is_number(value) and math.isfinite(value):
        return int(value)
    return default


@dataclass(frozen=True)
class ErrorResponse:
    """
    Failure value handed to completion callbacks.

    Attributes:
        message: Human readable message, never empty
        code: API error code, 0 when the transport supplied none
        detail: Optional detail string (the API's ``errors`` field)

    Example:
        >>> def on_done(entry, error):
        ...     if error:
        ...         print(f"{error.code}: {error.message}")
    """

    message: str
    code: int = 0
    detail: Optional[str] = None


@dataclass(frozen=True)
class PublishDetails:
    """Where, when and by whom an entry or asset was last published."""

    environment: Optional[str] = None
    time: Optional[str] = None
    user: Optional[str] = None


class JSONFieldAccess:
    """Typed lookups over the raw JSON of a model.

    Lookups never raise for missing or wrongly typed values; they return
    ``None`` (or an empty list for the list-returning helpers). Containers
    come back as copies, so changing them leaves the model untouched.
    """

    raw: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self.raw.get(key, default))

    def has(self, key: str) -> bool:
        return key in self.raw

    def get_string(self, key: str) -> Optional[str]:
        value = self.raw.get(key)
        return value if isinstance(value, str) else None

    def get_bool(self, key: str) -> Optional[bool]:
        value = self.raw.get(key)
        return value if isinstance(value, bool) else None

    def get_int(self, key: str) -> Optional[int]:
        return as_int(self.raw.get(key))

    def get_float(self, key: str) -> Optional[float]:
        value = self.raw.get(key)
        return float(value) if is_number(value) else None

    def get_list(self, key: str) -> Optional[List[Any]]:
        value = self.raw.get(key)
        return copy.deepcopy(value) if isinstance(value, list) else None

    def get_dict(self, key: str) -> Optional[Dict[str, Any]]:
        value = self.raw.get(key)
        return copy.deepcopy(value) if isinstance(value, dict) else None

    def get_date(self, key: str) -> Optional[datetime]:
        """Parse an ISO-8601 timestamp such as ``2024-01-01T00:00:00.000Z``."""
        value = self.get_string(key)
        if not value:
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None

    def get_asset(self, key: str) -> Optional["AssetModel"]:
        from .core.mapping import map_asset

        value = self.get_dict(key)
        return map_asset(value) if value is not None else None

    def get_assets(self, key: str) -> List["AssetModel"]:
        from .core.mapping import map_asset

        return [map_asset(item) for item in self.get_list(key) or [] if isinstance(item, dict)]

    def get_group(self, key: str) -> Optional["Group"]:
        value = self.get_dict(key) if key else None
        return Group(raw=value) if value is not None else None

    def get_groups(self, key: str) -> List["Group"]:
        values = self.get_list(key) if key else None
        return [Group(raw=item) for item in values or [] if isinstance(item, dict)]

    def get_all_entries(
        self, key: str, content_type_uid: Optional[str] = None
    ) -> List["EntryModel"]:
        """Map the referenced entries stored under a reference field."""
        from .core.mapping import map_entry

        return [
            map_entry(item, content_type_uid)
            for item in self.get_list(key) or []
            if isinstance(item, dict)
        ]

    def to_json(self) -> Dict[str, Any]:
        return copy.deepcopy(self.raw)


@dataclass(frozen=True)
class Group(JSONFieldAccess):
    """A group field value inside an entry."""

    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class EntryModel(JSONFieldAccess):
    """
    A single entry.

    ``metadata`` is ``None`` when the source had no ``publish_details`` key.
    Otherwise it is ``{"publish_details": PublishDetails | None}``, which
    tells "never published" apart from "publish details present but
    unreadable".

    Example:
        >>> entry.title, entry.locale, entry.version
        ('Hello', 'en-us', 3)
        >>> entry.get_string("summary")
        'Custom field value'
    """

    uid: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    locale: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None
    content_type_uid: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    version: int = 1
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[str] = None
    deleted_by: Optional[str] = None
    is_directory: Optional[bool] = None
    in_progress: Optional[bool] = None
    images: Optional[List[Any]] = None
    owner: Optional[Dict[str, Any]] = None
    publish_details: Optional[PublishDetails] = None
    metadata: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def environment(self) -> Optional[str]:
        return self.publish_details.environment if self.publish_details else None

    @property
    def time(self) -> Optional[str]:
        return self.publish_details.time if self.publish_details else None

    @property
    def user(self) -> Optional[str]:
        return self.publish_details.user if self.publish_details else None


@dataclass(frozen=True)
class AssetModel(JSONFieldAccess):
    """A stored file with its metadata."""

    uid: Optional[str] = None
    content_type: Optional[str] = None
    file_size: Optional[str] = None
    file_name: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    version: int = 1
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[str] = None
    deleted_by: Optional[str] = None
    publish_details: Optional[PublishDetails] = None
    metadata: Optional[Dict[str, Any]] = None
    count: int = 0
    total_count: int = 0
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class ContentTypeModel(JSONFieldAccess):
    """A content type schema."""

    uid: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    schema: Optional[List[Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class GlobalFieldModel(JSONFieldAccess):
    """A reusable global field schema."""

    uid: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    schema: Optional[List[Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class QueryResult:
    """Entries returned by a query, with the optional count and schema."""

    entries: List[EntryModel] = field(default_factory=list)
    count: int = 0
    schema: Optional[List[Any]] = None
    content_type: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class AssetsResult:
    assets: List[AssetModel] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class ContentTypesResult:
    content_types: List[ContentTypeModel] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class GlobalFieldsResult:
    global_fields: List[GlobalFieldModel] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class TaxonomyResult:
    entries: List[EntryModel] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class SyncResult:
    """
    One page of a sync run.

    Follow ``pagination_token`` until it is ``None``; keep ``sync_token``
    for the next delta sync.
    """

    items: List[Dict[str, Any]] = field(default_factory=list)
    skip: int = 0
    limit: int = 0
    total_count: int = 0
    pagination_token: Optional[str] = None
    sync_token: Optional[str] = None
