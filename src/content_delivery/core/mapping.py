"""
Pure functions mapping normalized JSON into typed models.

Every scalar is read by its fixed key with "absent means None" semantics.
Nothing here raises for a malformed optional field; only the strict
``assets`` collection can raise, via ``extract_collection``.
"""

import copy
from typing import Any, Dict, List, Optional, Tuple

from ..models import (
    AssetModel,
    AssetsResult,
    ContentTypeModel,
    ContentTypesResult,
    EntryModel,
    GlobalFieldModel,
    GlobalFieldsResult,
    PublishDetails,
    QueryResult,
    SyncResult,
    TaxonomyResult,
    as_int,
    is_number,
)
from .responses import (
    extract_collection,
    extract_count,
    extract_entity,
    optional_dict,
    optional_list,
)

PUBLISH_DETAILS = "publish_details"


def text(source: Dict[str, Any], key: str) -> Optional[str]:
    """Read a string scalar; numbers are rendered, anything else is absent."""
    value = source.get(key)
    if isinstance(value, str):
        return value
    if is_number(value):
        return str(value)
    return None


def strict_bool(source: Dict[str, Any], key: str) -> Optional[bool]:
    """Read a flag only when it is a real boolean; ``"true"`` is not coerced."""
    value = source.get(key)
    return value if isinstance(value, bool) else None


def extract_tags(source: Dict[str, Any]) -> Optional[Tuple[str, ...]]:
    """String tags in order; no tags (or none that are strings) means ``None``."""
    value = source.get("tags")
    if not isinstance(value, list):
        return None
    tags = tuple(tag for tag in value if isinstance(tag, str))
    return tags or None


def extract_version(source: Dict[str, Any]) -> int:
    value = source.get("_version")
    return as_int(value, 1)


def parse_publish_details(
    source: Dict[str, Any],
) -> Tuple[Optional[PublishDetails], Optional[Dict[str, Any]]]:
    """Parse the ``publish_details`` object.

    Returns ``(details, metadata)``. When the key is absent both are
    ``None``. When it is present the parse counts as attempted and
    ``metadata`` records the outcome, even if the value was unusable.
    """
    if PUBLISH_DETAILS not in source:
        return None, None

    raw = source[PUBLISH_DETAILS]
    details = None
    if isinstance(raw, dict):
        details = PublishDetails(
            environment=text(raw, "environment"),
            time=text(raw, "time"),
            user=text(raw, "user"),
        )
    return details, {PUBLISH_DETAILS: details}


def map_entry(source: Dict[str, Any], content_type_uid: Optional[str] = None) -> EntryModel:
    """Build an ``EntryModel`` from a bare entry object."""
    publish_details, metadata = parse_publish_details(source)
    locale = text(source, "locale")
    images = source.get("images")
    owner = source.get("_owner")

    return EntryModel(
        uid=text(source, "uid"),
        title=text(source, "title"),
        url=text(source, "url"),
        locale=locale,
        language=locale,
        description=text(source, "description"),
        content_type_uid=content_type_uid,
        tags=extract_tags(source),
        version=extract_version(source),
        created_at=text(source, "created_at"),
        created_by=text(source, "created_by"),
        updated_at=text(source, "updated_at"),
        updated_by=text(source, "updated_by"),
        deleted_at=text(source, "deleted_at"),
        deleted_by=text(source, "deleted_by"),
        is_directory=strict_bool(source, "is_dir"),
        in_progress=strict_bool(source, "_in_progress"),
        images=copy.deepcopy(images) if isinstance(images, list) else None,
        owner=copy.deepcopy(owner) if isinstance(owner, dict) else None,
        publish_details=publish_details,
        metadata=metadata,
        raw=copy.deepcopy(source),
    )


def map_asset(source: Dict[str, Any]) -> AssetModel:
    """Build an ``AssetModel`` from a bare asset object."""
    publish_details, metadata = parse_publish_details(source)

    return AssetModel(
        uid=text(source, "uid"),
        content_type=text(source, "content_type"),
        file_size=text(source, "file_size"),
        file_name=text(source, "filename"),
        url=text(source, "url"),
        title=text(source, "title"),
        tags=extract_tags(source),
        version=extract_version(source),
        created_at=text(source, "created_at"),
        created_by=text(source, "created_by"),
        updated_at=text(source, "updated_at"),
        updated_by=text(source, "updated_by"),
        deleted_at=text(source, "deleted_at"),
        deleted_by=text(source, "deleted_by"),
        publish_details=publish_details,
        metadata=metadata,
        count=as_int(source.get("count"), 0),
        total_count=as_int(source.get("objects"), 0),
        raw=copy.deepcopy(source),
    )


def map_content_type(source: Dict[str, Any]) -> ContentTypeModel:
    return ContentTypeModel(
        uid=text(source, "uid"),
        title=text(source, "title"),
        description=text(source, "description"),
        schema=optional_list(source, "schema"),
        raw=copy.deepcopy(source),
    )


def map_global_field(source: Dict[str, Any]) -> GlobalFieldModel:
    return GlobalFieldModel(
        uid=text(source, "uid"),
        title=text(source, "title"),
        description=text(source, "description"),
        schema=optional_list(source, "schema"),
        raw=copy.deepcopy(source),
    )


# Response level mapping


def entry_from_response(
    payload: Any, content_type_uid: Optional[str] = None
) -> Optional[EntryModel]:
    source = extract_entity(payload, "entry")
    return map_entry(source, content_type_uid) if source is not None else None


def asset_from_response(payload: Any) -> Optional[AssetModel]:
    source = extract_entity(payload, "asset")
    return map_asset(source) if source is not None else None


def entries_from_response(
    payload: Any, content_type_uid: Optional[str] = None
) -> List[EntryModel]:
    return [
        map_entry(source, content_type_uid)
        for source in extract_collection(payload, "entries")
    ]


def assets_from_response(payload: Any) -> AssetsResult:
    assets = [map_asset(source) for source in extract_collection(payload, "assets", strict=True)]
    return AssetsResult(assets=assets, count=extract_count(payload, ("objects",)))


def query_result_from_response(
    payload: Any, content_type_uid: Optional[str] = None
) -> QueryResult:
    return QueryResult(
        entries=entries_from_response(payload, content_type_uid),
        count=extract_count(payload, ("entries",)),
        schema=optional_list(payload, "schema"),
        content_type=optional_dict(payload, "content_type"),
    )


def content_type_from_response(payload: Any) -> Optional[ContentTypeModel]:
    source = extract_entity(payload, "content_type")
    return map_content_type(source) if source is not None else None


def content_types_from_response(payload: Any) -> ContentTypesResult:
    content_types = [
        map_content_type(source) for source in extract_collection(payload, "content_types")
    ]
    return ContentTypesResult(content_types=content_types, count=extract_count(payload, ()))


def global_field_from_response(payload: Any) -> Optional[GlobalFieldModel]:
    source = extract_entity(payload, "global_field")
    return map_global_field(source) if source is not None else None


def global_fields_from_response(payload: Any) -> GlobalFieldsResult:
    global_fields = [
        map_global_field(source) for source in extract_collection(payload, "global_fields")
    ]
    return GlobalFieldsResult(global_fields=global_fields, count=extract_count(payload, ()))


def taxonomy_result_from_response(payload: Any) -> TaxonomyResult:
    return TaxonomyResult(
        entries=entries_from_response(payload),
        count=extract_count(payload, ("entries",)),
    )


def sync_result_from_response(payload: Any) -> SyncResult:
    body = payload if isinstance(payload, dict) else {}

    def number(key: str) -> int:
        return as_int(body.get(key), 0)

    return SyncResult(
        items=[copy.deepcopy(item) for item in extract_collection(body, "items")],
        skip=number("skip"),
        limit=number("limit"),
        total_count=number("total_count"),
        pagination_token=text(body, "pagination_token"),
        sync_token=text(body, "sync_token"),
    )
