"""
Stack: the root of the builder surface.

A stack carries the credentials and the transport; every builder it
creates sends requests through them.
"""

from concurrent.futures import Future
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .asset import Asset, AssetLibrary
from .builder import prepare_request, submit_request
from .config import StackConfig, get_logger
from .content_type import ContentType
from .core.dispatch import Callback
from .core.mapping import content_types_from_response, sync_result_from_response
from .core.utils import (
    build_stack_headers,
    format_sync_date,
    image_transform_url,
    normalize_locale,
)
from .exceptions import ConfigurationError, ErrorMessages
from .global_field import GlobalField
from .models import ContentTypesResult, SyncResult
from .taxonomy import Taxonomy
from .transport import HttpxTransport, Transport

logger = get_logger("stack")


class PublishType(str, Enum):
    ENTRY_PUBLISHED = "entry_published"
    ENTRY_UNPUBLISHED = "entry_unpublished"
    ENTRY_DELETED = "entry_deleted"
    ASSET_PUBLISHED = "asset_published"
    ASSET_UNPUBLISHED = "asset_unpublished"
    ASSET_DELETED = "asset_deleted"
    CONTENT_TYPE_DELETED = "content_type_deleted"


class Stack:
    """
    Credentials, stack-wide headers and the transport.

    Build one with ``stack()``, which validates the credentials. The
    constructor is internal: it takes keyword arguments only and checks
    nothing.

    Example:
        >>> delivery = stack("api_key", "delivery_token", "production")
        >>> entry = delivery.content_type("blog_post").entry("blt123")
        >>> entry.fetch(lambda entry, error: print(entry.title))
    """

    def __init__(
        self,
        *,
        api_key: str,
        delivery_token: str,
        environment: str,
        config: StackConfig,
        transport: Transport,
    ):
        self.api_key = api_key
        self.delivery_token = delivery_token
        self.environment = environment
        self.config = config
        self.transport = transport
        self.headers: Dict[str, Any] = build_stack_headers(
            api_key, delivery_token, environment, config.branch
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.transport.close()

    def path(self, *segments: str) -> str:
        return "/" + "/".join((self.config.version,) + segments)

    # Headers

    def set_header(self, key: str, value: Any) -> None:
        if key and value:
            self.headers[key] = value

    def remove_header(self, key: str) -> None:
        self.headers.pop(key, None)

    # Builders

    def content_type(self, uid: str) -> ContentType:
        if not uid:
            raise ConfigurationError(ErrorMessages.CONTENT_TYPE_UID_REQUIRED)
        return ContentType(self, uid)

    def asset(self, uid: str) -> Asset:
        if not uid:
            raise ConfigurationError(ErrorMessages.ASSET_UID_REQUIRED)
        return Asset(self, uid)

    def asset_library(self) -> AssetLibrary:
        return AssetLibrary(self)

    def taxonomy(self) -> Taxonomy:
        return Taxonomy(self)

    def global_field(self, uid: Optional[str] = None) -> GlobalField:
        return GlobalField(self, uid)

    # Stack level requests

    def get_content_types(
        self,
        callback: Optional[Callback[ContentTypesResult]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> "Future[Optional[ContentTypesResult]]":
        """List every content type, e.g. with ``{"include_count": True}``."""
        request = prepare_request(self, self.path("content_types"), {}, params or {})
        return submit_request(
            self, request, callback, content_types_from_response, "stack.get_content_types"
        )

    def image_transform(self, image_url: str, parameters: Mapping[str, Any]) -> str:
        """Return ``image_url`` with image delivery parameters appended."""
        return image_transform_url(image_url, parameters)

    # Sync

    def sync(
        self, callback: Optional[Callback[SyncResult]] = None
    ) -> "Future[Optional[SyncResult]]":
        """Start an initial sync of everything published to the environment."""
        return self._sync({"init": True}, callback)

    def sync_pagination_token(
        self, pagination_token: str, callback: Optional[Callback[SyncResult]] = None
    ) -> "Future[Optional[SyncResult]]":
        """Fetch the next page of an unfinished sync."""
        return self._sync({"pagination_token": pagination_token}, callback)

    def sync_token(
        self, sync_token: str, callback: Optional[Callback[SyncResult]] = None
    ) -> "Future[Optional[SyncResult]]":
        """Fetch what changed since the sync that returned ``sync_token``."""
        return self._sync({"sync_token": sync_token}, callback)

    def sync_from_date(
        self,
        from_date: Union[str, date, datetime],
        callback: Optional[Callback[SyncResult]] = None,
    ) -> "Future[Optional[SyncResult]]":
        return self.sync_with(from_date=from_date, callback=callback)

    def sync_content_type(
        self, content_type_uid: str, callback: Optional[Callback[SyncResult]] = None
    ) -> "Future[Optional[SyncResult]]":
        return self.sync_with(content_type_uid=content_type_uid, callback=callback)

    def sync_locale(
        self, locale: str, callback: Optional[Callback[SyncResult]] = None
    ) -> "Future[Optional[SyncResult]]":
        return self.sync_with(locale=locale, callback=callback)

    def sync_publish_type(
        self,
        publish_type: Union[PublishType, str],
        callback: Optional[Callback[SyncResult]] = None,
    ) -> "Future[Optional[SyncResult]]":
        return self.sync_with(publish_type=publish_type, callback=callback)

    def sync_with(
        self,
        content_type_uid: Optional[str] = None,
        from_date: Union[str, date, datetime, None] = None,
        locale: Optional[str] = None,
        publish_type: Union[PublishType, str, None] = None,
        callback: Optional[Callback[SyncResult]] = None,
    ) -> "Future[Optional[SyncResult]]":
        """Start an initial sync narrowed by any combination of filters."""
        params: Dict[str, Any] = {"init": True}
        if from_date is not None:
            params["start_from"] = format_sync_date(from_date)
        if content_type_uid:
            params["content_type_uid"] = content_type_uid
        if publish_type:
            params["type"] = PublishType(publish_type).value
        if locale:
            params["locale"] = normalize_locale(locale)
        return self._sync(params, callback)

    def _sync(
        self, params: Dict[str, Any], callback: Optional[Callback[SyncResult]]
    ) -> "Future[Optional[SyncResult]]":
        request = prepare_request(self, self.path("stacks", "sync"), {}, params)
        return submit_request(self, request, callback, sync_result_from_response, "stack.sync")


def stack(
    api_key: Optional[str] = None,
    delivery_token: Optional[str] = None,
    environment: Optional[str] = None,
    config: Optional[StackConfig] = None,
    transport: Optional[Transport] = None,
) -> Stack:
    """
    Create a stack.

    Credentials passed here win over ``CONTENT_DELIVERY_*`` settings.

    Raises:
        ConfigurationError: If the api key, delivery token or environment is missing
    """
    config = config or StackConfig()
    api_key = api_key or config.api_key
    delivery_token = delivery_token or config.delivery_token
    environment = environment or config.environment

    if not api_key:
        raise ConfigurationError(ErrorMessages.MISSING_API_KEY)
    if not delivery_token:
        raise ConfigurationError(ErrorMessages.MISSING_DELIVERY_TOKEN)
    if not environment:
        raise ConfigurationError(ErrorMessages.MISSING_ENVIRONMENT)

    if config.debug:
        config.setup_logging()

    logger.debug("Creating stack for environment %s", environment)
    return Stack(
        api_key=api_key.strip(),
        delivery_token=delivery_token.strip(),
        environment=environment.strip(),
        config=config,
        transport=transport or HttpxTransport(config),
    )
