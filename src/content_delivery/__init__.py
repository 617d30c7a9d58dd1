"""
Content Delivery SDK

Python client for a headless content delivery API.
"""

from .client import PublishType, Stack, stack
from .config import StackConfig
from .asset import Asset, AssetLibrary, OrderBy
from .content_type import ContentType
from .entry import Entry
from .global_field import GlobalField
from .query import Query
from .taxonomy import Taxonomy
from .transport import HttpxTransport, Transport
from .models import (
    AssetModel,
    AssetsResult,
    ContentTypeModel,
    ContentTypesResult,
    EntryModel,
    ErrorResponse,
    GlobalFieldModel,
    GlobalFieldsResult,
    Group,
    PublishDetails,
    QueryResult,
    SyncResult,
    TaxonomyResult,
)
from .exceptions import (
    ConfigurationError,
    DeliveryError,
    QueryBuildError,
    ResponseTypeError,
)

__version__ = "1.0.0"

__all__ = [
    "stack",  # factory, validates credentials
    "Stack",
    "StackConfig",
    "PublishType",
    "ContentType",
    "Entry",
    "Query",
    "Taxonomy",
    "Asset",
    "AssetLibrary",
    "OrderBy",
    "GlobalField",
    "Transport",
    "HttpxTransport",
    "EntryModel",
    "AssetModel",
    "ContentTypeModel",
    "GlobalFieldModel",
    "Group",
    "PublishDetails",
    "ErrorResponse",
    "QueryResult",
    "AssetsResult",
    "ContentTypesResult",
    "GlobalFieldsResult",
    "TaxonomyResult",
    "SyncResult",
    "DeliveryError",
    "ConfigurationError",
    "ResponseTypeError",
    "QueryBuildError",
]
