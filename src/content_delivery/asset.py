"""
Asset fetches: a single asset by UID, or the asset library listing.
"""

from concurrent.futures import Future
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .builder import RequestBuilder
from .core.dispatch import Callback
from .core.mapping import asset_from_response, assets_from_response
from .core.request import RequestDescriptor
from .models import AssetModel, AssetsResult

if TYPE_CHECKING:
    from .client import Stack


class OrderBy(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class Asset(RequestBuilder):
    def __init__(self, stack: "Stack", uid: str):
        super().__init__(stack)
        self.uid = uid

    @property
    def path(self) -> str:
        return self._stack.path("assets", self.uid)

    def include_dimension(self) -> "Asset":
        self.params["include_dimension"] = True
        return self

    def include_fallback(self) -> "Asset":
        self.params["include_fallback"] = True
        return self

    def to_request(self) -> RequestDescriptor:
        return self._prepare(self.path)

    def fetch(
        self, callback: Optional[Callback[AssetModel]] = None
    ) -> "Future[Optional[AssetModel]]":
        return self._submit(self.to_request(), callback, asset_from_response, "asset.fetch")


class AssetLibrary(RequestBuilder):
    """
    Lists the assets of a stack.

    A response whose ``assets`` value is not a list raises
    ``ResponseTypeError`` out of the returned future instead of reaching
    the callback.
    """

    def __init__(self, stack: "Stack"):
        super().__init__(stack)

    @property
    def path(self) -> str:
        return self._stack.path("assets")

    def sort(self, field: str, order_by: OrderBy) -> "AssetLibrary":
        self.params.pop(OrderBy.ASCENDING.value, None)
        self.params.pop(OrderBy.DESCENDING.value, None)
        self.params[OrderBy(order_by).value] = field
        return self

    def include_count(self) -> "AssetLibrary":
        self.params["include_count"] = True
        return self

    def include_relative_url(self) -> "AssetLibrary":
        self.params["relative_urls"] = True
        return self

    def include_fallback(self) -> "AssetLibrary":
        self.params["include_fallback"] = True
        return self

    def to_request(self) -> RequestDescriptor:
        return self._prepare(self.path)

    def fetch_all(
        self, callback: Optional[Callback[AssetsResult]] = None
    ) -> "Future[Optional[AssetsResult]]":
        return self._submit(
            self.to_request(), callback, assets_from_response, "asset_library.fetch_all"
        )
