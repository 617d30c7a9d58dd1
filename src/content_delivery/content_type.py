from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .builder import RequestBuilder
from .core.dispatch import Callback
from .core.mapping import content_type_from_response
from .core.request import RequestDescriptor
from .entry import Entry
from .exceptions import ConfigurationError, ErrorMessages
from .models import ContentTypeModel
from .query import Query

if TYPE_CHECKING:
    from .client import Stack


class ContentType(RequestBuilder):
    """Entry point for the entries of one content type, and for its schema."""

    def __init__(self, stack: "Stack", uid: str):
        super().__init__(stack)
        self.uid = uid

    @property
    def path(self) -> str:
        return self._stack.path("content_types", self.uid)

    def entry(self, uid: str) -> Entry:
        if not uid:
            raise ConfigurationError(ErrorMessages.ENTRY_UID_REQUIRED)
        entry = Entry(self._stack, self.uid, uid)
        entry.headers.update(self.headers)
        return entry

    def query(self) -> Query:
        query = Query(self._stack, self.uid)
        query.headers.update(self.headers)
        return query

    def to_request(self, params: Optional[Mapping[str, Any]] = None) -> RequestDescriptor:
        return self._prepare(self.path, params=dict(self.params, **(params or {})))

    def fetch(
        self,
        callback: Optional[Callback[ContentTypeModel]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> "Future[Optional[ContentTypeModel]]":
        """Fetch the content type schema, e.g. with ``{"include_global_field_schema": True}``."""
        return self._submit(
            self.to_request(params), callback, content_type_from_response, "content_type.fetch"
        )
