from concurrent.futures import Future
from typing import TYPE_CHECKING, Optional

from .builder import RequestBuilder
from .core.dispatch import Callback
from .core.mapping import global_field_from_response, global_fields_from_response
from .core.request import RequestDescriptor
from .exceptions import ConfigurationError, ErrorMessages
from .models import GlobalFieldModel, GlobalFieldsResult

if TYPE_CHECKING:
    from .client import Stack


class GlobalField(RequestBuilder):
    """Fetch one global field by UID, or list them all when no UID is set."""

    def __init__(self, stack: "Stack", uid: Optional[str] = None):
        super().__init__(stack)
        self.uid = uid

    @property
    def path(self) -> str:
        if self.uid:
            return self._stack.path("global_fields", self.uid)
        return self._stack.path("global_fields")

    def include_branch(self) -> "GlobalField":
        self.params["include_branch"] = True
        return self

    def include_global_field_schema(self) -> "GlobalField":
        self.params["include_global_field_schema"] = True
        return self

    def to_request(self) -> RequestDescriptor:
        return self._prepare(self.path)

    def fetch(
        self, callback: Optional[Callback[GlobalFieldModel]] = None
    ) -> "Future[Optional[GlobalFieldModel]]":
        if not self.uid:
            raise ConfigurationError(ErrorMessages.GLOBAL_FIELD_UID_REQUIRED)
        return self._submit(
            self.to_request(), callback, global_field_from_response, "global_field.fetch"
        )

    def find_all(
        self, callback: Optional[Callback[GlobalFieldsResult]] = None
    ) -> "Future[Optional[GlobalFieldsResult]]":
        request = self._prepare(self._stack.path("global_fields"))
        return self._submit(
            request, callback, global_fields_from_response, "global_field.find_all"
        )
