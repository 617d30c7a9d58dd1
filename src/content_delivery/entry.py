"""
Single entry fetch.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Iterable, Optional, Union

from .builder import RequestBuilder
from .core.dispatch import Callback
from .core.mapping import entry_from_response
from .core.request import (
    EXCEPT_BASE,
    EXCEPT_REFERENCE,
    INCLUDE,
    ONLY_BASE,
    ONLY_REFERENCE,
    RequestDescriptor,
)
from .core.utils import normalize_locale, value_list
from .models import EntryModel

if TYPE_CHECKING:
    from .client import Stack

Fields = Union[str, Iterable[str]]


class Entry(RequestBuilder):
    """Fetches one entry by UID, with optional projection and references."""

    def __init__(self, stack: "Stack", content_type_uid: str, uid: str):
        super().__init__(stack)
        self.content_type_uid = content_type_uid
        self.uid = uid

    @property
    def path(self) -> str:
        return self._stack.path("content_types", self.content_type_uid, "entries", self.uid)

    def only(self, fields: Fields) -> "Entry":
        self._append_param(ONLY_BASE, fields)
        return self

    def except_(self, fields: Fields) -> "Entry":
        self._append_param(EXCEPT_BASE, fields)
        return self

    def include_reference(self, fields: Fields) -> "Entry":
        self._append_param(INCLUDE, fields)
        return self

    def only_with_reference_uid(self, fields: Fields, reference_uid: str) -> "Entry":
        self.params.setdefault(ONLY_REFERENCE, {})[reference_uid] = value_list(fields)
        return self.include_reference(reference_uid)

    def except_with_reference_uid(self, fields: Fields, reference_uid: str) -> "Entry":
        self.params.setdefault(EXCEPT_REFERENCE, {})[reference_uid] = value_list(fields)
        return self.include_reference(reference_uid)

    def include_content_type(self) -> "Entry":
        self.params["include_content_type"] = True
        return self

    def include_fallback(self) -> "Entry":
        self.params["include_fallback"] = True
        return self

    def include_branch(self) -> "Entry":
        self.params["include_branch"] = True
        return self

    def locale(self, code: str) -> "Entry":
        self.params["locale"] = normalize_locale(code)
        return self

    def to_request(self) -> RequestDescriptor:
        return self._prepare(self.path)

    def fetch(
        self, callback: Optional[Callback[EntryModel]] = None
    ) -> "Future[Optional[EntryModel]]":
        uid = self.content_type_uid
        return self._submit(
            self.to_request(),
            callback,
            lambda payload: entry_from_response(payload, uid),
            "entry.fetch",
        )
