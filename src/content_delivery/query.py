"""
Entry queries against a single content type.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Union

from .builder import RequestBuilder
from .core import filters
from .core.dispatch import Callback
from .core.filters import FilterExpression, combine
from .core.mapping import entries_from_response, query_result_from_response
from .core.request import (
    EXCEPT_BASE,
    EXCEPT_REFERENCE,
    INCLUDE,
    ONLY_BASE,
    ONLY_REFERENCE,
    RequestDescriptor,
)
from .core.utils import normalize_locale, value_list
from .exceptions import ErrorMessages, QueryBuildError
from .models import EntryModel, QueryResult

if TYPE_CHECKING:
    from .client import Stack

Fields = Union[str, Iterable[str]]


class Query(RequestBuilder):
    """
    Fluent filter, projection and paging builder for entries.

    Filter operations write into a ``FilterExpression`` sent as the ``query``
    parameter; the rest become sibling parameters.

    Example:
        >>> query = stack.content_type("blog_post").query()
        >>> query.where("title", "Hello").greater_than("rating", 3).limit(10)
        >>> future = query.find(on_done)
        >>> future.result(timeout=30)
    """

    def __init__(self, stack: "Stack", content_type_uid: str):
        super().__init__(stack)
        self.content_type_uid = content_type_uid
        self.expression = FilterExpression()

    @property
    def path(self) -> str:
        return self._stack.path("content_types", self.content_type_uid, "entries")

    # Filters

    def where(self, field: str, value: Any) -> "Query":
        self.expression.set(field, value)
        return self

    def add_query(self, key: str, value: Any) -> "Query":
        """Set a raw query parameter next to the filter."""
        return self.add_param(key, value)

    def remove_query(self, key: str) -> "Query":
        self.params.pop(key, None)
        return self

    def less_than(self, field: str, value: Any) -> "Query":
        self.expression.operator(field, filters.LESS_THAN, value)
        return self

    def less_than_or_equal_to(self, field: str, value: Any) -> "Query":
        self.expression.operator(field, filters.LESS_THAN_OR_EQUAL, value)
        return self

    def greater_than(self, field: str, value: Any) -> "Query":
        self.expression.operator(field, filters.GREATER_THAN, value)
        return self

    def greater_than_or_equal_to(self, field: str, value: Any) -> "Query":
        self.expression.operator(field, filters.GREATER_THAN_OR_EQUAL, value)
        return self

    def not_equal_to(self, field: str, value: Any) -> "Query":
        self.expression.operator(field, filters.NOT_EQUAL, value)
        return self

    def contained_in(self, field: str, values: Iterable[Any]) -> "Query":
        self.expression.operator(field, filters.IN, value_list(values))
        return self

    def not_contained_in(self, field: str, values: Iterable[Any]) -> "Query":
        self.expression.operator(field, filters.NOT_IN, value_list(values))
        return self

    def exists(self, field: str) -> "Query":
        self.expression.operator(field, filters.EXISTS, True)
        return self

    def not_exists(self, field: str) -> "Query":
        self.expression.operator(field, filters.EXISTS, False)
        return self

    def regex(self, field: str, pattern: str, modifiers: Optional[str] = None) -> "Query":
        """Match ``field`` against ``pattern``; ``modifiers`` such as ``"i"``."""
        predicate = {filters.REGEX: pattern}
        if modifiers:
            predicate[filters.REGEX_OPTIONS] = modifiers
        self.expression.set(field, predicate)
        return self

    def and_(self, queries: List["Query"]) -> "Query":
        """Require every sub-query's filter to match."""
        if not queries:
            raise QueryBuildError(ErrorMessages.EMPTY_QUERY_LIST)
        self.expression.set(filters.AND, combine([q.expression for q in queries]))
        return self

    def or_(self, queries: List["Query"]) -> "Query":
        """Require at least one sub-query's filter to match."""
        if not queries:
            raise QueryBuildError(ErrorMessages.EMPTY_QUERY_LIST)
        self.expression.set(filters.OR, combine([q.expression for q in queries]))
        return self

    def tags(self, tags: Fields) -> "Query":
        self.params["tags"] = ",".join(value_list(tags))
        return self

    def search(self, value: str) -> "Query":
        self.params["typeahead"] = value
        return self

    # Ordering and paging

    def ascending(self, field: str) -> "Query":
        self.params["asc"] = field
        return self

    def descending(self, field: str) -> "Query":
        self.params["desc"] = field
        return self

    def skip(self, number: int) -> "Query":
        self.params["skip"] = number
        return self

    def limit(self, number: int) -> "Query":
        self.params["limit"] = number
        return self

    def before_uid(self, uid: str) -> "Query":
        self.params["before_uid"] = uid
        return self

    def after_uid(self, uid: str) -> "Query":
        self.params["after_uid"] = uid
        return self

    def locale(self, code: str) -> "Query":
        self.params["locale"] = normalize_locale(code)
        return self

    # Response shaping

    def count(self) -> "Query":
        """Ask for the number of matches only."""
        self.params["count"] = True
        return self

    def include_count(self) -> "Query":
        self.params["include_count"] = True
        return self

    def include_schema(self) -> "Query":
        if "include_content_type" not in self.params:
            self.params["include_schema"] = True
        return self

    def include_content_type(self) -> "Query":
        self.params.pop("include_schema", None)
        self.params["include_content_type"] = True
        return self

    def include_owner(self) -> "Query":
        self.params["include_owner"] = True
        return self

    def include_reference(self, fields: Fields) -> "Query":
        self._append_param(INCLUDE, fields)
        return self

    def only(self, fields: Fields) -> "Query":
        self._append_param(ONLY_BASE, fields)
        return self

    def except_(self, fields: Fields) -> "Query":
        self._append_param(EXCEPT_BASE, fields)
        return self

    def only_with_reference_uid(self, fields: Fields, reference_uid: str) -> "Query":
        """Project ``fields`` of the entries referenced by ``reference_uid``."""
        self.params.setdefault(ONLY_REFERENCE, {})[reference_uid] = value_list(fields)
        return self.include_reference(reference_uid)

    def except_with_reference_uid(self, fields: Fields, reference_uid: str) -> "Query":
        self.params.setdefault(EXCEPT_REFERENCE, {})[reference_uid] = value_list(fields)
        return self.include_reference(reference_uid)

    # Execution

    def to_request(self, limit: Optional[int] = None) -> RequestDescriptor:
        params = self.params
        if limit is not None:
            params = dict(self.params, limit=limit)
        return self._prepare(self.path, expression=self.expression, params=params)

    def find(
        self, callback: Optional[Callback[QueryResult]] = None
    ) -> "Future[Optional[QueryResult]]":
        uid = self.content_type_uid
        return self._submit(
            self.to_request(),
            callback,
            lambda payload: query_result_from_response(payload, uid),
            "query.find",
        )

    def find_one(
        self, callback: Optional[Callback[EntryModel]] = None
    ) -> "Future[Optional[EntryModel]]":
        """Fetch the first matching entry; the builder's own limit is left alone."""
        uid = self.content_type_uid

        def first(payload: Any) -> Optional[EntryModel]:
            entries = entries_from_response(payload, uid)
            return entries[0] if entries else None

        return self._submit(
            self.to_request(limit=1),
            callback,
            first,
            "query.find_one",
            missing_message=ErrorMessages.NO_ENTRY_FOUND,
        )
