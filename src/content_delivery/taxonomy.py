"""
Taxonomy queries: find entries by the taxonomy terms attached to them.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional

from .builder import RequestBuilder
from .core import filters
from .core.dispatch import Callback
from .core.filters import FilterExpression, level_term, list_string_form
from .core.mapping import taxonomy_result_from_response
from .core.request import RequestDescriptor
from .core.utils import value_list
from .models import TaxonomyResult

if TYPE_CHECKING:
    from .client import Stack


class Taxonomy(RequestBuilder):
    """
    Builds a filter over taxonomy fields and sends it to
    ``/{version}/taxonomies/entries``.

    Every operation stores one predicate under its field path and replaces
    whatever that path held before.

    Example:
        >>> taxonomy = stack.taxonomy()
        >>> taxonomy.in_("taxonomies.color", ["red", "yellow"])
        >>> taxonomy.find(lambda result, error: print(result.entries))
    """

    def __init__(self, stack: "Stack"):
        super().__init__(stack)
        self.expression = FilterExpression()

    @property
    def path(self) -> str:
        return self._stack.path("taxonomies", "entries")

    def in_(self, field: Optional[str], items: Iterable[Any]) -> "Taxonomy":
        """Match entries tagged with any of ``items``."""
        self.expression.operator(field, filters.IN, value_list(items))
        return self

    def or_(self, conditions: List[Mapping[str, Any]]) -> "Taxonomy":
        """Match entries satisfying any of ``conditions``."""
        self.expression.set(filters.OR, [dict(c) for c in conditions])
        return self

    def and_(self, conditions: List[Mapping[str, Any]]) -> "Taxonomy":
        """Match entries satisfying all of ``conditions``.

        The list goes on the wire as a single string, e.g.
        ``{"$and":"[{\\"a\\":\\"b\\"}, {\\"c\\":\\"d\\"}]"}``.
        """
        self.expression.set(filters.AND, list_string_form(conditions))
        return self

    def exists(self, field: Optional[str], value: bool) -> "Taxonomy":
        self.expression.operator(field, filters.EXISTS, value)
        return self

    def equal_and_below(self, field: Optional[str], term: str) -> "Taxonomy":
        """Match ``term`` and every term below it in the hierarchy."""
        self.expression.operator(field, filters.EQUAL_AND_BELOW, term)
        return self

    def equal_and_below_with_level(
        self, field: Optional[str], term: str, level: int
    ) -> "Taxonomy":
        """Like ``equal_and_below`` but stop ``level`` steps down."""
        self.expression.operator(field, filters.EQUAL_AND_BELOW, level_term(term, level))
        return self

    def below(self, field: Optional[str], term: str) -> "Taxonomy":
        self.expression.operator(field, filters.BELOW, term)
        return self

    def equal_above(self, field: Optional[str], term: str) -> "Taxonomy":
        self.expression.operator(field, filters.EQUAL_AND_ABOVE, term)
        return self

    def above(self, field: Optional[str], term: str) -> "Taxonomy":
        self.expression.operator(field, filters.ABOVE, term)
        return self

    def query(self, mapping: Mapping[str, Any]) -> "Taxonomy":
        """Merge a prebuilt filter mapping, key by key."""
        self.expression.update(mapping)
        return self

    def to_request(self) -> RequestDescriptor:
        return self._prepare(
            self.path,
            expression=self.expression,
            include_empty_query=True,
            send_environment=False,
        )

    def find(
        self, callback: Optional[Callback[TaxonomyResult]] = None
    ) -> "Future[Optional[TaxonomyResult]]":
        return self._submit(
            self.to_request(), callback, taxonomy_result_from_response, "taxonomy.find"
        )
