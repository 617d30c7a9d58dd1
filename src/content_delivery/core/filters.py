"""
Filter expression tree shared by entry queries and taxonomy queries.

The tree is a MongoDB-style query document: field paths map either to a
literal or to an ``{operator: operand}`` dict, and the combinator keys
``$or``/``$and`` sit at the top level. Every insert replaces whatever the
key held before; nothing is merged.
"""

import copy
import json
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

OR = "$or"
AND = "$and"

LESS_THAN = "$lt"
LESS_THAN_OR_EQUAL = "$lte"
GREATER_THAN = "$gt"
GREATER_THAN_OR_EQUAL = "$gte"
NOT_EQUAL = "$ne"
IN = "$in"
NOT_IN = "$nin"
EXISTS = "$exists"
REGEX = "$regex"
REGEX_OPTIONS = "$options"

EQUAL_AND_BELOW = "$eq_below"
BELOW = "$below"
EQUAL_AND_ABOVE = "$eq_above"
ABOVE = "$above"


def compact_json(value: Any) -> str:
    """Serialize ``value`` the way the delivery API expects it on the wire."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def level_term(term: str, level: int) -> str:
    """Encode a term and a depth level into the single string the API reads."""
    return f"{term}, level: {level}"


def list_string_form(conditions: Iterable[Mapping[str, Any]]) -> str:
    """Render a list of conditions as one string, e.g. ``[{"a":"b"}, {"c":"d"}]``."""
    return "[" + ", ".join(compact_json(dict(c)) for c in conditions) + "]"


class FilterExpression:
    """Ordered, last-write-wins mapping of field paths to predicates."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._tree: Dict[str, Any] = {}
        if initial:
            self.update(initial)

    def set(self, field: Optional[str], predicate: Any) -> "FilterExpression":
        """Store ``predicate`` for ``field``, replacing any previous predicate."""
        self._tree[field] = predicate
        return self

    def operator(self, field: Optional[str], op: str, operand: Any) -> "FilterExpression":
        return self.set(field, {op: operand})

    def update(self, mapping: Mapping[str, Any]) -> "FilterExpression":
        for field, predicate in mapping.items():
            self.set(field, predicate)
        return self

    def remove(self, field: str) -> None:
        self._tree.pop(field, None)

    def get(self, field: Optional[str], default: Any = None) -> Any:
        return self._tree.get(field, default)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._tree)

    def to_json(self) -> str:
        return compact_json(self._tree)

    def __contains__(self, field: object) -> bool:
        return field in self._tree

    def __iter__(self) -> Iterator[str]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __bool__(self) -> bool:
        return bool(self._tree)

    def __repr__(self) -> str:
        return f"FilterExpression({self._tree!r})"


def combine(expressions: List[FilterExpression]) -> List[Dict[str, Any]]:
    """Snapshot several expressions into the structural list used by ``$or``/``$and``."""
    return [expression.to_dict() for expression in expressions]
