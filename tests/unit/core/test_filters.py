import json

from content_delivery.core.filters import (
    FilterExpression,
    combine,
    compact_json,
    level_term,
    list_string_form,
)


class TestCompactJson:
    def test_no_whitespace(self):
        assert compact_json({"a": [1, 2], "b": {"c": True}}) == '{"a":[1,2],"b":{"c":true}}'

    def test_keeps_non_ascii(self):
        assert compact_json({"title": "café"}) == '{"title":"café"}'

    def test_preserves_insertion_order(self):
        assert compact_json({"z": 1, "a": 2}) == '{"z":1,"a":2}'


class TestLevelTerm:
    def test_level_format(self):
        assert level_term("blue", 3) == "blue, level: 3"


class TestListStringForm:
    def test_joins_with_comma_space(self):
        rendered = list_string_form([{"a": "b"}, {"c": "d"}])
        assert rendered == '[{"a":"b"}, {"c":"d"}]'

    def test_empty(self):
        assert list_string_form([]) == "[]"


class TestFilterExpression:
    def test_empty_expression_serializes_to_empty_object(self):
        expression = FilterExpression()
        assert not expression
        assert expression.to_json() == "{}"

    def test_last_write_wins(self):
        """Writing a field twice keeps only the second predicate"""
        expression = FilterExpression()
        expression.operator("color", "$in", ["red"])
        expression.operator("color", "$exists", True)

        assert expression.to_dict() == {"color": {"$exists": True}}

    def test_overwrite_keeps_key_position(self):
        expression = FilterExpression()
        expression.set("a", 1).set("b", 2).set("a", 3)

        assert list(expression) == ["a", "b"]
        assert expression.to_json() == '{"a":3,"b":2}'

    def test_operator_builds_single_key_dict(self):
        expression = FilterExpression().operator("rating", "$gt", 3)
        assert expression.get("rating") == {"$gt": 3}

    def test_initial_mapping_and_update(self):
        expression = FilterExpression({"a": 1})
        expression.update({"b": 2, "a": 5})

        assert expression.to_dict() == {"a": 5, "b": 2}
        assert len(expression) == 2
        assert "b" in expression

    def test_remove(self):
        expression = FilterExpression({"a": 1, "b": 2})
        expression.remove("a")
        expression.remove("missing")
        assert expression.to_dict() == {"b": 2}

    def test_none_field_passes_through(self):
        expression = FilterExpression().set(None, "x")
        assert json.loads(expression.to_json()) == {"null": "x"}

    def test_to_dict_is_a_snapshot(self):
        expression = FilterExpression({"tags": {"$in": ["a"]}})
        snapshot = expression.to_dict()
        snapshot["tags"]["$in"].append("b")

        assert expression.get("tags") == {"$in": ["a"]}

    def test_serialization_is_idempotent(self):
        expression = FilterExpression().operator("title", "$regex", "^Hello")
        assert expression.to_json() == expression.to_json()


class TestCombine:
    def test_snapshots_each_expression(self):
        first = FilterExpression({"title": "a"})
        second = FilterExpression().operator("rating", "$gt", 3)

        combined = combine([first, second])
        first.set("title", "changed")

        assert combined == [{"title": "a"}, {"rating": {"$gt": 3}}]
