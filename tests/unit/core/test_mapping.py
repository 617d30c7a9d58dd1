import json

import pytest

from content_delivery.core.mapping import (
    asset_from_response,
    assets_from_response,
    content_type_from_response,
    content_types_from_response,
    entry_from_response,
    global_fields_from_response,
    map_asset,
    map_entry,
    parse_publish_details,
    query_result_from_response,
    sync_result_from_response,
    taxonomy_result_from_response,
)
from content_delivery.exceptions import ResponseTypeError
from content_delivery.models import PublishDetails


@pytest.fixture
def entry_source():
    return {
        "uid": "blt01",
        "title": "Hello",
        "url": "/hello",
        "locale": "en-us",
        "tags": ["news", "featured"],
        "_version": 3,
        "created_at": "2024-01-01T00:00:00.000Z",
        "created_by": "user_a",
        "updated_at": "2024-01-02T00:00:00.000Z",
        "updated_by": "user_b",
        "is_dir": False,
        "_in_progress": True,
        "_owner": {"uid": "owner_1"},
        "publish_details": {
            "environment": "production",
            "time": "2024-01-03T00:00:00.000Z",
            "user": "user_c",
        },
        "summary": "Custom field value",
    }


class TestMapEntry:
    def test_scalar_fields(self, entry_source):
        entry = map_entry(entry_source, "blog_post")

        assert entry.uid == "blt01"
        assert entry.title == "Hello"
        assert entry.url == "/hello"
        assert entry.locale == "en-us"
        assert entry.language == "en-us"
        assert entry.content_type_uid == "blog_post"
        assert entry.version == 3
        assert entry.created_by == "user_a"
        assert entry.updated_at == "2024-01-02T00:00:00.000Z"
        assert entry.is_directory is False
        assert entry.in_progress is True
        assert entry.owner == {"uid": "owner_1"}

    def test_publish_details(self, entry_source):
        entry = map_entry(entry_source)

        assert entry.publish_details == PublishDetails(
            "production", "2024-01-03T00:00:00.000Z", "user_c"
        )
        assert entry.metadata == {"publish_details": entry.publish_details}
        assert entry.environment == "production"
        assert entry.user == "user_c"

    def test_absent_fields_are_none(self):
        entry = map_entry({})

        assert entry.uid is None
        assert entry.title is None
        assert entry.tags is None
        assert entry.version == 1
        assert entry.publish_details is None
        assert entry.metadata is None
        assert entry.environment is None

    def test_tags_keep_order(self, entry_source):
        assert map_entry(entry_source).tags == ("news", "featured")

    def test_empty_tags_are_none(self):
        assert map_entry({"tags": []}).tags is None

    def test_non_list_tags_are_none(self):
        assert map_entry({"tags": "news"}).tags is None

    def test_non_string_tags_skipped(self):
        assert map_entry({"tags": [None, "news", {"a": 1}, 3]}).tags == ("news",)
        assert map_entry({"tags": [None]}).tags is None

    def test_tags_are_immutable(self, entry_source):
        with pytest.raises(AttributeError):
            map_entry(entry_source).tags.append("late")

    def test_flags_must_be_real_booleans(self):
        entry = map_entry({"is_dir": "true", "_in_progress": 1})

        assert entry.is_directory is None
        assert entry.in_progress is None

    def test_publish_details_not_an_object(self):
        """A present but unusable publish_details still records the attempt"""
        entry = map_entry({"uid": "a", "publish_details": "not_an_object"})

        assert entry.publish_details is None
        assert entry.metadata == {"publish_details": None}

    def test_raw_is_a_private_copy(self, entry_source):
        entry = map_entry(entry_source)
        entry_source["summary"] = "changed"
        entry_source["tags"].append("late")

        assert entry.get_string("summary") == "Custom field value"
        assert entry.tags == ("news", "featured")

    def test_numeric_title_rendered(self):
        assert map_entry({"title": 42}).title == "42"

    @pytest.mark.parametrize("literal", ["1e400", "-1e400", "NaN"])
    def test_non_finite_version_uses_default(self, literal):
        entry = map_entry(json.loads(f'{{"uid": "a", "_version": {literal}}}'))
        assert entry.version == 1


class TestParsePublishDetails:
    def test_absent(self):
        assert parse_publish_details({}) == (None, None)

    def test_partial_object(self):
        details, metadata = parse_publish_details({"publish_details": {"environment": "dev"}})

        assert details == PublishDetails(environment="dev")
        assert metadata == {"publish_details": details}


class TestMapAsset:
    def test_fields(self):
        asset = map_asset(
            {
                "uid": "asset_1",
                "content_type": "image/png",
                "file_size": "2048",
                "filename": "logo.png",
                "url": "https://images.example.com/logo.png",
                "title": "Logo",
                "tags": ["brand"],
                "_version": 2,
                "count": 1,
                "objects": 10,
            }
        )

        assert asset.uid == "asset_1"
        assert asset.content_type == "image/png"
        assert asset.file_size == "2048"
        assert asset.file_name == "logo.png"
        assert asset.url == "https://images.example.com/logo.png"
        assert asset.tags == ("brand",)
        assert asset.version == 2
        assert asset.count == 1
        assert asset.total_count == 10

    def test_empty_tags_are_none(self):
        assert map_asset({"tags": []}).tags is None


class TestEntryResponses:
    def test_wrapped_entry(self):
        entry = entry_from_response({"entry": {"uid": "a"}}, "blog_post")

        assert entry.uid == "a"
        assert entry.content_type_uid == "blog_post"

    def test_entry_not_an_object(self):
        assert entry_from_response({"entry": ["a"]}) is None

    def test_query_result(self):
        result = query_result_from_response(
            {
                "entries": [{"uid": "a"}, "skip me", {"uid": "b"}],
                "count": 2,
                "schema": [{"uid": "title"}],
                "content_type": {"uid": "blog_post"},
            },
            "blog_post",
        )

        assert [e.uid for e in result.entries] == ["a", "b"]
        assert all(e.content_type_uid == "blog_post" for e in result.entries)
        assert result.count == 2
        assert result.schema == [{"uid": "title"}]
        assert result.content_type == {"uid": "blog_post"}

    def test_query_result_missing_entries(self):
        result = query_result_from_response({"count": 0})

        assert result.entries == []
        assert result.schema is None

    def test_non_finite_numbers_fall_back(self):
        result = query_result_from_response(
            json.loads('{"entries": [{"uid": "a", "_version": 1e400}], "count": 1e400}')
        )

        assert result.entries[0].version == 1
        assert result.count == 0

    def test_taxonomy_result(self):
        result = taxonomy_result_from_response({"entries": [{"uid": "a"}], "count": 1})

        assert len(result.entries) == 1
        assert result.count == 1


class TestAssetResponses:
    def test_single_asset(self):
        assert asset_from_response({"asset": {"uid": "x"}}).uid == "x"

    def test_assets_with_objects_count(self):
        result = assets_from_response({"assets": [{"uid": "x"}, {"uid": "y"}], "objects": 9})

        assert [a.uid for a in result.assets] == ["x", "y"]
        assert result.count == 9

    def test_non_finite_asset_counts(self):
        asset = map_asset(json.loads('{"uid": "x", "count": 1e400, "objects": NaN}'))

        assert asset.count == 0
        assert asset.total_count == 0

    def test_assets_mixed_array(self):
        result = assets_from_response({"assets": [{"uid": "x"}, 1, "two", None]})
        assert len(result.assets) == 1

    def test_missing_assets_key(self):
        assert assets_from_response({}).assets == []

    @pytest.mark.parametrize("value", ["not_a_list", 12345, True, {}])
    def test_assets_wrong_type_raises(self, value):
        with pytest.raises(ResponseTypeError, match="Invalid type for 'assets' key"):
            assets_from_response({"assets": value})


class TestSchemaResponses:
    def test_content_type(self):
        content_type = content_type_from_response(
            {"content_type": {"uid": "blog_post", "title": "Blog", "schema": [{"uid": "title"}]}}
        )

        assert content_type.uid == "blog_post"
        assert content_type.schema == [{"uid": "title"}]

    def test_content_types(self):
        result = content_types_from_response(
            {"content_types": [{"uid": "a"}, {"uid": "b"}], "count": 2}
        )

        assert [c.uid for c in result.content_types] == ["a", "b"]
        assert result.count == 2

    def test_global_fields_non_list_degrades(self):
        result = global_fields_from_response({"global_fields": "oops"})

        assert result.global_fields == []
        assert result.count == 0


class TestSyncResult:
    def test_page(self):
        result = sync_result_from_response(
            {
                "items": [{"type": "entry_published", "data": {"uid": "a"}}, "junk"],
                "skip": 0,
                "limit": 100,
                "total_count": 1,
                "pagination_token": "page_2",
            }
        )

        assert result.items == [{"type": "entry_published", "data": {"uid": "a"}}]
        assert result.limit == 100
        assert result.total_count == 1
        assert result.pagination_token == "page_2"
        assert result.sync_token is None

    def test_non_finite_paging_numbers(self):
        result = sync_result_from_response(json.loads('{"skip": -1e400, "limit": NaN}'))

        assert result.skip == 0
        assert result.limit == 0

    def test_final_page(self):
        result = sync_result_from_response({"items": [], "sync_token": "token_9"})

        assert result.pagination_token is None
        assert result.sync_token == "token_9"
