from src.app.controllers.app_generation_controller import parse_collection
from src.app.models.domain.collection import (
    SourceCollection,
    SourceItem,
    is_collection,
)


def test_is_collection_requires_info_and_item_list():
    assert is_collection({"info": {"name": "x"}, "item": []})
    assert not is_collection({"info": {"name": "x"}})
    assert not is_collection({"info": {"name": "x"}, "item": None})
    assert not is_collection({"info": {"name": "x"}, "item": {"a": 1}})
    assert not is_collection({"item": []})
    assert not is_collection([{"info": {}, "item": []}])


def test_empty_info_object_still_counts_as_present():
    assert is_collection({"info": {}, "item": []})
    assert is_collection({"info": [], "item": []})
    assert is_collection({"info": "v2.1", "item": []})
    assert not is_collection({"info": "", "item": []})
    assert not is_collection({"info": 0, "item": []})
    assert not is_collection({"info": None, "item": []})
    assert parse_collection(b'{"info": {}, "item": []}') == {"info": {}, "item": []}


def test_numeric_fields_are_read_as_text():
    item = SourceItem.model_validate({"name": 42, "request": {"method": 1, "url": 8080}})
    assert item.name == "42"
    assert item.method == "1"
    assert item.url == "8080"
    assert not item.is_retained

    collection = SourceCollection.model_validate({"info": {"name": 7}, "item": []})
    assert collection.name == "7"


def test_empty_request_is_absent():
    assert SourceItem.model_validate({"name": "Blank", "request": ""}).request is None
    assert SourceItem.model_validate({"name": "Null", "request": None}).request is None
    empty_object = SourceItem.model_validate({"name": "Bare", "request": {}})
    assert empty_object.is_retained
    assert empty_object.url == ""


def test_stray_item_entries_keep_their_position():
    collection = SourceCollection.model_validate(
        {"info": {}, "item": ["stray", None, {"name": "Ping", "request": "https://a/ping"}]}
    )
    assert len(collection.item) == 3
    assert [item.is_retained for item in collection.item] == [False, False, True]
    assert collection.retained_count == 1


def test_method_defaults_to_get():
    item = SourceItem.model_validate({"name": "Users", "request": {"url": "https://a"}})
    assert item.method == "GET"
    assert item.is_retained


def test_method_comparison_is_case_insensitive():
    item = SourceItem.model_validate({"request": {"method": "get", "url": "u"}})
    assert item.is_retained
    assert item.method == "get"


def test_item_without_request_is_not_retained():
    folder = SourceItem.model_validate({"name": "Folder", "item": [{"name": "child"}]})
    assert not folder.is_retained


def test_non_get_item_is_not_retained():
    item = SourceItem.model_validate({"request": {"method": "POST", "url": "u"}})
    assert not item.is_retained


def test_url_prefers_raw():
    item = SourceItem.model_validate(
        {
            "request": {
                "method": "GET",
                "url": {"raw": "{{base}}/users", "host": ["{{base}}"], "path": ["users"]},
            }
        }
    )
    assert item.url == "{{base}}/users"


def test_url_plain_string():
    item = SourceItem.model_validate({"request": {"method": "GET", "url": "https://a/b"}})
    assert item.url == "https://a/b"


def test_url_rebuilt_from_parts_without_raw():
    item = SourceItem.model_validate(
        {
            "request": {
                "method": "GET",
                "url": {
                    "protocol": "https",
                    "host": ["api", "example", "com"],
                    "path": ["v1", "orders"],
                    "query": [
                        {"key": "page", "value": "2"},
                        {"key": "skip", "value": "x", "disabled": True},
                    ],
                },
            }
        }
    )
    assert item.url == "https://api.example.com/v1/orders?page=2"


def test_url_missing_is_empty():
    item = SourceItem.model_validate({"request": {"method": "GET"}})
    assert item.url == ""


def test_string_request_is_a_get_of_that_url():
    item = SourceItem.model_validate({"name": "Ping", "request": "https://a/ping"})
    assert item.is_retained
    assert item.url == "https://a/ping"


def test_structured_description_uses_content():
    item = SourceItem.model_validate(
        {"request": {"url": "u"}, "description": {"content": "Lists users", "type": "text/plain"}}
    )
    assert item.description_text == "Lists users"


def test_collection_counts_retained_items(sample_collection):
    collection = SourceCollection.model_validate(sample_collection)
    assert collection.name == "Kite Connect"
    assert collection.description_text == "Trading API"
    assert len(collection.item) == 3
    assert collection.retained_count == 2


def test_collection_with_non_object_info():
    collection = SourceCollection.model_validate({"info": "legacy", "item": []})
    assert collection.name is None
