from algolia_client import BatchAction, BatchRequest, IdentifierMissing
from algolia_client.batch import build_batch


def test_copies_identifier_attribute_into_object_id():
    batch = build_batch([{"name": "a", "sku": "X1"}, {"name": "b", "sku": "X2"}], "updateObject", "sku")
    assert isinstance(batch, BatchRequest)
    assert [op.objectID for op in batch.requests] == ["X1", "X2"]
    assert all(op.action == "updateObject" for op in batch.requests)
    assert batch.requests[0].body == {"name": "a", "sku": "X1", "objectID": "X1"}


def test_missing_attribute_fails_fast():
    assert build_batch([{"sku": "X1"}, {"name": "b"}], "updateObject", "sku") == IdentifierMissing(attribute="sku")


def test_default_attribute_passes_objects_through():
    batch = build_batch([{"objectID": "1", "name": "a"}], BatchAction.UPDATE_OBJECT)
    assert batch.to_payload() == {
        "requests": [{"action": "updateObject", "body": {"objectID": "1", "name": "a"}, "objectID": "1"}]
    }


def test_add_object_omits_object_id():
    batch = build_batch([{"name": "a"}, {"name": "b"}], BatchAction.ADD_OBJECT)
    assert len(batch) == 2
    assert batch.to_payload()["requests"][0] == {"action": "addObject", "body": {"name": "a"}}


def test_update_without_object_id_fails():
    assert build_batch([{"name": "a"}], "updateObject") == IdentifierMissing(attribute="objectID")


def test_enum_attribute_is_normalised():
    from enum import Enum

    class Field(str, Enum):
        SKU = "sku"

    batch = build_batch([{"sku": "X1"}], "partialUpdateObject", Field.SKU)
    assert batch.requests[0].objectID == "X1"
