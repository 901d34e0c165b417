from storeseed.services.reference_index import ReferenceIndex


def test_lookup_by_key_field():
    index = ReferenceIndex.from_records([{"sku": "A1", "name": "Tote"}, {"sku": "B2"}], "sku")
    assert index.get("A1") == {"sku": "A1", "name": "Tote"}
    assert "B2" in index
    assert len(index) == 2


def test_unknown_key_returns_none():
    index = ReferenceIndex.from_records([{"sku": "A1"}], "sku")
    assert index.get("Z9") is None
    assert "Z9" not in index


def test_records_without_key_are_skipped():
    index = ReferenceIndex.from_records([{"name": "no sku"}, {"sku": ""}, "junk", None, {"sku": "A1"}], "sku")
    assert list(index) == ["A1"]


def test_later_duplicate_wins():
    index = ReferenceIndex.from_records([{"sku": "A1", "v": 1}, {"sku": "A1", "v": 2}], "sku")
    assert index.get("A1")["v"] == 2
    assert len(index) == 1


def test_index_holds_copies():
    record = {"sku": "A1", "name": "Tote"}
    index = ReferenceIndex.from_records([record], "sku")
    record["name"] = "changed"
    assert index.get("A1")["name"] == "Tote"


def test_empty_index():
    index = ReferenceIndex.from_records([], "userId")
    assert len(index) == 0
    assert index.key_field == "userId"
