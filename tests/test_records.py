from recordsync.core.records import clean_record, is_deletion, RECORD_FIELDS_TO_CLEAN


def test_clean_record_strips_bookkeeping_fields():
    record = {"id": "1", "title": "foo", "_status": "created", "last_modified": 42}
    cleaned = clean_record(record)
    assert cleaned == {"id": "1", "title": "foo"}
    for field in RECORD_FIELDS_TO_CLEAN:
        assert field not in cleaned


def test_clean_record_without_bookkeeping_fields_is_equal():
    record = {"id": "1", "title": "foo", "done": False}
    assert clean_record(record) == record


def test_clean_record_does_not_mutate_input():
    record = {"id": "1", "_status": "deleted", "last_modified": 42}
    clean_record(record)
    assert record == {"id": "1", "_status": "deleted", "last_modified": 42}


def test_clean_record_returns_new_mapping():
    record = {"id": "1"}
    assert clean_record(record) is not record


def test_clean_record_preserves_key_order():
    record = {"z": 1, "_status": "x", "a": 2, "last_modified": 3, "m": 4}
    assert list(clean_record(record)) == ["z", "a", "m"]


def test_clean_record_custom_exclusions():
    record = {"id": "1", "title": "foo", "_status": "created"}
    assert clean_record(record, exclude_fields=["title"]) == {"id": "1", "_status": "created"}


def test_clean_record_empty():
    assert clean_record({}) == {}


def test_is_deletion():
    assert is_deletion({"id": "1", "_status": "deleted"})
    assert not is_deletion({"id": "1", "_status": "updated"})
    assert not is_deletion({"id": "1"})
