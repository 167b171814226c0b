from lexlingo.database import get_db_connection


def test_missing_key_returns_none(storage):
    assert storage.get_item("vocabulary") is None


def test_set_then_get(storage):
    storage.set_item("vocabulary", "[]")
    assert storage.get_item("vocabulary") == "[]"


def test_set_overwrites_whole_value(storage):
    storage.set_item("vocabulary", '[{"id": 1}]')
    storage.set_item("vocabulary", "[]")
    assert storage.get_item("vocabulary") == "[]"

    conn = get_db_connection()
    count = conn.execute("SELECT COUNT(*) FROM storage").fetchone()[0]
    conn.close()
    assert count == 1


def test_remove_item(storage):
    storage.set_item("vocabulary", "[]")
    storage.remove_item("vocabulary")
    assert storage.get_item("vocabulary") is None


def test_slots_are_independent(storage):
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    storage.remove_item("a")
    assert storage.get_item("b") == "2"
