import json

from jsondb import database


def test_store_lifecycle_on_disk(tmp_path):
    root = tmp_path / "database"
    store = database({"path": root})

    for index in range(5):
        store.set(f"user{index}", {"id": index})
    store.delete("user0")
    store.set("user1", {"id": 1, "renamed": True})

    assert store.size() == len(store.keys()) == 4
    assert json.loads((root / "user1.json").read_text(encoding="utf-8")) == {"id": 1, "renamed": True}

    reopened = database({"path": root})
    assert reopened.map() == store.map()

    reopened.clear()

    assert store.size() == 0
    assert all(not store.has(f"user{index}") for index in range(5))
    assert root.is_dir()


def test_default_root_is_relative_to_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    store = database()
    store.set("k", "v")

    assert (tmp_path / "database" / "k.json").is_file()
