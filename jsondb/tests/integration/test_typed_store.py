from typing import List

import pytest
from pydantic import BaseModel

from jsondb import SerializationError, Store, database
from jsondb.codec import PydanticCodec


class Profile(BaseModel):
    name: str
    languages: List[str] = []


def test_typed_store_returns_models(tmp_path):
    store = database({"path": tmp_path}, value_type=Profile)
    store.set("ann", Profile(name="Ann", languages=["en", "fi"]))

    loaded = store.get("ann")

    assert isinstance(loaded, Profile)
    assert loaded.languages == ["en", "fi"]
    assert store.map() == {"ann": Profile(name="Ann", languages=["en", "fi"])}


def test_typed_store_rejects_invalid_values(tmp_path):
    store = database({"path": tmp_path}, value_type=Profile)

    with pytest.raises(SerializationError):
        store.set("bad", {"languages": ["en"]})

    assert store.size() == 0


def test_typed_store_reads_files_written_by_untyped_store(tmp_path):
    database({"path": tmp_path}).set("bob", {"name": "Bob"})
    typed = Store(tmp_path, codec=PydanticCodec(Profile))

    assert typed.get_or_fail("bob") == Profile(name="Bob")


def test_typed_store_flags_foreign_content(tmp_path):
    database({"path": tmp_path}).set("count", 3)
    typed = database({"path": tmp_path}, value_type=Profile)

    with pytest.raises(SerializationError) as excinfo:
        typed.get("count")

    assert excinfo.value.key == "count"
