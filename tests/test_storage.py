import pytest

from app.client import MemoryTokenStorage, StorageEvent, TokenStorage


def test_storage_subclass_must_implement_every_operation():
    class ReadOnlyStorage(TokenStorage):
        def get(self):
            return None

    with pytest.raises(TypeError):
        ReadOnlyStorage()


def test_writer_is_not_notified_of_its_own_change():
    storage = MemoryTokenStorage()
    writer, other = object(), object()
    seen = {"writer": [], "other": []}
    storage.subscribe(seen["writer"].append, owner=writer)
    storage.subscribe(seen["other"].append, owner=other)

    storage.set("abc", origin=writer)

    assert seen["writer"] == []
    assert seen["other"] == [StorageEvent(key="token", old_value=None, new_value="abc")]
