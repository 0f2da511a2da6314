"""Persisted display name."""

import pytest

from roomnotes.client.identity import IdentityStore, MissingIdentityError


def test_save_and_load(tmp_path):
    store = IdentityStore(tmp_path / "nested" / "identity.json")
    store.save("  alice ")
    assert store.load() == "alice"
    assert IdentityStore(store.path).require() == "alice"


def test_missing_identity(tmp_path):
    store = IdentityStore(tmp_path / "identity.json")
    assert store.load() is None
    with pytest.raises(MissingIdentityError):
        store.require()


def test_empty_username_rejected(tmp_path):
    with pytest.raises(ValueError):
        IdentityStore(tmp_path / "identity.json").save("   ")


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text("{not json", encoding="utf-8")
    assert IdentityStore(path).load() is None


def test_clear(tmp_path):
    store = IdentityStore(tmp_path / "identity.json")
    store.save("alice")
    store.clear()
    store.clear()
    assert store.load() is None
