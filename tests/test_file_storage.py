"""Tests for FileStorage: JSON format, corruption detection and atomic writes."""

import json
import os

import pytest

from contactbook.domain import (
    Contact,
    ContactId,
    Corrupt,
    Email,
    ErrorKind,
    PhoneNumber,
    StorageIOError,
    StoreFileMissing,
)
from contactbook.infrastructure.persistence import FileStorage


def _alice() -> Contact:
    c = Contact.new("Alice", "Smith")
    c.add_phone(PhoneNumber.create("(555) 123-4567"))
    c.add_email(Email.create("Alice@Example.com"))
    c.set_notes("Neighbour")
    c.add_tag("friends")
    c.set_metadata("birthday", "1990-04-01")
    return c


def _write(path, obj) -> None:
    path.write_text(json.dumps(obj), encoding="utf-8")


def test_load_missing_file_raises_store_file_missing(tmp_path):
    with pytest.raises(StoreFileMissing) as exc_info:
        FileStorage(tmp_path / "contacts.json").load()
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


def test_save_then_load_round_trips_in_order(tmp_path):
    storage = FileStorage(tmp_path / "contacts.json")
    contacts = [_alice(), Contact.new("Bob", "Jones"), Contact.new("", "Adams")]
    storage.save(contacts)

    loaded = storage.load()
    assert list(loaded) == [c.id for c in contacts]
    assert list(loaded.values()) == contacts


def test_saved_file_uses_stable_field_names(tmp_path):
    path = tmp_path / "contacts.json"
    alice = _alice()
    FileStorage(path).save([alice])

    data = json.loads(path.read_text(encoding="utf-8"))
    record = data["contacts"][str(alice.id)]
    assert record == {
        "id": str(alice.id),
        "first_name": "Alice",
        "last_name": "Smith",
        "phone_numbers": [{"value": "5551234567"}],
        "emails": [{"value": "Alice@example.com"}],
        "notes": "Neighbour",
        "tags": ["friends"],
        "metadata": {"birthday": "1990-04-01"},
    }


def test_save_creates_parent_directory_and_leaves_no_temp_files(tmp_path):
    path = tmp_path / "nested" / "dir" / "contacts.json"
    storage = FileStorage(path)
    storage.save([_alice()])
    storage.save([_alice(), _alice()])
    assert os.listdir(path.parent) == ["contacts.json"]


def test_truncated_json_is_corrupt(tmp_path):
    path = tmp_path / "contacts.json"
    FileStorage(path).save([_alice(), Contact.new("Bob", "Jones")])
    text = path.read_text(encoding="utf-8")
    path.write_text(text[: len(text) // 2], encoding="utf-8")

    with pytest.raises(Corrupt) as exc_info:
        FileStorage(path).load()
    assert exc_info.value.kind is ErrorKind.CORRUPT
    assert "invalid JSON" in exc_info.value.detail


def test_empty_file_is_empty_store(tmp_path):
    path = tmp_path / "contacts.json"
    path.write_text("  \n", encoding="utf-8")
    assert FileStorage(path).load() == {}


def test_key_not_matching_id_is_corrupt(tmp_path):
    path = tmp_path / "contacts.json"
    key = str(ContactId.generate())
    other = str(ContactId.generate())
    _write(path, {"contacts": {key: {"id": other, "first_name": "A", "last_name": "B"}}})
    with pytest.raises(Corrupt, match="does not match"):
        FileStorage(path).load()


def test_duplicate_keys_are_corrupt(tmp_path):
    path = tmp_path / "contacts.json"
    key = str(ContactId.generate())
    record = json.dumps({"id": key, "first_name": "A", "last_name": "B"})
    path.write_text(
        '{"contacts": {"%s": %s, "%s": %s}}' % (key, record, key, record),
        encoding="utf-8",
    )
    with pytest.raises(Corrupt, match="duplicate key"):
        FileStorage(path).load()


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"people": {}},
        {"contacts": []},
        {"contacts": {"x": "not an object"}},
    ],
)
def test_wrong_shape_is_corrupt(tmp_path, document):
    path = tmp_path / "contacts.json"
    _write(path, document)
    with pytest.raises(Corrupt):
        FileStorage(path).load()


@pytest.mark.parametrize(
    "overrides",
    [
        {"first_name": 42},
        {"first_name": "", "last_name": ""},
        {"phone_numbers": [{"value": "12"}]},
        {"emails": [{"value": "not-an-email"}]},
        {"metadata": {"nested": {"a": "b"}}},
        {"tags": "friends"},
        {"phone_numbers": [{"value": "5551234567"}, {"value": "5551234567"}]},
        {"phone_numbers": [{"value": "5551234567"}, {"value": "555-123-4567"}]},
        {"emails": [{"value": "a@x.com"}, {"value": "a@X.COM"}]},
        {"tags": ["x", "x"]},
        {"tags": ["x", "  "]},
        {"notes": "  padded  "},
        {"notes": ""},
        {"first_name": " A"},
    ],
)
def test_invalid_contact_values_are_corrupt(tmp_path, overrides):
    path = tmp_path / "contacts.json"
    key = str(ContactId.generate())
    record = {"id": key, "first_name": "A", "last_name": "B", **overrides}
    _write(path, {"contacts": {key: record}})
    with pytest.raises(Corrupt):
        FileStorage(path).load()


def test_unreadable_path_is_io_error(tmp_path):
    path = tmp_path / "contacts.json"
    path.mkdir()
    with pytest.raises(StorageIOError) as exc_info:
        FileStorage(path).load()
    assert exc_info.value.kind is ErrorKind.IO_ERROR


def test_failed_replace_keeps_previous_file_and_removes_temp(tmp_path, monkeypatch):
    path = tmp_path / "contacts.json"
    storage = FileStorage(path)
    alice = _alice()
    storage.save([alice])
    before = path.read_bytes()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(StorageIOError, match="disk full"):
        storage.save([alice, Contact.new("Bob", "Jones")])

    assert path.read_bytes() == before
    assert os.listdir(tmp_path) == ["contacts.json"]


def test_unserializable_contact_is_io_error_and_leaves_no_file(tmp_path):
    path = tmp_path / "contacts.json"
    contact = Contact.new("Alice", "Smith")
    contact.notes = "bytes \udcff from argv"

    with pytest.raises(StorageIOError) as exc_info:
        FileStorage(path).save([contact])
    assert isinstance(exc_info.value.cause, ValueError)
    assert os.listdir(tmp_path) == []
