"""Unit tests for the Contact entity: invariants, idempotent mutations, search matching."""

import pytest

from contactbook.domain import (
    Contact,
    ContactId,
    Email,
    InvalidName,
    PhoneNumber,
    ValidationError,
)


def _contact(first: str = "Alice", last: str = "Smith") -> Contact:
    return Contact.new(first, last)


def test_new_assigns_fresh_id_and_empty_collections():
    a = _contact()
    b = _contact()
    assert isinstance(a.id, ContactId)
    assert a.id != b.id
    assert a.phone_numbers == []
    assert a.emails == []
    assert a.notes is None
    assert a.tags == []
    assert a.metadata == {}


def test_new_trims_names_and_accepts_single_name():
    c = Contact.new("  Cher ", "   ")
    assert c.first_name == "Cher"
    assert c.last_name == ""
    assert c.full_name == "Cher"


@pytest.mark.parametrize(("first", "last"), [("", ""), ("   ", "\t"), (None, None)])
def test_new_rejects_missing_names(first, last):
    with pytest.raises(InvalidName):
        Contact.new(first, last)


def test_name_length_and_control_characters_are_rejected():
    with pytest.raises(InvalidName):
        Contact.new("A" * 101, "Smith")
    with pytest.raises(InvalidName):
        Contact.new("Al\x00ice", "Smith")


def test_id_cannot_be_reassigned():
    c = _contact()
    with pytest.raises(AttributeError):
        c.id = ContactId.generate()


def test_add_duplicate_phone_in_other_format_is_noop():
    c = _contact()
    c.add_phone(PhoneNumber.create("555-123-4567"))
    c.add_phone(PhoneNumber.create("(555) 123 4567"))
    assert len(c.phone_numbers) == 1


def test_remove_absent_phone_and_email_leaves_contact_unchanged():
    c = _contact()
    c.add_phone(PhoneNumber.create("5551234567"))
    c.add_email(Email.create("alice@example.com"))
    before = Contact(
        id=c.id,
        first_name=c.first_name,
        last_name=c.last_name,
        phone_numbers=list(c.phone_numbers),
        emails=list(c.emails),
    )
    c.remove_phone(PhoneNumber.create("5550000000"))
    c.remove_email(Email.create("other@example.com"))
    assert c == before


def test_emails_dedupe_on_normalized_domain():
    c = _contact()
    c.add_email(Email.create("alice@Example.com"))
    c.add_email(Email.create("alice@example.COM"))
    assert [e.value for e in c.emails] == ["alice@example.com"]
    c.remove_email(Email.create("alice@EXAMPLE.com"))
    assert c.emails == []


def test_rename_failure_leaves_contact_unchanged():
    c = _contact()
    with pytest.raises(InvalidName):
        c.rename(" ", "")
    assert (c.first_name, c.last_name) == ("Alice", "Smith")
    c.rename("Alicia", "")
    assert (c.first_name, c.last_name) == ("Alicia", "")


def test_notes_tags_and_metadata():
    c = _contact()
    c.set_notes("  met at the conference ")
    assert c.notes == "met at the conference"
    c.set_notes("   ")
    assert c.notes is None

    c.add_tag("friends")
    c.add_tag(" friends ")
    c.add_tag("work")
    assert c.tags == ["friends", "work"]
    c.remove_tag("friends")
    c.remove_tag("missing")
    assert c.tags == ["work"]
    with pytest.raises(ValidationError):
        c.add_tag("  ")

    c.set_metadata("company", "Acme")
    c.set_metadata("company", "Initech")
    assert c.metadata == {"company": "Initech"}
    c.remove_metadata("company")
    c.remove_metadata("company")
    assert c.metadata == {}
    with pytest.raises(ValidationError):
        c.set_metadata("", "x")


def test_constructor_dedupes_collections():
    phone = PhoneNumber.create("5551234567")
    c = Contact(
        id=ContactId.generate(),
        first_name="Bob",
        phone_numbers=[phone, PhoneNumber.create("555 123 4567")],
        tags=["a", "a", " "],
    )
    assert c.phone_numbers == [phone]
    assert c.tags == ["a"]


def test_validate_detects_direct_duplicate_append():
    c = _contact()
    phone = PhoneNumber.create("5551234567")
    c.phone_numbers.extend([phone, phone])
    with pytest.raises(ValidationError):
        c.validate()


@pytest.mark.parametrize(
    "fields",
    [
        {"tags": [1]},
        {"notes": 42},
        {"notes": "bytes \udcff from argv"},
        {"tags": ["x\udcff"]},
        {"metadata": {"nick": "x\udcff"}},
    ],
)
def test_constructor_rejects_values_that_are_not_text(fields):
    with pytest.raises(ValidationError):
        Contact(id=ContactId.generate(), first_name="Bob", **fields)


def test_validate_detects_padded_tags_and_blank_notes():
    c = _contact()
    c.tags.append(" x ")
    with pytest.raises(ValidationError):
        c.validate()
    c.tags.clear()
    c.notes = ""
    with pytest.raises(ValidationError):
        c.validate()


def test_matches_is_case_insensitive_across_fields():
    johnny = Contact.new("Johnny", "Appleseed")
    by_email = Contact.new("Jane", "Doe")
    by_email.add_email(Email.create("JOHN@Example.com"))
    other = Contact.new("Mary", "Major")
    assert johnny.matches("john")
    assert by_email.matches("john")
    assert by_email.matches("EXAMPLE")
    assert not other.matches("john")


def test_matches_phone_digits_notes_tags_and_full_name():
    c = Contact.new("Alice", "Smith")
    c.add_phone(PhoneNumber.create("(555) 123-4567"))
    c.set_notes("Plays the cello")
    c.add_tag("Orchestra")
    assert c.matches("123-45")
    assert c.matches("5551234567")
    assert c.matches("CELLO")
    assert c.matches("orchestra")
    assert c.matches("alice smith")
    assert not c.matches("999")


def test_blank_query_matches_nothing():
    assert not _contact().matches("")
    assert not _contact().matches("   ")
