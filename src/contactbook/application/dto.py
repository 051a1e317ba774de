"""Application DTOs: listing options, result types and the update change set."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from contactbook.domain import Contact, Email, PhoneNumber


class SortKey(str, Enum):
    """Order for list(). CREATED is insertion order and the default."""

    CREATED = "created"
    FIRST_NAME = "first-name"
    LAST_NAME = "last-name"
    FULL_NAME = "full-name"


@dataclass(frozen=True)
class ContactPage:
    """One page of list_contacts results."""

    contacts: list[Contact]
    total_count: int
    page: int
    page_size: int
    has_more: bool


@dataclass(frozen=True)
class ContactStats:
    total_contacts: int = 0
    total_phone_numbers: int = 0
    total_emails: int = 0
    contacts_with_notes: int = 0
    distinct_tags: int = 0


@dataclass(frozen=True)
class ContactChanges:
    """
    Field-level change set for update_contact.
    None means "leave unchanged"; notes="" clears the notes.
    Phone numbers and emails are validated value objects, so a change set is always well-formed.
    """

    first_name: str | None = None
    last_name: str | None = None
    notes: str | None = None
    add_phone_numbers: Sequence[PhoneNumber] = ()
    remove_phone_numbers: Sequence[PhoneNumber] = ()
    add_emails: Sequence[Email] = ()
    remove_emails: Sequence[Email] = ()
    add_tags: Sequence[str] = ()
    remove_tags: Sequence[str] = ()
    set_metadata: Mapping[str, str] = field(default_factory=dict)
    remove_metadata: Sequence[str] = ()

    def apply(self, contact: Contact) -> None:
        """Apply the changes to contact in place. Removals run after additions."""
        if self.first_name is not None or self.last_name is not None:
            contact.rename(
                self.first_name if self.first_name is not None else contact.first_name,
                self.last_name if self.last_name is not None else contact.last_name,
            )
        if self.notes is not None:
            contact.set_notes(self.notes)
        for phone in self.add_phone_numbers:
            contact.add_phone(phone)
        for phone in self.remove_phone_numbers:
            contact.remove_phone(phone)
        for email in self.add_emails:
            contact.add_email(email)
        for email in self.remove_emails:
            contact.remove_email(email)
        for tag in self.add_tags:
            contact.add_tag(tag)
        for tag in self.remove_tags:
            contact.remove_tag(tag)
        for key, value in self.set_metadata.items():
            contact.set_metadata(key, value)
        for key in self.remove_metadata:
            contact.remove_metadata(key)

    def is_empty(self) -> bool:
        if any(v is not None for v in (self.first_name, self.last_name, self.notes)):
            return False
        return not any(
            (
                self.add_phone_numbers,
                self.remove_phone_numbers,
                self.add_emails,
                self.remove_emails,
                self.add_tags,
                self.remove_tags,
                self.set_metadata,
                self.remove_metadata,
            )
        )
