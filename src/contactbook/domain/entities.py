"""Domain entity: Contact."""

from dataclasses import dataclass, field

from contactbook.domain.errors import InvalidName, ValidationError
from contactbook.domain.value_objects import ContactId, Email, PhoneNumber

NAME_MAX_LENGTH = 100
_PHONE_QUERY_FORMATTING = str.maketrans("", "", " -().+")


def _clean_name(value: str | None, label: str) -> str:
    name = (value or "").strip()
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidName(f"{label} must be at most {NAME_MAX_LENGTH} characters")
    if any(not ch.isprintable() and ch != "\t" for ch in name):
        raise InvalidName(f"{label} contains control characters")
    return name


def _check_text(label: str, text: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(label, "contains characters that are not valid text") from None


def _unique(items: list) -> list:
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


@dataclass
class Contact:
    """
    A person in the contact book.
    The id is assigned once and never changes; at least one of first/last name is non-empty.
    Phone numbers, emails and tags are ordered collections without duplicates.
    """

    id: ContactId
    first_name: str = ""
    last_name: str = ""
    phone_numbers: list[PhoneNumber] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    notes: str | None = None
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.id, ContactId):
            raise TypeError("Contact id must be a ContactId.")
        self.first_name, self.last_name = self._checked_names(
            self.first_name, self.last_name
        )
        self.phone_numbers = _unique(list(self.phone_numbers))
        self.emails = _unique(list(self.emails))
        if any(not isinstance(t, str) for t in self.tags):
            raise ValidationError("tags", "must be strings")
        self.tags = _unique([t.strip() for t in self.tags if t.strip()])
        self.metadata = dict(self.metadata)
        if self.notes is not None and not isinstance(self.notes, str):
            raise ValidationError("notes", "must be a string")
        self.notes = (self.notes or "").strip() or None
        self.validate()

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Contact id is immutable.")
        super().__setattr__(name, value)

    @classmethod
    def new(cls, first_name: str, last_name: str) -> "Contact":
        """Create a contact with a fresh identifier and empty collections."""
        return cls(id=ContactId.generate(), first_name=first_name, last_name=last_name)

    @staticmethod
    def _checked_names(first_name: str | None, last_name: str | None) -> tuple[str, str]:
        first = _clean_name(first_name, "first name")
        last = _clean_name(last_name, "last name")
        if not first and not last:
            raise InvalidName()
        return first, last

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def validate(self) -> None:
        """Re-check every invariant. Raises ValidationError on the first violation."""
        self._checked_names(self.first_name, self.last_name)
        if any(not isinstance(p, PhoneNumber) for p in self.phone_numbers):
            raise ValidationError("phone numbers", "must be PhoneNumber values")
        if any(not isinstance(e, Email) for e in self.emails):
            raise ValidationError("emails", "must be Email values")
        if len(set(self.phone_numbers)) != len(self.phone_numbers):
            raise ValidationError("phone numbers", "duplicate phone number")
        if len(set(self.emails)) != len(self.emails):
            raise ValidationError("emails", "duplicate email")
        if self.notes is not None:
            if not isinstance(self.notes, str) or self.notes != self.notes.strip():
                raise ValidationError("notes", "must be trimmed text")
            if not self.notes:
                raise ValidationError("notes", "must be non-empty; use None for no notes")
            _check_text("notes", self.notes)
        for tag in self.tags:
            if not isinstance(tag, str) or not tag or tag != tag.strip():
                raise ValidationError("tags", "must be trimmed and non-empty", tag)
            _check_text("tags", tag)
        if len(set(self.tags)) != len(self.tags):
            raise ValidationError("tags", "duplicate tag")
        for key, value in self.metadata.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ValidationError("metadata", "keys and values must be strings")
            _check_text("metadata", key)
            _check_text("metadata", value)

    def rename(self, first_name: str | None, last_name: str | None) -> None:
        """Replace both names. On InvalidName the contact is left unchanged."""
        self.first_name, self.last_name = self._checked_names(first_name, last_name)

    def add_phone(self, phone: PhoneNumber) -> None:
        if phone not in self.phone_numbers:
            self.phone_numbers.append(phone)

    def remove_phone(self, phone: PhoneNumber) -> None:
        self.phone_numbers = [p for p in self.phone_numbers if p != phone]

    def add_email(self, email: Email) -> None:
        if email not in self.emails:
            self.emails.append(email)

    def remove_email(self, email: Email) -> None:
        self.emails = [e for e in self.emails if e != email]

    def set_notes(self, notes: str | None) -> None:
        """Set free-text notes; blank clears them."""
        self.notes = (notes or "").strip() or None

    def add_tag(self, tag: str) -> None:
        tag = (tag or "").strip()
        if not tag:
            raise ValidationError("tag", "must be non-empty")
        if tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> None:
        tag = (tag or "").strip()
        self.tags = [t for t in self.tags if t != tag]

    def set_metadata(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not key.strip():
            raise ValidationError("metadata key", "must be a non-empty string")
        if not isinstance(value, str):
            raise ValidationError("metadata value", "must be a string", value)
        self.metadata[key.strip()] = value

    def remove_metadata(self, key: str) -> None:
        self.metadata.pop(key, None)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over names, phones, emails, notes and tags."""
        needle = (query or "").strip().casefold()
        if not needle:
            return False
        texts = [self.first_name, self.last_name, self.full_name, self.notes or ""]
        texts.extend(e.value for e in self.emails)
        texts.extend(self.tags)
        if any(needle in text.casefold() for text in texts):
            return True
        phone_needle = needle.translate(_PHONE_QUERY_FORMATTING)
        if phone_needle.isdigit():
            return any(phone_needle in p.digits for p in self.phone_numbers)
        return False
