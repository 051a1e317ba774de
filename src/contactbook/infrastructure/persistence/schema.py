"""Pydantic models of the contacts file. Field names are part of the on-disk format."""

from pydantic import BaseModel, Field, StrictStr

from contactbook.domain import Contact, ContactId, Email, PhoneNumber, ValidationError


class ValueRecord(BaseModel):
    value: StrictStr


class ContactRecord(BaseModel):
    id: StrictStr
    first_name: StrictStr
    last_name: StrictStr
    phone_numbers: list[ValueRecord] = Field(default_factory=list)
    emails: list[ValueRecord] = Field(default_factory=list)
    notes: StrictStr | None = None
    tags: list[StrictStr] = Field(default_factory=list)
    metadata: dict[StrictStr, StrictStr] = Field(default_factory=dict)

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactRecord":
        return cls(
            id=str(contact.id),
            first_name=contact.first_name,
            last_name=contact.last_name,
            phone_numbers=[ValueRecord(value=p.value) for p in contact.phone_numbers],
            emails=[ValueRecord(value=e.value) for e in contact.emails],
            notes=contact.notes,
            tags=list(contact.tags),
            metadata=dict(contact.metadata),
        )

    def to_contact(self) -> Contact:
        """Rebuild the domain entity.

        Raises ValidationError if a stored value is invalid, and also if the record would only
        load after being cleaned up (duplicates, blank tags, padded names or notes).
        """
        phone_numbers = [PhoneNumber(p.value) for p in self.phone_numbers]
        emails = [Email(e.value) for e in self.emails]
        contact = Contact(
            id=ContactId(self.id),
            first_name=self.first_name,
            last_name=self.last_name,
            phone_numbers=phone_numbers,
            emails=emails,
            notes=self.notes,
            tags=list(self.tags),
            metadata=dict(self.metadata),
        )
        if len(contact.phone_numbers) != len(phone_numbers):
            raise ValidationError("phone numbers", "duplicate phone number")
        if len(contact.emails) != len(emails):
            raise ValidationError("emails", "duplicate email")
        if contact.tags != self.tags:
            raise ValidationError("tags", "blank, padded or duplicate tag")
        if contact.notes != self.notes:
            raise ValidationError("notes", "blank or padded notes")
        if (contact.first_name, contact.last_name) != (self.first_name, self.last_name):
            raise ValidationError("name", "surrounding whitespace")
        return contact


class ContactsDocument(BaseModel):
    """Top-level document: {"contacts": {"<id>": {...}}}. Keys must equal each contact's id."""

    contacts: dict[StrictStr, ContactRecord]
