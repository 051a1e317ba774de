"""Contact use cases: add, find, update, delete, list, search, stats."""

from collections.abc import Callable, Iterable, Mapping

from contactbook.application.dto import ContactChanges, ContactPage, ContactStats, SortKey
from contactbook.application.ports import ContactRepository
from contactbook.domain import Contact, ContactId, Email, PhoneNumber, ValidationError

MAX_PAGE_SIZE = 100
MAX_QUERY_LENGTH = 200


class ContactService:
    """Turns raw user input into validated domain objects and forwards them to the repository."""

    def __init__(
        self,
        repository: ContactRepository,
        *,
        normalize_phone: Callable[[str], str] | None = None,
    ) -> None:
        self._repo = repository
        self._normalize_phone = normalize_phone

    def _phone(self, raw: str) -> PhoneNumber:
        if self._normalize_phone is not None:
            raw = self._normalize_phone(raw)
        return PhoneNumber(raw)

    @staticmethod
    def _contact_id(contact_id: ContactId | str) -> ContactId:
        if isinstance(contact_id, ContactId):
            return contact_id
        return ContactId.parse(contact_id)

    def add_contact(
        self,
        first_name: str,
        last_name: str,
        phones: Iterable[str] = (),
        emails: Iterable[str] = (),
        notes: str | None = None,
        tags: Iterable[str] = (),
        metadata: Mapping[str, str] | None = None,
    ) -> Contact:
        """Validate every field, then store a new contact. Nothing is stored on a validation error."""
        phone_numbers = [self._phone(p) for p in phones]
        addresses = [Email(e) for e in emails]
        contact = Contact.new(first_name, last_name)
        for phone in phone_numbers:
            contact.add_phone(phone)
        for email in addresses:
            contact.add_email(email)
        contact.set_notes(notes)
        for tag in tags:
            contact.add_tag(tag)
        for key, value in (metadata or {}).items():
            contact.set_metadata(key, value)
        return self._repo.insert(contact)

    def find_contact(self, contact_id: ContactId | str) -> Contact:
        return self._repo.find(self._contact_id(contact_id))

    def build_changes(
        self,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        notes: str | None = None,
        add_phones: Iterable[str] = (),
        remove_phones: Iterable[str] = (),
        add_emails: Iterable[str] = (),
        remove_emails: Iterable[str] = (),
        add_tags: Iterable[str] = (),
        remove_tags: Iterable[str] = (),
        set_metadata: Mapping[str, str] | None = None,
        remove_metadata: Iterable[str] = (),
    ) -> ContactChanges:
        """Parse raw update input into a ContactChanges. Raises ValidationError on bad values."""
        return ContactChanges(
            first_name=first_name,
            last_name=last_name,
            notes=notes,
            add_phone_numbers=tuple(self._phone(p) for p in add_phones),
            remove_phone_numbers=tuple(self._phone(p) for p in remove_phones),
            add_emails=tuple(Email(e) for e in add_emails),
            remove_emails=tuple(Email(e) for e in remove_emails),
            add_tags=tuple(add_tags),
            remove_tags=tuple(remove_tags),
            set_metadata=dict(set_metadata or {}),
            remove_metadata=tuple(remove_metadata),
        )

    def update_contact(
        self, contact_id: ContactId | str, changes: ContactChanges
    ) -> Contact:
        cid = self._contact_id(contact_id)
        if changes.is_empty():
            raise ValidationError("update", "no changes given")
        return self._repo.update(cid, changes.apply)

    def delete_contact(self, contact_id: ContactId | str) -> Contact:
        """Delete and return the removed contact."""
        cid = self._contact_id(contact_id)
        contact = self._repo.find(cid)
        self._repo.delete(cid)
        return contact

    def list_contacts(
        self,
        page: int = 0,
        page_size: int = 10,
        sort_key: SortKey | str = SortKey.CREATED,
        reverse: bool = False,
    ) -> ContactPage:
        if page_size > MAX_PAGE_SIZE:
            raise ValidationError(
                "page size", f"cannot exceed {MAX_PAGE_SIZE}", page_size
            )
        contacts = self._repo.list(
            page=page, page_size=page_size, sort_key=sort_key, reverse=reverse
        )
        total = self._repo.count()
        return ContactPage(
            contacts=contacts,
            total_count=total,
            page=page,
            page_size=page_size,
            has_more=(page + 1) * page_size < total,
        )

    def search_contacts(self, query: str) -> list[Contact]:
        """Return contacts matching query (case-insensitive, partial). Blank query -> []."""
        if not query or not query.strip():
            return []
        if len(query) > MAX_QUERY_LENGTH:
            raise ValidationError(
                "search query", f"cannot exceed {MAX_QUERY_LENGTH} characters"
            )
        return self._repo.search(query)

    def stats(self) -> ContactStats:
        return self._repo.stats()
