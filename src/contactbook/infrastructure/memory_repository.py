"""In-memory implementation of ContactRepository (no file). Same semantics as ContactStore."""

from __future__ import annotations

import copy
from collections.abc import Callable

from contactbook.application.dto import ContactStats, SortKey
from contactbook.application.listing import compute_stats, paginate, sort_contacts
from contactbook.domain import Contact, ContactId, DuplicateIdentifier, NotFound


class InMemoryContactRepository:
    """Stores contacts in memory. Order preserved by insertion."""

    def __init__(self, contacts: list[Contact] | None = None) -> None:
        self._by_id: dict[ContactId, Contact] = {}
        self._order: list[ContactId] = []
        for contact in contacts or []:
            self.insert(contact)

    def insert(self, contact: Contact) -> Contact:
        if contact.id in self._by_id:
            raise DuplicateIdentifier(contact.id)
        contact.validate()
        self._by_id[contact.id] = copy.deepcopy(contact)
        self._order.append(contact.id)
        return copy.deepcopy(contact)

    def find(self, contact_id: ContactId) -> Contact:
        contact = self._by_id.get(contact_id)
        if contact is None:
            raise NotFound(contact_id)
        return copy.deepcopy(contact)

    def update(
        self, contact_id: ContactId, mutator: Callable[[Contact], object]
    ) -> Contact:
        updated = self.find(contact_id)
        mutator(updated)
        updated.validate()
        self._by_id[contact_id] = updated
        return copy.deepcopy(updated)

    def delete(self, contact_id: ContactId) -> None:
        if self._by_id.pop(contact_id, None) is None:
            raise NotFound(contact_id)
        self._order.remove(contact_id)

    def list(
        self,
        page: int = 0,
        page_size: int = 10,
        sort_key: SortKey = SortKey.CREATED,
        reverse: bool = False,
    ) -> list[Contact]:
        ordered = sort_contacts(self._list_all(), sort_key, reverse)
        return [copy.deepcopy(c) for c in paginate(ordered, page, page_size)]

    def search(self, query: str) -> list[Contact]:
        return [copy.deepcopy(c) for c in self._list_all() if c.matches(query)]

    def stats(self) -> ContactStats:
        return compute_stats(self._by_id.values())

    def exists(self, contact_id: ContactId) -> bool:
        return contact_id in self._by_id

    def count(self) -> int:
        return len(self._by_id)

    def _list_all(self) -> list[Contact]:
        return [self._by_id[cid] for cid in self._order]
