"""Application ports (interfaces). Implemented by infrastructure adapters."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from contactbook.application.dto import ContactStats, SortKey
from contactbook.domain import Contact, ContactId


class ContactRepository(Protocol):
    """Stores contacts keyed by id. Errors are raised as ContactBookError subclasses."""

    def insert(self, contact: Contact) -> Contact:
        """Store a new contact. Raises DuplicateIdentifier if the id is taken."""
        ...

    def find(self, contact_id: ContactId) -> Contact:
        """Return the contact with the given id. Raises NotFound."""
        ...

    def update(
        self, contact_id: ContactId, mutator: Callable[[Contact], object]
    ) -> Contact:
        """Apply mutator to the stored contact and keep the result only if it is still valid."""
        ...

    def delete(self, contact_id: ContactId) -> None:
        """Remove the contact. Raises NotFound."""
        ...

    def list(
        self,
        page: int = 0,
        page_size: int = 10,
        sort_key: SortKey = SortKey.CREATED,
        reverse: bool = False,
    ) -> list[Contact]:
        """Return one page of contacts in a deterministic order."""
        ...

    def search(self, query: str) -> list[Contact]:
        """Return contacts matching query, in insertion order."""
        ...

    def stats(self) -> ContactStats:
        ...

    def exists(self, contact_id: ContactId) -> bool:
        ...

    def count(self) -> int:
        ...
