"""File-backed ContactRepository with a lazily loaded in-memory cache.

The store is Unloaded until the first operation, which reads the file through FileStorage
(a missing file is an empty store). Every mutation writes the whole store before it returns;
if the write fails the in-memory state is rolled back and PersistenceFailed is raised.
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Callable
from pathlib import Path

from contactbook.application.dto import ContactStats, SortKey
from contactbook.application.listing import (
    check_paging,
    compute_stats,
    paginate,
    sort_contacts,
)
from contactbook.domain import (
    Contact,
    ContactId,
    Corrupt,
    DuplicateIdentifier,
    NotFound,
    PersistenceFailed,
    StorageIOError,
    StoreFileMissing,
)
from contactbook.infrastructure.persistence import FileStorage

logger = logging.getLogger(__name__)

DEFAULT_CONTACTS_FILE = "contacts.json"


class ContactStore:
    """Owns the contact map for one file. Not safe to share between processes."""

    def __init__(
        self,
        path: str | os.PathLike = DEFAULT_CONTACTS_FILE,
        *,
        storage: FileStorage | None = None,
    ) -> None:
        self._storage = storage or FileStorage(path)
        self._contacts: dict[ContactId, Contact] = {}
        self._order: list[ContactId] = []  # insertion order, persisted as file order
        self._loaded = False
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._storage.path

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_dirty(self) -> bool:
        """True only while a mutation is applied in memory but not yet on disk."""
        return self._dirty

    def reload(self) -> None:
        """Drop the cache; the next operation reads the file again."""
        self._contacts = {}
        self._order = []
        self._loaded = False
        self._dirty = False

    def _ensure_loaded(self, operation: str) -> None:
        if self._loaded:
            return
        try:
            contacts = self._storage.load()
        except StoreFileMissing:
            logger.debug("No contacts file at %s; starting empty", self.path)
            contacts = {}
        except Corrupt as e:
            raise Corrupt(e.path, e.detail, operation=operation) from e
        except StorageIOError as e:
            raise StorageIOError(e.path, e.cause, operation=operation) from e
        self._contacts = dict(contacts)
        self._order = list(contacts)
        self._loaded = True
        logger.debug("Loaded %d contacts from %s", len(self._order), self.path)

    def _persist(self, operation: str, contact_id: ContactId) -> None:
        """Write the current map in insertion order."""
        try:
            self._storage.save(self._contacts[cid] for cid in self._order)
        except Exception as e:
            raise PersistenceFailed(operation, contact_id, e) from e
        self._dirty = False
        logger.info("%s %s saved to %s", operation, contact_id, self.path)

    def _commit(
        self,
        operation: str,
        contact_id: ContactId,
        contacts: dict[ContactId, Contact],
        order: list[ContactId],
    ) -> None:
        previous = (self._contacts, self._order)
        self._contacts, self._order = contacts, order
        self._dirty = True
        try:
            self._persist(operation, contact_id)
        except BaseException:
            self._contacts, self._order = previous
            self._dirty = False
            logger.warning("%s %s rolled back: write failed", operation, contact_id)
            raise

    def insert(self, contact: Contact) -> Contact:
        self._ensure_loaded("insert")
        if contact.id in self._contacts:
            raise DuplicateIdentifier(contact.id)
        contact.validate()
        stored = copy.deepcopy(contact)
        self._commit(
            "insert",
            contact.id,
            {**self._contacts, contact.id: stored},
            [*self._order, contact.id],
        )
        return copy.deepcopy(stored)

    def find(self, contact_id: ContactId) -> Contact:
        self._ensure_loaded("find")
        try:
            return copy.deepcopy(self._contacts[contact_id])
        except KeyError:
            raise NotFound(contact_id) from None

    def update(
        self, contact_id: ContactId, mutator: Callable[[Contact], object]
    ) -> Contact:
        """Run mutator on a copy of the contact; store the copy only if it stays valid."""
        self._ensure_loaded("update")
        if contact_id not in self._contacts:
            raise NotFound(contact_id)
        updated = copy.deepcopy(self._contacts[contact_id])
        mutator(updated)
        updated.validate()
        self._commit(
            "update",
            contact_id,
            {**self._contacts, contact_id: updated},
            list(self._order),
        )
        return copy.deepcopy(updated)

    def delete(self, contact_id: ContactId) -> None:
        self._ensure_loaded("delete")
        if contact_id not in self._contacts:
            raise NotFound(contact_id)
        contacts = dict(self._contacts)
        del contacts[contact_id]
        self._commit(
            "delete",
            contact_id,
            contacts,
            [cid for cid in self._order if cid != contact_id],
        )

    def list(
        self,
        page: int = 0,
        page_size: int = 10,
        sort_key: SortKey = SortKey.CREATED,
        reverse: bool = False,
    ) -> list[Contact]:
        check_paging(page, page_size)
        self._ensure_loaded("list")
        ordered = sort_contacts(self._in_order(), sort_key, reverse)
        return [copy.deepcopy(c) for c in paginate(ordered, page, page_size)]

    def search(self, query: str) -> list[Contact]:
        self._ensure_loaded("search")
        return [copy.deepcopy(c) for c in self._in_order() if c.matches(query)]

    def stats(self) -> ContactStats:
        self._ensure_loaded("stats")
        return compute_stats(self._contacts.values())

    def exists(self, contact_id: ContactId) -> bool:
        self._ensure_loaded("exists")
        return contact_id in self._contacts

    def count(self) -> int:
        self._ensure_loaded("count")
        return len(self._contacts)

    def _in_order(self) -> list[Contact]:
        return [self._contacts[cid] for cid in self._order]
