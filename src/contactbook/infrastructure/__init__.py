"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.contact_store import DEFAULT_CONTACTS_FILE, ContactStore
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence import FileStorage
from contactbook.infrastructure.phone import localize_phone

__all__ = [
    "DEFAULT_CONTACTS_FILE",
    "ContactStore",
    "FileStorage",
    "InMemoryContactRepository",
    "localize_phone",
]
