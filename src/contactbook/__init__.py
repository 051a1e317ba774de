"""
Contactbook core: clean-architecture layout.

- domain: value objects (ContactId, PhoneNumber, Email), the Contact entity, errors. No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), DTOs.
- infrastructure: adapters (ContactStore backed by a JSON file, InMemoryContactRepository).
"""

from contactbook.application import (
    ContactChanges,
    ContactPage,
    ContactRepository,
    ContactService,
    ContactStats,
    SortKey,
)
from contactbook.domain import (
    Contact,
    ContactBookError,
    ContactId,
    Corrupt,
    DuplicateIdentifier,
    Email,
    ErrorKind,
    InvalidEmail,
    InvalidFormat,
    InvalidName,
    InvalidPhoneNumber,
    NotFound,
    PersistenceFailed,
    PhoneNumber,
    StorageIOError,
    StoreFileMissing,
    ValidationError,
)
from contactbook.infrastructure import ContactStore, FileStorage, InMemoryContactRepository

__all__ = [
    "Contact",
    "ContactBookError",
    "ContactChanges",
    "ContactId",
    "ContactPage",
    "ContactRepository",
    "ContactService",
    "ContactStats",
    "ContactStore",
    "Corrupt",
    "DuplicateIdentifier",
    "Email",
    "ErrorKind",
    "FileStorage",
    "InMemoryContactRepository",
    "InvalidEmail",
    "InvalidFormat",
    "InvalidName",
    "InvalidPhoneNumber",
    "NotFound",
    "PersistenceFailed",
    "PhoneNumber",
    "SortKey",
    "StorageIOError",
    "StoreFileMissing",
    "ValidationError",
]
