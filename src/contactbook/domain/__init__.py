"""Domain layer: entities, value objects and errors. No dependencies on outer layers."""

from contactbook.domain.entities import Contact
from contactbook.domain.errors import (
    ContactBookError,
    Corrupt,
    DuplicateIdentifier,
    ErrorKind,
    InvalidEmail,
    InvalidFormat,
    InvalidName,
    InvalidPhoneNumber,
    NotFound,
    PersistenceFailed,
    StorageIOError,
    StoreFileMissing,
    ValidationError,
)
from contactbook.domain.value_objects import ContactId, Email, PhoneNumber

__all__ = [
    "Contact",
    "ContactBookError",
    "ContactId",
    "Corrupt",
    "DuplicateIdentifier",
    "Email",
    "ErrorKind",
    "InvalidEmail",
    "InvalidFormat",
    "InvalidName",
    "InvalidPhoneNumber",
    "NotFound",
    "PersistenceFailed",
    "PhoneNumber",
    "StorageIOError",
    "StoreFileMissing",
    "ValidationError",
]
