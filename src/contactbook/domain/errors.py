"""Error taxonomy for the contact book.

Every error carries a ``kind`` tag so callers can dispatch with ``match err.kind``
instead of walking a class hierarchy. Fields are structured, not baked into the message.
"""

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    CORRUPT = "corrupt"
    IO_ERROR = "io_error"
    PERSISTENCE_FAILED = "persistence_failed"


class ContactBookError(Exception):
    """Base for every failure surfaced by the contact book core."""

    kind: ErrorKind


class ValidationError(ContactBookError, ValueError):
    """Invalid user input (name, phone, email, identifier, paging). Always recoverable."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: str, value: object = None) -> None:
        self.field = field
        self.reason = reason
        self.value = value
        if value is None:
            super().__init__(f"Invalid {field}: {reason}")
        else:
            super().__init__(f"Invalid {field} {value!r}: {reason}")


class InvalidFormat(ValidationError):
    """Text is not a syntactically valid contact identifier."""

    def __init__(self, value: str, reason: str = "not a valid identifier") -> None:
        super().__init__("identifier", reason, value)


class InvalidPhoneNumber(ValidationError):
    def __init__(self, value: str, reason: str) -> None:
        super().__init__("phone number", reason, value)


class InvalidEmail(ValidationError):
    def __init__(self, value: str, reason: str) -> None:
        super().__init__("email", reason, value)


class InvalidName(ValidationError):
    def __init__(self, reason: str = "first or last name must be non-empty") -> None:
        super().__init__("name", reason)


class NotFound(ContactBookError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, contact_id: object) -> None:
        self.contact_id = contact_id
        super().__init__(f"Contact not found: {contact_id}")


class StoreFileMissing(ContactBookError):
    """Backing file does not exist. ContactStore reads this as an empty store."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Contacts file not found: {path}")


class DuplicateIdentifier(ContactBookError):
    kind = ErrorKind.DUPLICATE_IDENTIFIER

    def __init__(self, contact_id: object) -> None:
        self.contact_id = contact_id
        super().__init__(f"Contact already exists with id: {contact_id}")


class Corrupt(ContactBookError):
    """File exists but is not a valid contacts document. Never auto-repaired."""

    kind = ErrorKind.CORRUPT

    def __init__(self, path: Path, detail: str, operation: str | None = None) -> None:
        self.path = path
        self.detail = detail
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}contacts file {path} is corrupt: {detail}")


class StorageIOError(ContactBookError):
    kind = ErrorKind.IO_ERROR

    def __init__(
        self, path: Path, cause: Exception, operation: str | None = None
    ) -> None:
        self.path = path
        self.cause = cause
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}I/O error on {path}: {cause}")


class PersistenceFailed(ContactBookError):
    """A mutation could not be written to disk; memory was rolled back."""

    kind = ErrorKind.PERSISTENCE_FAILED

    def __init__(
        self,
        operation: str,
        contact_id: object,
        cause: Exception,
    ) -> None:
        self.operation = operation
        self.contact_id = contact_id
        self.cause = cause
        super().__init__(f"{operation} {contact_id} was not saved: {cause}")
