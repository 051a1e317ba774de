"""File persistence: JSON document schema and atomic file storage."""

from contactbook.infrastructure.persistence.file_storage import FileStorage
from contactbook.infrastructure.persistence.schema import ContactRecord, ContactsDocument

__all__ = ["ContactRecord", "ContactsDocument", "FileStorage"]
