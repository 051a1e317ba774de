"""Whole-file JSON persistence for contacts with atomic replace on save."""

import json
import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

import pydantic

from contactbook.domain import (
    Contact,
    ContactId,
    Corrupt,
    StorageIOError,
    StoreFileMissing,
    ValidationError,
)
from contactbook.infrastructure.persistence.schema import ContactRecord, ContactsDocument

logger = logging.getLogger(__name__)


def _reject_duplicate_keys(pairs: list[tuple[str, object]]) -> dict:
    obj = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


def _first_error(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    location = ".".join(str(part) for part in err["loc"]) or "document"
    return f"{location}: {err['msg']}"


class FileStorage:
    """Reads and writes the full contact set as one JSON document at path."""

    def __init__(self, path: str | os.PathLike) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[ContactId, Contact]:
        """Return contacts in file order.

        Raises StoreFileMissing if there is no file, Corrupt if the content is not a valid
        contacts document, StorageIOError for any other read failure.
        An empty (or whitespace-only) file is an empty store.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StoreFileMissing(self._path) from None
        except UnicodeDecodeError as e:
            raise Corrupt(self._path, f"not UTF-8 text ({e.reason})") from e
        except OSError as e:
            raise StorageIOError(self._path, e) from e

        if not text.strip():
            return {}
        try:
            raw = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
        except ValueError as e:
            raise Corrupt(self._path, f"invalid JSON: {e}") from e
        try:
            document = ContactsDocument.model_validate(raw)
        except pydantic.ValidationError as e:
            raise Corrupt(self._path, _first_error(e)) from e

        contacts: dict[ContactId, Contact] = {}
        for key, record in document.contacts.items():
            if key != record.id:
                raise Corrupt(
                    self._path, f"key {key!r} does not match contact id {record.id!r}"
                )
            try:
                contact = record.to_contact()
            except ValidationError as e:
                raise Corrupt(self._path, f"contact {key}: {e}") from e
            if contact.id in contacts:
                raise Corrupt(self._path, f"contact {key} appears more than once")
            contacts[contact.id] = contact
        return contacts

    def save(self, contacts: Iterable[Contact]) -> None:
        """Write all contacts, replacing the file atomically. Raises StorageIOError."""
        try:
            document = ContactsDocument(
                contacts={str(c.id): ContactRecord.from_contact(c) for c in contacts}
            )
            payload = (document.model_dump_json(indent=2) + "\n").encode("utf-8")
        except ValueError as e:
            raise StorageIOError(self._path, e) from e
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as e:
            raise StorageIOError(self._path, e) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            if self._path.exists():
                shutil.copymode(self._path, tmp_name)
            os.replace(tmp_name, self._path)
        except OSError as e:
            self._discard(tmp_name)
            raise StorageIOError(self._path, e) from e
        except BaseException:
            self._discard(tmp_name)
            raise
        logger.debug(
            "Wrote %d contacts to %s", len(document.contacts), self._path
        )

    def _discard(self, tmp_name: str) -> None:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", tmp_name, e)
