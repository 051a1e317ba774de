"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    ContactChanges,
    ContactPage,
    ContactStats,
    SortKey,
)
from contactbook.application.ports import ContactRepository

__all__ = [
    "ContactChanges",
    "ContactPage",
    "ContactRepository",
    "ContactService",
    "ContactStats",
    "SortKey",
]
