"""Ordering, paging and stats shared by every ContactRepository implementation."""

from collections.abc import Iterable, Sequence

from contactbook.application.dto import ContactStats, SortKey
from contactbook.domain import Contact, ValidationError

_SORT_FIELDS = {
    SortKey.FIRST_NAME: lambda c: c.first_name.casefold(),
    SortKey.LAST_NAME: lambda c: c.last_name.casefold(),
    SortKey.FULL_NAME: lambda c: c.full_name.casefold(),
}


def sort_contacts(
    contacts: Sequence[Contact],
    sort_key: SortKey | str = SortKey.CREATED,
    reverse: bool = False,
) -> list[Contact]:
    """Return contacts ordered by sort_key, ties broken by ascending id.

    contacts must be given in insertion order. reverse flips the primary key only.
    """
    try:
        sort_key = SortKey(sort_key)
    except ValueError:
        raise ValidationError("sort key", "unknown sort key", sort_key) from None
    if sort_key is SortKey.CREATED:
        ordered = list(contacts)
        return ordered[::-1] if reverse else ordered
    by_id = sorted(contacts, key=lambda c: c.id)
    # sorted() keeps equal keys in their prior order even with reverse=True.
    return sorted(by_id, key=_SORT_FIELDS[sort_key], reverse=reverse)


def check_paging(page: int, page_size: int) -> None:
    if page < 0:
        raise ValidationError("page", "must be zero or greater", page)
    if page_size < 1:
        raise ValidationError("page size", "must be at least 1", page_size)


def paginate(items: Sequence[Contact], page: int, page_size: int) -> list[Contact]:
    """Zero-based page of items. Pages past the end are empty."""
    check_paging(page, page_size)
    start = page * page_size
    return list(items[start : start + page_size])


def compute_stats(contacts: Iterable[Contact]) -> ContactStats:
    total = phones = emails = with_notes = 0
    tags: set[str] = set()
    for contact in contacts:
        total += 1
        phones += len(contact.phone_numbers)
        emails += len(contact.emails)
        with_notes += 1 if contact.notes else 0
        tags.update(contact.tags)
    return ContactStats(
        total_contacts=total,
        total_phone_numbers=phones,
        total_emails=emails,
        contacts_with_notes=with_notes,
        distinct_tags=len(tags),
    )
