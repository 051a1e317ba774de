"""Plain-text rendering of contacts, pages and stats for the terminal."""

from contactbook import Contact, ContactPage, ContactStats

_ROW = "{:<36}  {:<25} {:<20} {}"


def format_contact(contact: Contact) -> str:
    """Full card: id, name, phones, emails, notes, tags, metadata."""
    lines = [f"ID: {contact.id}", f"Name: {contact.full_name}"]
    if contact.phone_numbers:
        lines.append("Phone Numbers:")
        lines.extend(f"  - {p.display()}" for p in contact.phone_numbers)
    if contact.emails:
        lines.append("Emails:")
        lines.extend(f"  - {e.display()}" for e in contact.emails)
    if contact.notes:
        lines.append(f"Notes: {contact.notes}")
    if contact.tags:
        lines.append(f"Tags: {', '.join(contact.tags)}")
    if contact.metadata:
        lines.append("Metadata:")
        lines.extend(f"  {k}: {v}" for k, v in sorted(contact.metadata.items()))
    return "\n".join(lines)


def format_contact_compact(contact: Contact) -> str:
    phone = contact.phone_numbers[0].display() if contact.phone_numbers else "No phone"
    email = contact.emails[0].display() if contact.emails else "No email"
    return _ROW.format(str(contact.id), contact.full_name, phone, email)


def format_list_header() -> str:
    return _ROW.format("ID", "Name", "Phone", "Email")


def format_separator() -> str:
    return "-" * 100


def format_table(contacts: list[Contact]) -> str:
    rows = [format_list_header(), format_separator()]
    rows.extend(format_contact_compact(c) for c in contacts)
    return "\n".join(rows)


def format_search_summary(query: str, count: int) -> str:
    return f"Found {count} contact(s) matching '{query}'"


def format_pagination_info(page: ContactPage) -> str:
    if not page.contacts:
        return f"Showing 0 of {page.total_count} contacts (page {page.page + 1})"
    start = page.page * page.page_size + 1
    end = start + len(page.contacts) - 1
    info = f"Showing {start} - {end} of {page.total_count} contacts"
    if page.has_more:
        info += f" (page {page.page + 1}, more with --page {page.page + 1})"
    return info


def format_stats(stats: ContactStats) -> str:
    return "\n".join(
        [
            f"Total contacts: {stats.total_contacts}",
            f"Phone numbers: {stats.total_phone_numbers}",
            f"Emails: {stats.total_emails}",
            f"Contacts with notes: {stats.contacts_with_notes}",
            f"Distinct tags: {stats.distinct_tags}",
        ]
    )
