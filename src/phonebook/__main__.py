"""
Phonebook CLI: ContactService + file-backed ContactStore.
Run: python -m phonebook <command> (from repo root, with .env or env vars set).
"""
import argparse
import functools
import logging
import sys

from contactbook import ContactBookError, ContactService, ContactStore, SortKey
from contactbook.config import Settings, load_env_files
from contactbook.infrastructure import localize_phone
from phonebook import formatters

logger = logging.getLogger(__name__)


def _metadata_pair(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key.strip(), value


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phonebook", description="A CLI phonebook.")
    parser.add_argument(
        "-f",
        "--file",
        default=str(settings.contacts_file),
        help="path to the contacts file (default: %(default)s)",
    )
    parser.add_argument(
        "--region",
        default=settings.default_region,
        help="region (e.g. US) for phone numbers entered without a country code",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log at INFO level")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="add a new contact")
    add.add_argument("--first-name", default="")
    add.add_argument("--last-name", default="")
    add.add_argument("-p", "--phone", action="append", default=[], help="repeatable")
    add.add_argument("-e", "--email", action="append", default=[], help="repeatable")
    add.add_argument("-n", "--notes")
    add.add_argument("-t", "--tag", action="append", default=[], help="repeatable")
    add.add_argument(
        "-m", "--meta", action="append", default=[], type=_metadata_pair,
        help="KEY=VALUE, repeatable",
    )
    add.set_defaults(handler=_cmd_add)

    find = sub.add_parser("find", help="show a contact by id")
    find.add_argument("id")
    find.set_defaults(handler=_cmd_find)

    lst = sub.add_parser("list", help="list contacts")
    lst.add_argument("--page", type=int, default=0, help="page number (0-based)")
    lst.add_argument("--page-size", type=int, default=settings.page_size)
    lst.add_argument(
        "--sort-by",
        choices=[k.value for k in SortKey],
        default=SortKey.CREATED.value,
    )
    lst.add_argument("--reverse", action="store_true")
    lst.set_defaults(handler=_cmd_list)

    search = sub.add_parser("search", help="search by name, phone, email, notes or tag")
    search.add_argument("query")
    search.set_defaults(handler=_cmd_search)

    update = sub.add_parser("update", help="update a contact")
    update.add_argument("id")
    update.add_argument("--first-name")
    update.add_argument("--last-name")
    update.add_argument("--notes", help="new notes; an empty string clears them")
    update.add_argument("--add-phone", action="append", default=[])
    update.add_argument("--remove-phone", action="append", default=[])
    update.add_argument("--add-email", action="append", default=[])
    update.add_argument("--remove-email", action="append", default=[])
    update.add_argument("--add-tag", action="append", default=[])
    update.add_argument("--remove-tag", action="append", default=[])
    update.add_argument(
        "--set-meta", action="append", default=[], type=_metadata_pair, help="KEY=VALUE"
    )
    update.add_argument("--remove-meta", action="append", default=[])
    update.set_defaults(handler=_cmd_update)

    delete = sub.add_parser("delete", help="delete a contact")
    delete.add_argument("id")
    delete.add_argument("-y", "--yes", action="store_true", help="skip confirmation")
    delete.set_defaults(handler=_cmd_delete)

    stats = sub.add_parser("stats", help="show statistics")
    stats.set_defaults(handler=_cmd_stats)
    return parser


def _cmd_add(service: ContactService, args: argparse.Namespace) -> int:
    contact = service.add_contact(
        args.first_name,
        args.last_name,
        phones=args.phone,
        emails=args.email,
        notes=args.notes,
        tags=args.tag,
        metadata=dict(args.meta),
    )
    print(f"Contact added successfully (ID: {contact.id})")
    return 0


def _cmd_find(service: ContactService, args: argparse.Namespace) -> int:
    print(formatters.format_contact(service.find_contact(args.id)))
    return 0


def _cmd_list(service: ContactService, args: argparse.Namespace) -> int:
    page = service.list_contacts(
        page=args.page,
        page_size=args.page_size,
        sort_key=args.sort_by,
        reverse=args.reverse,
    )
    if page.total_count == 0:
        print("No contacts yet. Use 'phonebook add' to add one.")
        return 0
    if page.contacts:
        print(formatters.format_table(page.contacts))
    print(formatters.format_pagination_info(page))
    return 0


def _cmd_search(service: ContactService, args: argparse.Namespace) -> int:
    results = service.search_contacts(args.query)
    print(formatters.format_search_summary(args.query, len(results)))
    if results:
        print(formatters.format_table(results))
    return 0


def _cmd_update(service: ContactService, args: argparse.Namespace) -> int:
    changes = service.build_changes(
        first_name=args.first_name,
        last_name=args.last_name,
        notes=args.notes,
        add_phones=args.add_phone,
        remove_phones=args.remove_phone,
        add_emails=args.add_email,
        remove_emails=args.remove_email,
        add_tags=args.add_tag,
        remove_tags=args.remove_tag,
        set_metadata=dict(args.set_meta),
        remove_metadata=args.remove_meta,
    )
    contact = service.update_contact(args.id, changes)
    print("Contact updated successfully")
    print(formatters.format_contact(contact))
    return 0


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _cmd_delete(service: ContactService, args: argparse.Namespace) -> int:
    if not args.yes:
        contact = service.find_contact(args.id)
        if not _confirm(f"Delete {contact.full_name} ({contact.id})? [y/N] "):
            print("Cancelled.")
            return 0
    contact = service.delete_contact(args.id)
    print(f"Deleted {contact.full_name} ({contact.id})")
    return 0


def _cmd_stats(service: ContactService, args: argparse.Namespace) -> int:
    print(formatters.format_stats(service.stats()))
    return 0


def main(argv: list[str] | None = None) -> int:
    load_env_files()
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO if args.verbose else settings.log_level,
    )
    store = ContactStore(args.file)
    normalize = (
        functools.partial(localize_phone, default_region=args.region)
        if args.region
        else None
    )
    service = ContactService(store, normalize_phone=normalize)
    logger.debug("Running %s against %s", args.command, store.path)
    try:
        return args.handler(service, args)
    except ContactBookError as e:
        logger.debug("%s failed: %s", args.command, e.kind.value)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
