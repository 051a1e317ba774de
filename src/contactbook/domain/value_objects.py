"""Value objects: ContactId, PhoneNumber, Email. Immutable; equal when normalized values are equal."""

import re
import uuid
from dataclasses import dataclass

import phonenumbers

from contactbook.domain.errors import InvalidEmail, InvalidFormat, InvalidPhoneNumber

# Digit-count bounds for a phone number, country code included.
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_PHONE_FORMATTING = str.maketrans("", "", " -().")
_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, order=True)
class ContactId:
    """Opaque contact identifier: a random UUID in canonical lower-case form."""

    value: str

    def __post_init__(self):
        text = self.value.strip() if isinstance(self.value, str) else ""
        if len(text) != 36:
            raise InvalidFormat(self.value, "expected 36 characters")
        if not _ID_PATTERN.match(text):
            raise InvalidFormat(self.value, "expected hex digits in 8-4-4-4-12 groups")
        object.__setattr__(self, "value", text.lower())

    @classmethod
    def generate(cls) -> "ContactId":
        return cls(str(uuid.uuid4()))

    @classmethod
    def parse(cls, text: str) -> "ContactId":
        """Return the identifier for text, or raise InvalidFormat."""
        return cls(text)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PhoneNumber:
    """
    Phone number normalized to digits with an optional leading '+'.
    Spaces, dashes, dots and parentheses are stripped on input; anything else is rejected.
    """

    value: str

    def __post_init__(self):
        raw = self.value
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            raise InvalidPhoneNumber(raw, "empty")
        cleaned = text.translate(_PHONE_FORMATTING)
        plus, digits = ("+", cleaned[1:]) if cleaned.startswith("+") else ("", cleaned)
        if not digits:
            raise InvalidPhoneNumber(raw, "empty")
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidPhoneNumber(raw, "invalid characters")
        if len(digits) < PHONE_MIN_DIGITS:
            raise InvalidPhoneNumber(raw, "too short")
        if len(digits) > PHONE_MAX_DIGITS:
            raise InvalidPhoneNumber(raw, "too long")
        object.__setattr__(self, "value", plus + digits)

    @classmethod
    def create(cls, raw: str) -> "PhoneNumber":
        return cls(raw)

    @property
    def digits(self) -> str:
        return self.value.lstrip("+")

    def display(self) -> str:
        """Human-readable form. Parsing the result again yields the same number."""
        if self.value.startswith("+"):
            try:
                parsed = phonenumbers.parse(self.value, None)
            except phonenumbers.NumberParseException:
                parsed = None
            if parsed is not None and phonenumbers.is_valid_number(parsed):
                return phonenumbers.format_number(
                    parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL
                )
            return "+" + _group_digits(self.digits)
        if len(self.value) == 10:
            v = self.value
            return f"({v[0:3]}) {v[3:6]}-{v[6:10]}"
        return _group_digits(self.value)

    def __str__(self) -> str:
        return self.display()


def _group_digits(digits: str) -> str:
    """Last four digits as one group, the rest in threes counted from the right."""
    head, tail = digits[:-4], digits[-4:]
    groups = []
    while head:
        groups.insert(0, head[-3:])
        head = head[:-3]
    return "-".join(groups + [tail])


@dataclass(frozen=True)
class Email:
    """Email address; the domain is lower-cased, the local part keeps its case."""

    value: str

    def __post_init__(self):
        raw = self.value
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            raise InvalidEmail(raw, "empty")
        if _WHITESPACE.search(text):
            raise InvalidEmail(raw, "embedded whitespace")
        if not text.isprintable():
            raise InvalidEmail(raw, "invalid characters")
        at_count = text.count("@")
        if at_count == 0:
            raise InvalidEmail(raw, "missing @")
        if at_count > 1:
            raise InvalidEmail(raw, "multiple @")
        local, domain = text.split("@")
        if not local:
            raise InvalidEmail(raw, "empty local part")
        if "." not in domain:
            raise InvalidEmail(raw, "missing domain dot")
        if any(not label for label in domain.split(".")):
            raise InvalidEmail(raw, "empty domain label")
        object.__setattr__(self, "value", f"{local}@{domain.lower()}")

    @classmethod
    def create(cls, raw: str) -> "Email":
        return cls(raw)

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def display(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
