"""Region-aware phone input: numbers typed without a country code become E.164."""

import phonenumbers


def localize_phone(raw: str, default_region: str | None) -> str:
    """Return raw in E.164 when it is a valid number in default_region, else raw unchanged.

    Input that already carries a country code is accepted as is by phonenumbers; anything
    it cannot place is passed through so PhoneNumber reports the rule it breaks.
    """
    text = raw.strip()
    if not default_region or not text:
        return raw
    try:
        number = phonenumbers.parse(text, default_region.upper())
    except phonenumbers.NumberParseException:
        return raw
    if not phonenumbers.is_valid_number(number):
        return raw
    return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)
