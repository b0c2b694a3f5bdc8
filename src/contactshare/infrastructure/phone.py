"""Phone numbers on a contact card: E.164 parsing and the numbers worth dialing."""

from collections.abc import Iterable

import phonenumbers

from contactshare.domain import PhoneField


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """Parse and return E.164 form of the number, or None if it is not dialable.

    default_region applies only to numbers written without a country code.
    """
    if not raw or not str(raw).strip():
        return None
    try:
        parsed = phonenumbers.parse(str(raw).strip(), default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def reachable_numbers(phones: Iterable[PhoneField], default_region: str | None = None) -> list[str]:
    """E.164 numbers of the phone fields, in card order.

    Fields that do not parse are skipped; two spellings of one number count once.
    """
    out: list[str] = []
    for phone in phones:
        e164 = normalize_phone(phone.number, default_region=default_region)
        if e164 and e164 not in out:
            out.append(e164)
    return out
