"""Category mapping shared by the native-record, vCard and wire codecs.

Standard categories map 1:1 by name. Anything unrecognised on decode becomes
CUSTOM with the original label kept verbatim.
"""

import re
from enum import Enum, IntEnum

from contactshare.domain import AddressCategory, EmailCategory, PhoneCategory

# Apple-style system labels look like "_$!<Home>!$_".
_SYSTEM_LABEL = re.compile(r"^_\$!<(.*)>!\$_$")

# Kept small: every label recognised here loses the user's own spelling.
_NATIVE_PHONE_LABELS = {
    "home": PhoneCategory.HOME,
    "mobile": PhoneCategory.MOBILE,
    "cell": PhoneCategory.MOBILE,
    "work": PhoneCategory.WORK,
}
_NATIVE_EMAIL_LABELS = {
    "home": EmailCategory.HOME,
    "mobile": EmailCategory.MOBILE,
    "cell": EmailCategory.MOBILE,
    "work": EmailCategory.WORK,
}
_NATIVE_ADDRESS_LABELS = {
    "home": AddressCategory.HOME,
    "work": AddressCategory.WORK,
}

NATIVE_LABEL_HOME = "_$!<Home>!$_"
NATIVE_LABEL_MOBILE = "_$!<Mobile>!$_"
NATIVE_LABEL_WORK = "_$!<Work>!$_"

_NATIVE_LABEL_FOR_VALUE = {
    "home": NATIVE_LABEL_HOME,
    "mobile": NATIVE_LABEL_MOBILE,
    "work": NATIVE_LABEL_WORK,
}

# vCard TYPE tokens. Generic tokens say nothing about the category.
VCARD_TYPE_FOR_VALUE = {
    "home": "HOME",
    "mobile": "CELL",
    "work": "WORK",
}
_VCARD_GENERIC_TYPES = {
    "VOICE", "INTERNET", "PREF", "OTHER", "X400", "MSG", "POSTAL", "PARCEL", "DOM", "INTL",
    # vCard 2.1 writes encodings as bare parameters too.
    "QUOTED-PRINTABLE", "BASE64", "8BIT", "7BIT",
}


class WirePhoneType(IntEnum):
    HOME = 1
    MOBILE = 2
    WORK = 3
    CUSTOM = 4


class WireEmailType(IntEnum):
    HOME = 1
    MOBILE = 2
    WORK = 3
    CUSTOM = 4


class WirePostalAddressType(IntEnum):
    HOME = 1
    WORK = 2
    CUSTOM = 3


_WIRE_TYPES = {
    PhoneCategory: WirePhoneType,
    EmailCategory: WireEmailType,
    AddressCategory: WirePostalAddressType,
}


def unwrap_native_label(label: str | None) -> str:
    """Strip the system wrapper from a native label; blank for None."""
    label = (label or "").strip()
    match = _SYSTEM_LABEL.match(label)
    if match:
        return match.group(1).strip()
    return label


def _table_for(category_type: type[Enum]) -> dict:
    if category_type is PhoneCategory:
        return _NATIVE_PHONE_LABELS
    if category_type is EmailCategory:
        return _NATIVE_EMAIL_LABELS
    if category_type is AddressCategory:
        return _NATIVE_ADDRESS_LABELS
    raise TypeError(f"Not a field category: {category_type!r}")


def category_for_native_label(category_type: type[Enum], raw_label: str | None) -> tuple[Enum, str | None]:
    """Map a native label to (category, label). Label is None unless CUSTOM.

    A missing label carries nothing to preserve and maps to HOME.
    """
    label = unwrap_native_label(raw_label)
    if not label:
        return category_type.HOME, None
    category = _table_for(category_type).get(label.lower())
    if category is not None:
        return category, None
    return category_type.CUSTOM, label


def native_label_for_category(category: Enum, label: str | None) -> str:
    """Native label for a field. Raises ValueError for a CUSTOM field without a label."""
    if category.value == "custom":
        label = (label or "").strip()
        if not label:
            raise ValueError("Custom field needs a non-empty label to be written natively.")
        return label
    return _NATIVE_LABEL_FOR_VALUE[category.value]


def category_for_vcard_types(
    category_type: type[Enum], types: list[str], custom_label: str | None
) -> tuple[Enum, str | None]:
    """Map vCard TYPE tokens (and an X-ABLabel, if any) to (category, label)."""
    if custom_label is not None and custom_label.strip():
        return category_for_native_label(category_type, custom_label)
    tokens = [t.strip() for t in types if t and t.strip()]
    table = _table_for(category_type)
    for token in tokens:
        category = table.get(token.lower())
        if category is not None:
            return category, None
    leftovers = [t for t in tokens if t.upper() not in _VCARD_GENERIC_TYPES]
    for token in leftovers:
        # Keep the token as written, minus an X- prefix.
        label = token[2:].strip() if token.upper().startswith("X-") else token
        if label:
            return category_type.CUSTOM, label
    return category_type.HOME, None


def wire_type_for_category(category: Enum) -> int:
    return int(_WIRE_TYPES[type(category)][category.name])


def category_for_wire_type(category_type: type[Enum], value: int | None) -> Enum:
    """Map a wire enum number to a category.

    A missing number takes the enum default (HOME); unknown numbers map to CUSTOM.
    """
    if value is None:
        return category_type.HOME
    try:
        wire_type = _WIRE_TYPES[category_type](value)
    except ValueError:
        return category_type.CUSTOM
    return category_type[wire_type.name]
