"""Portable-card codec: vCard bytes <-> Contact, built on vobject.

Custom labels are written the way address books do it, as a grouped
X-ABLabel next to the property:

    item1.TEL:+1 202 555 0100
    item1.X-ABLabel:Assistant
"""

import base64
import binascii
import logging
from collections.abc import Callable, Iterable

import vobject
from vobject.base import VObjectError

from contactshare.domain import (
    AddressCategory,
    AddressField,
    AvatarRef,
    Contact,
    EmailCategory,
    EmailField,
    PhoneCategory,
    PhoneField,
)
from contactshare.infrastructure.labels import VCARD_TYPE_FOR_VALUE, category_for_vcard_types

logger = logging.getLogger(__name__)

VCARD_VERSION = "3.0"
_LABEL_PROPERTY = "X-ABLabel"


def _text(value) -> str:
    """vobject returns some structured parts as lists."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v).strip() for v in value if v and str(v).strip())
    return str(value).strip()


def _types(line) -> list[str]:
    """TYPE values, plus vCard 2.1 bare parameters such as TEL;WORK;VOICE."""
    out = []
    for raw in line.params.get("TYPE", []):
        out.extend(t for t in str(raw).split(",") if t.strip())
    out.extend(str(p) for p in getattr(line, "singletonparams", []) if str(p).strip())
    out.extend(key for key, values in line.params.items() if key != "TYPE" and not values)
    return out


def _group_labels(card) -> dict[str, str]:
    labels = {}
    for line in card.contents.get(_LABEL_PROPERTY.lower(), []):
        if line.group:
            labels[line.group.lower()] = _text(line.value)
    return labels


def _label_for(line, labels: dict[str, str]) -> str | None:
    if not line.group:
        return None
    return labels.get(line.group.lower())


def _pop_photo(card) -> bytes | None:
    """Remove the raw PHOTO lines and decode the first one.

    Done before the card is transformed so a corrupt photo costs only the
    photo, not the whole card.
    """
    lines = card.contents.pop("photo", [])
    if not lines:
        return None
    line = lines[0]
    value = line.value
    if isinstance(value, bytes):
        return value or None
    value = str(value or "")
    kinds = [str(v).lower() for v in line.params.get("VALUE", [])]
    if not value or "uri" in kinds or "url" in kinds or value.startswith(("http:", "https:")):
        return None
    try:
        return base64.b64decode("".join(value.split()), validate=True) or None
    except (binascii.Error, ValueError):
        logger.debug("vCard PHOTO is not valid base64; ignoring the photo.")
        return None


def _contact_from_card(
    card, photo: bytes | None, store_avatar: Callable[[bytes], AvatarRef] | None
) -> Contact | None:
    labels = _group_labels(card)

    given = family = middle = prefix = suffix = ""
    if "n" in card.contents:
        name = card.n.value
        given = _text(getattr(name, "given", ""))
        family = _text(getattr(name, "family", ""))
        middle = _text(getattr(name, "additional", ""))
        prefix = _text(getattr(name, "prefix", ""))
        suffix = _text(getattr(name, "suffix", ""))

    organization = ""
    if "org" in card.contents:
        org = card.org.value
        organization = _text(org[0] if isinstance(org, (list, tuple)) and org else org)

    if not any((given, family, middle, prefix, suffix)) and "fn" in card.contents:
        formatted = _text(card.fn.value)
        if formatted and formatted != organization:
            given = formatted

    phones = []
    for line in card.contents.get("tel", []):
        category, label = category_for_vcard_types(PhoneCategory, _types(line), _label_for(line, labels))
        phones.append(PhoneField(category=category, label=label, number=_text(line.value)))

    emails = []
    for line in card.contents.get("email", []):
        category, label = category_for_vcard_types(EmailCategory, _types(line), _label_for(line, labels))
        emails.append(EmailField(category=category, label=label, address=_text(line.value)))

    addresses = []
    for line in card.contents.get("adr", []):
        category, label = category_for_vcard_types(AddressCategory, _types(line), _label_for(line, labels))
        adr = line.value
        addresses.append(
            AddressField(
                category=category,
                label=label,
                street=_text(getattr(adr, "street", "")) or None,
                pobox=_text(getattr(adr, "box", "")) or None,
                neighborhood=_text(getattr(adr, "extended", "")) or None,
                city=_text(getattr(adr, "city", "")) or None,
                region=_text(getattr(adr, "region", "")) or None,
                postcode=_text(getattr(adr, "code", "")) or None,
                country=_text(getattr(adr, "country", "")) or None,
            )
        )

    avatar = None
    if store_avatar is not None and photo:
        avatar = store_avatar(photo)

    contact = Contact(
        given_name=given or None,
        family_name=family or None,
        middle_name=middle or None,
        name_prefix=prefix or None,
        name_suffix=suffix or None,
        organization_name=organization or None,
        phone_numbers=phones,
        emails=emails,
        addresses=addresses,
        avatar=avatar,
    )
    if not contact.has_name_or_organization() and not contact.normalized().has_fields():
        logger.debug("vCard has no name, organization or fields; ignoring.")
        return None
    return contact


def _read_cards(data: bytes) -> list[tuple] | None:
    """Parse vCard data into (card, photo bytes) pairs, or None if unparseable."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("vCard data is not UTF-8.")
        return None
    cards = []
    try:
        for component in vobject.readComponents(text, transform=False):
            if not component.name or component.name.upper() != "VCARD":
                continue
            photo = _pop_photo(component)
            component.transformChildrenToNative()
            cards.append((component, photo))
    except (VObjectError, ValueError, AttributeError) as exc:
        logger.debug("Unparseable vCard data: %s", exc)
        return None
    return cards


def contact_for_vcard(
    data: bytes, *, store_avatar: Callable[[bytes], AvatarRef] | None = None
) -> Contact | None:
    """Decode the first card in vCard data. Returns None for malformed or empty input.

    store_avatar receives embedded PHOTO bytes and returns the handle to keep.
    """
    cards = _read_cards(data)
    if not cards:
        return None
    card, photo = cards[0]
    return _contact_from_card(card, photo, store_avatar)


def contacts_for_vcard(
    data: bytes, *, store_avatar: Callable[[bytes], AvatarRef] | None = None
) -> list[Contact]:
    """Decode every usable card in a multi-card file, skipping empty ones."""
    out = []
    for card, photo in _read_cards(data) or []:
        contact = _contact_from_card(card, photo, store_avatar)
        if contact is not None:
            out.append(contact)
    return out


class _ItemGroups:
    def __init__(self) -> None:
        self._count = 0

    def next(self) -> str:
        self._count += 1
        return f"item{self._count}"


def _add_typed(card, name: str, value, category, label, groups: _ItemGroups) -> None:
    vcard_type = VCARD_TYPE_FOR_VALUE.get(category.value)
    custom_label = (label or "").strip()
    if vcard_type is None and custom_label:
        group = groups.next()
        line = card.add(name, group=group)
        line.value = value
        card.add(_LABEL_PROPERTY, group=group).value = custom_label
        return
    line = card.add(name)
    line.value = value
    if vcard_type is not None:
        line.type_param = vcard_type


def _build_card(contact: Contact, avatar_data: bytes | None):
    card = vobject.vCard()
    card.add("version").value = VCARD_VERSION
    card.add("n").value = vobject.vcard.Name(
        family=contact.family_name or "",
        given=contact.given_name or "",
        additional=contact.middle_name or "",
        prefix=contact.name_prefix or "",
        suffix=contact.name_suffix or "",
    )
    card.add("fn").value = contact.display_name
    if contact.organization_name:
        card.add("org").value = [contact.organization_name]

    groups = _ItemGroups()
    for phone in contact.phone_numbers:
        if phone.number:
            _add_typed(card, "tel", phone.number, phone.category, phone.label, groups)
    for email in contact.emails:
        if email.address:
            _add_typed(card, "email", email.address, email.category, email.label, groups)
    for address in contact.addresses:
        if not address.has_content():
            continue
        value = vobject.vcard.Address(
            street=address.street or "",
            city=address.city or "",
            region=address.region or "",
            code=address.postcode or "",
            country=address.country or "",
            box=address.pobox or "",
            extended=address.neighborhood or "",
        )
        _add_typed(card, "adr", value, address.category, address.label, groups)

    if avatar_data:
        photo = card.add("photo")
        photo.encoding_param = "b"
        photo.type_param = "JPEG"
        photo.value = avatar_data
    return card


def vcard_for_contact(contact: Contact, *, avatar_data: bytes | None = None) -> bytes | None:
    """Encode a contact as vCard 3.0 bytes.

    Best-effort: data the card cannot hold is dropped rather than failing.
    Returns None only for a contact with no name and no organization.
    avatar_data is the avatar image, already resolved by the caller.
    """
    if not contact.has_name_or_organization():
        logger.debug("Contact has no name or organization; not writing a vCard.")
        return None
    return _build_card(contact, avatar_data).serialize().encode("utf-8")


def vcard_for_contacts(contacts: Iterable[Contact]) -> bytes:
    """Encode several contacts into one file, skipping those that cannot be written."""
    chunks = [vcard_for_contact(c) for c in contacts]
    return b"".join(c for c in chunks if c is not None)


class VCardCodec:
    """CardCodec over vCard 3.0 bytes."""

    def decode(
        self, data: bytes, *, store_avatar: Callable[[bytes], AvatarRef] | None = None
    ) -> Contact | None:
        return contact_for_vcard(data, store_avatar=store_avatar)

    def encode(self, contact: Contact, *, avatar_data: bytes | None = None) -> bytes | None:
        return vcard_for_contact(contact, avatar_data=avatar_data)
