"""Native-record codec: device address-book entries <-> Contact.

The native record mirrors a platform contact: structured name, organization,
labeled phone/email/postal collections and an optional image resource.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar

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
from contactshare.infrastructure.labels import (
    category_for_native_label,
    native_label_for_category,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class NativeLabeledValue(Generic[T]):
    label: str | None
    value: T


@dataclass
class NativePostalAddress:
    street: str = ""
    po_box: str = ""
    sub_locality: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


@dataclass
class NativeContactRecord:
    """A device contact. image_id identifies the platform image resource, if any."""

    given_name: str = ""
    family_name: str = ""
    middle_name: str = ""
    name_prefix: str = ""
    name_suffix: str = ""
    organization_name: str = ""
    phone_numbers: list[NativeLabeledValue[str]] = field(default_factory=list)
    email_addresses: list[NativeLabeledValue[str]] = field(default_factory=list)
    postal_addresses: list[NativeLabeledValue[NativePostalAddress]] = field(default_factory=list)
    image_id: str | None = None
    image_content_type: str | None = None


def _address_from_native(item: NativeLabeledValue[NativePostalAddress]) -> AddressField:
    category, label = category_for_native_label(AddressCategory, item.label)
    postal = item.value
    return AddressField(
        category=category,
        label=label,
        street=postal.street or None,
        pobox=postal.po_box or None,
        neighborhood=postal.sub_locality or None,
        city=postal.city or None,
        region=postal.state or None,
        postcode=postal.postal_code or None,
        country=postal.country or None,
    )


def contact_for_native_record(
    record: NativeContactRecord, *, include_avatar: bool = True
) -> Contact | None:
    """Decode a device contact. Returns None for an essentially empty record.

    The image, when present and include_avatar allows, becomes a device avatar
    (never a profile avatar).
    """
    phones = []
    for item in record.phone_numbers:
        category, label = category_for_native_label(PhoneCategory, item.label)
        phones.append(PhoneField(category=category, label=label, number=item.value or ""))
    emails = []
    for item in record.email_addresses:
        category, label = category_for_native_label(EmailCategory, item.label)
        emails.append(EmailField(category=category, label=label, address=item.value or ""))
    addresses = [_address_from_native(item) for item in record.postal_addresses]

    avatar = None
    if include_avatar and record.image_id:
        avatar = AvatarRef(attachment_id=record.image_id, content_type=record.image_content_type)

    contact = Contact(
        given_name=record.given_name or None,
        family_name=record.family_name or None,
        middle_name=record.middle_name or None,
        name_prefix=record.name_prefix or None,
        name_suffix=record.name_suffix or None,
        organization_name=record.organization_name or None,
        phone_numbers=phones,
        emails=emails,
        addresses=addresses,
        avatar=avatar,
        is_profile_avatar=False,
    )
    if not contact.has_name_or_organization() and not contact.normalized().has_fields():
        logger.debug("Native record has no name, organization or fields; ignoring.")
        return None
    return contact


def native_record_for_contact(contact: Contact) -> NativeContactRecord | None:
    """Encode a contact as a device contact.

    Returns None when the contact has no name or organization, or when a
    custom field has no label to write. Profile avatars are never written.
    """
    if not contact.has_name_or_organization():
        logger.debug("Contact has no name or organization; not writing a native record.")
        return None
    try:
        phones = [
            NativeLabeledValue(native_label_for_category(p.category, p.label), p.number)
            for p in contact.phone_numbers
        ]
        emails = [
            NativeLabeledValue(native_label_for_category(e.category, e.label), e.address)
            for e in contact.emails
        ]
        addresses = [
            NativeLabeledValue(
                native_label_for_category(a.category, a.label),
                NativePostalAddress(
                    street=a.street or "",
                    po_box=a.pobox or "",
                    sub_locality=a.neighborhood or "",
                    city=a.city or "",
                    state=a.region or "",
                    postal_code=a.postcode or "",
                    country=a.country or "",
                ),
            )
            for a in contact.addresses
        ]
    except ValueError as exc:
        logger.debug("Cannot write native record: %s", exc)
        return None

    record = NativeContactRecord(
        given_name=contact.given_name or "",
        family_name=contact.family_name or "",
        middle_name=contact.middle_name or "",
        name_prefix=contact.name_prefix or "",
        name_suffix=contact.name_suffix or "",
        organization_name=contact.organization_name or "",
        phone_numbers=phones,
        email_addresses=emails,
        postal_addresses=addresses,
    )
    if contact.avatar is not None and not contact.is_profile_avatar:
        record.image_id = contact.avatar.attachment_id
        record.image_content_type = contact.avatar.content_type
    return record


class NativeContactCodec:
    """NativeRecordCodec; include_avatar is the policy for importing device photos."""

    def __init__(self, *, include_avatar: bool = True) -> None:
        self._include_avatar = include_avatar

    def decode(self, record: NativeContactRecord) -> Contact | None:
        return contact_for_native_record(record, include_avatar=self._include_avatar)

    def encode(self, contact: Contact) -> NativeContactRecord | None:
        return native_record_for_contact(contact)
