"""Wire-message codec: the contact sub-message of a chat data message.

Messages are pydantic models serialised as JSON with protobuf-style camelCase
keys. Category enums use the wire numbering, which differs from the domain
categories; labels.py translates between them. The envelope around the data
message (framing, encryption, delivery) is handled elsewhere.
"""

import logging

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

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
from contactshare.infrastructure.labels import category_for_wire_type, wire_type_for_category

logger = logging.getLogger(__name__)


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Name(WireModel):
    given_name: str | None = None
    family_name: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    middle_name: str | None = None
    display_name: str | None = None


class Phone(WireModel):
    # Plain ints so unknown enum numbers from newer clients still decode.
    value: str | None = None
    type: int | None = None
    label: str | None = None


class Email(WireModel):
    value: str | None = None
    type: int | None = None
    label: str | None = None


class PostalAddress(WireModel):
    type: int | None = None
    label: str | None = None
    street: str | None = None
    pobox: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None


class AttachmentPointer(WireModel):
    id: str
    content_type: str | None = None


class Avatar(WireModel):
    avatar: AttachmentPointer | None = None
    is_profile: bool = False


class ContactMessage(WireModel):
    name: Name | None = None
    number: list[Phone] = []
    email: list[Email] = []
    address: list[PostalAddress] = []
    avatar: Avatar | None = None
    organization: str | None = None


class DataMessage(WireModel):
    """Only the part of the data message this package reads or writes."""

    body: str | None = None
    contact: list[ContactMessage] = []


def _dump(message: WireModel) -> bytes:
    return message.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def _category_and_label(category_type, wire_type: int | None, label: str | None):
    """Category and label for a wire field.

    A standard type sent with a non-blank label decodes as CUSTOM with that
    label, so the label is not lost.
    """
    category = category_for_wire_type(category_type, wire_type)
    if category.value != "custom":
        if label is not None and label.strip():
            return category_type.CUSTOM, label
        return category, None
    return category, label if label is not None else ""


def contact_for_proto(message: ContactMessage) -> Contact | None:
    """Decode a contact sub-message. None when it has no identity and no fields."""
    name = message.name or Name()

    phones = []
    for item in message.number:
        category, label = _category_and_label(PhoneCategory, item.type, item.label)
        phones.append(PhoneField(category=category, label=label, number=item.value or ""))
    emails = []
    for item in message.email:
        category, label = _category_and_label(EmailCategory, item.type, item.label)
        emails.append(EmailField(category=category, label=label, address=item.value or ""))
    addresses = []
    for item in message.address:
        category, label = _category_and_label(AddressCategory, item.type, item.label)
        addresses.append(
            AddressField(
                category=category,
                label=label,
                street=item.street,
                pobox=item.pobox,
                neighborhood=item.neighborhood,
                city=item.city,
                region=item.region,
                postcode=item.postcode,
                country=item.country,
            )
        )

    avatar = None
    is_profile = False
    if message.avatar is not None and message.avatar.avatar is not None and message.avatar.avatar.id.strip():
        pointer = message.avatar.avatar
        avatar = AvatarRef(attachment_id=pointer.id, content_type=pointer.content_type)
        is_profile = message.avatar.is_profile

    contact = Contact(
        given_name=name.given_name,
        family_name=name.family_name,
        middle_name=name.middle_name,
        name_prefix=name.prefix,
        name_suffix=name.suffix,
        organization_name=message.organization,
        phone_numbers=phones,
        emails=emails,
        addresses=addresses,
        avatar=avatar,
        is_profile_avatar=is_profile,
    )
    if not contact.has_name_or_organization() and not contact.normalized().has_fields():
        logger.debug("Contact message has no identity and no fields; ignoring.")
        return None
    return contact


def contact_for_data_message(data: bytes) -> Contact | None:
    """Decode the first contact of a serialised data message, or None."""
    try:
        message = DataMessage.model_validate_json(data)
    except ValidationError as exc:
        logger.debug("Malformed data message: %s", exc.errors()[:1])
        return None
    if not message.contact:
        return None
    return contact_for_proto(message.contact[0])


def proto_for_contact(contact: Contact) -> ContactMessage | None:
    """Encode a contact sub-message.

    The contact is normalized first. Only a name or organization is required;
    a custom field with a blank label is still sent so the recipient sees it.
    """
    contact = contact.normalized()
    if not contact.has_name_or_organization():
        logger.debug("Contact has no name or organization; not encoding.")
        return None
    name = Name(
        given_name=contact.given_name,
        family_name=contact.family_name,
        prefix=contact.name_prefix,
        suffix=contact.name_suffix,
        middle_name=contact.middle_name,
        display_name=contact.display_name,
    )
    numbers = [
        Phone(
            value=p.number,
            type=wire_type_for_category(p.category),
            label=p.label or None,
        )
        for p in contact.phone_numbers
    ]
    emails = [
        Email(
            value=e.address,
            type=wire_type_for_category(e.category),
            label=e.label or None,
        )
        for e in contact.emails
    ]
    addresses = [
        PostalAddress(
            type=wire_type_for_category(a.category),
            label=a.label or None,
            street=a.street,
            pobox=a.pobox,
            neighborhood=a.neighborhood,
            city=a.city,
            region=a.region,
            postcode=a.postcode,
            country=a.country,
        )
        for a in contact.addresses
    ]
    avatar = None
    if contact.avatar is not None:
        avatar = Avatar(
            avatar=AttachmentPointer(id=contact.avatar.attachment_id, content_type=contact.avatar.content_type),
            is_profile=contact.is_profile_avatar,
        )
    return ContactMessage(
        name=name,
        number=numbers,
        email=emails,
        address=addresses,
        avatar=avatar,
        organization=contact.organization_name,
    )


def data_message_for_contact(contact: Contact, *, body: str | None = None) -> bytes | None:
    """Serialise a data message carrying the contact, or None if it cannot be encoded."""
    proto = proto_for_contact(contact)
    if proto is None:
        return None
    return _dump(DataMessage(body=body, contact=[proto]))


class WireMessageCodec:
    """MessageCodec over serialized data messages."""

    def decode(self, data: bytes) -> Contact | None:
        return contact_for_data_message(data)

    def encode(self, contact: Contact) -> bytes | None:
        return data_message_for_contact(contact)
