"""Domain layer: contact aggregate and field value types. No dependencies on outer layers."""

from contactshare.domain.contact import UNKNOWN_CONTACT_NAME, AvatarRef, Contact
from contactshare.domain.fields import (
    AddressCategory,
    AddressField,
    EmailCategory,
    EmailField,
    PhoneCategory,
    PhoneField,
)

__all__ = [
    "AddressCategory",
    "AddressField",
    "AvatarRef",
    "Contact",
    "EmailCategory",
    "EmailField",
    "PhoneCategory",
    "PhoneField",
    "UNKNOWN_CONTACT_NAME",
]
