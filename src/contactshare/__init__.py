"""
Contactshare core: clean-architecture layout.

- domain: Contact aggregate and typed field values. No outer dependencies.
- application: share use cases (ContactShareService), ports, DTOs.
- infrastructure: codecs (native record, vCard, wire message) and adapters.
"""

from contactshare.application import (
    ContactReceived,
    ContactShareService,
    Invalid,
    NativeExport,
    OutgoingShare,
    VCardExport,
)
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
from contactshare.infrastructure import (
    InMemoryAvatarStore,
    NativeContactCodec,
    VCardCodec,
    WireMessageCodec,
)

__all__ = [
    "AddressCategory",
    "AddressField",
    "AvatarRef",
    "Contact",
    "ContactReceived",
    "ContactShareService",
    "EmailCategory",
    "EmailField",
    "InMemoryAvatarStore",
    "Invalid",
    "NativeContactCodec",
    "NativeExport",
    "OutgoingShare",
    "PhoneCategory",
    "PhoneField",
    "VCardCodec",
    "VCardExport",
    "WireMessageCodec",
]
