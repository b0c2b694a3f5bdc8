"""Infrastructure layer: codecs for the three external representations, and adapters."""

from contactshare.infrastructure.memory_avatar_store import InMemoryAvatarStore
from contactshare.infrastructure.native import (
    NativeContactCodec,
    NativeContactRecord,
    NativeLabeledValue,
    NativePostalAddress,
    contact_for_native_record,
    native_record_for_contact,
)
from contactshare.infrastructure.phone import normalize_phone, reachable_numbers
from contactshare.infrastructure.vcard import (
    VCardCodec,
    contact_for_vcard,
    contacts_for_vcard,
    vcard_for_contact,
    vcard_for_contacts,
)
from contactshare.infrastructure.wire import (
    ContactMessage,
    DataMessage,
    WireMessageCodec,
    contact_for_data_message,
    contact_for_proto,
    data_message_for_contact,
    proto_for_contact,
)

__all__ = [
    "ContactMessage",
    "DataMessage",
    "InMemoryAvatarStore",
    "NativeContactCodec",
    "NativeContactRecord",
    "NativeLabeledValue",
    "NativePostalAddress",
    "VCardCodec",
    "WireMessageCodec",
    "contact_for_data_message",
    "contact_for_native_record",
    "contact_for_proto",
    "contact_for_vcard",
    "contacts_for_vcard",
    "data_message_for_contact",
    "native_record_for_contact",
    "normalize_phone",
    "proto_for_contact",
    "reachable_numbers",
    "vcard_for_contact",
    "vcard_for_contacts",
]
