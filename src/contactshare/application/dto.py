"""Result types for the contact share flow."""

from dataclasses import dataclass

from contactshare.domain import Contact


@dataclass(frozen=True)
class ContactReceived:
    """An incoming or imported contact, normalized. Check contact.is_valid() before sharing it on."""

    contact: Contact

    @property
    def display_name(self) -> str:
        return self.contact.display_name


@dataclass(frozen=True)
class OutgoingShare:
    """A contact ready to send: serialized data message payload."""

    payload: bytes
    display_name: str


@dataclass(frozen=True)
class VCardExport:
    data: bytes
    display_name: str


@dataclass(frozen=True)
class NativeExport:
    record: object  # NativeContactRecord; application does not import infrastructure types.
    display_name: str


@dataclass(frozen=True)
class Invalid:
    """Input could not be decoded, or the contact cannot be used this way."""

    reason: str
