"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Callable
from typing import Any, Protocol

from contactshare.domain import AvatarRef, Contact


class AvatarStore(Protocol):
    """Attachment subsystem boundary: turns avatar bytes into handles and back."""

    def save(self, data: bytes, content_type: str | None = "image/jpeg") -> AvatarRef:
        """Persist avatar bytes and return the handle a Contact keeps."""
        ...

    def load(self, ref: AvatarRef) -> bytes | None:
        """Return the bytes behind a handle, or None if they are not available."""
        ...


class MessageCodec(Protocol):
    """Wire-message representation of a contact."""

    def decode(self, data: bytes) -> Contact | None:
        """Contact carried by a serialized data message, or None."""
        ...

    def encode(self, contact: Contact) -> bytes | None:
        """Serialized data message for the contact, or None if it cannot be sent."""
        ...


class CardCodec(Protocol):
    """Portable card (vCard) representation of a contact."""

    def decode(
        self, data: bytes, *, store_avatar: Callable[[bytes], AvatarRef] | None = None
    ) -> Contact | None:
        ...

    def encode(self, contact: Contact, *, avatar_data: bytes | None = None) -> bytes | None:
        ...


class NativeRecordCodec(Protocol):
    """Device address-book representation of a contact."""

    def decode(self, record: Any) -> Contact | None:
        ...

    def encode(self, contact: Contact) -> Any | None:
        ...
