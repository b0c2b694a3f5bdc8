"""Contact share flow: decode incoming cards, prepare outgoing ones, export to other formats."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from contactshare.application.dto import (
    ContactReceived,
    Invalid,
    NativeExport,
    OutgoingShare,
    VCardExport,
)
from contactshare.application.ports import AvatarStore, CardCodec, MessageCodec, NativeRecordCodec
from contactshare.domain import Contact, PhoneField

logger = logging.getLogger(__name__)


class ContactShareService:
    """Incoming: data message / vCard / device record -> normalized Contact.
    Outgoing: Contact -> data message / vCard / device record.
    """

    def __init__(
        self,
        message_codec: MessageCodec,
        card_codec: CardCodec,
        native_codec: NativeRecordCodec,
        avatar_store: AvatarStore,
        *,
        sending_enabled: bool = True,
        find_reachable_numbers: Callable[[Iterable[PhoneField]], list[str]] | None = None,
    ) -> None:
        self._messages = message_codec
        self._cards = card_codec
        self._native = native_codec
        self._avatars = avatar_store
        self._sending_enabled = sending_enabled
        self._find_reachable_numbers = find_reachable_numbers

    def receive_data_message(self, data: bytes) -> ContactReceived | Invalid:
        """Decode the contact in an incoming data message."""
        contact = self._messages.decode(data)
        if contact is None:
            return Invalid(reason="Message does not carry a contact.")
        return ContactReceived(contact=contact.normalized())

    def import_vcard(self, data: bytes) -> ContactReceived | Invalid:
        """Decode a vCard file. An embedded photo is kept in the avatar store."""
        contact = self._cards.decode(data, store_avatar=self._avatars.save)
        if contact is None:
            return Invalid(reason="Not a usable vCard.")
        return ContactReceived(contact=contact.normalized())

    def import_native_record(self, record: Any) -> ContactReceived | Invalid:
        """Decode a device contact picked by the user."""
        contact = self._native.decode(record)
        if contact is None:
            return Invalid(reason="Device contact has no name, organization or details.")
        return ContactReceived(contact=contact.normalized())

    def prepare_outgoing(self, contact: Contact) -> OutgoingShare | Invalid:
        """Normalize and validate a contact, then serialize it for sending."""
        if not self._sending_enabled:
            return Invalid(reason="Sending contacts is disabled.")
        contact = contact.normalized()
        if not contact.is_valid():
            logger.info("Refusing to send invalid contact: %s", contact.display_name)
            return Invalid(reason="Contact needs a name or organization and labels on custom fields.")
        payload = self._messages.encode(contact)
        if payload is None:
            return Invalid(reason="Contact could not be encoded.")
        return OutgoingShare(payload=payload, display_name=contact.display_name)

    def export_vcard(self, contact: Contact) -> VCardExport | Invalid:
        """vCard for a contact, with the avatar embedded when its bytes are available."""
        contact = contact.normalized()
        avatar_data = None
        if contact.avatar is not None:
            avatar_data = self._avatars.load(contact.avatar)
            if avatar_data is None:
                logger.warning("Avatar %s not available; exporting without photo.", contact.avatar.attachment_id)
        data = self._cards.encode(contact, avatar_data=avatar_data)
        if data is None:
            return Invalid(reason="Contact needs a name or organization.")
        return VCardExport(data=data, display_name=contact.display_name)

    def export_native_record(self, contact: Contact) -> NativeExport | Invalid:
        """Device record for saving a received contact to the address book."""
        contact = contact.normalized()
        record = self._native.encode(contact)
        if record is None:
            return Invalid(reason="Contact cannot be saved to the device.")
        return NativeExport(record=record, display_name=contact.display_name)

    def reachable_numbers(self, contact: Contact) -> list[str]:
        """Numbers on the card worth offering to message, in card order."""
        phones = contact.normalized().phone_numbers
        if self._find_reachable_numbers is None:
            return [p.number for p in phones]
        return self._find_reachable_numbers(phones)
