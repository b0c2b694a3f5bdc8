"""Unit tests for ContactShareService. In-memory avatar store and the real codecs."""

import json
from functools import partial

from contactshare.application import (
    ContactReceived,
    ContactShareService,
    Invalid,
    NativeExport,
    OutgoingShare,
    VCardExport,
)
from contactshare.domain import (
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
    NativeContactRecord,
    NativeLabeledValue,
    VCardCodec,
    WireMessageCodec,
    reachable_numbers,
)


def _service(**kwargs) -> ContactShareService:
    kwargs.setdefault("avatar_store", InMemoryAvatarStore())
    return ContactShareService(
        message_codec=WireMessageCodec(),
        card_codec=VCardCodec(),
        native_codec=NativeContactCodec(),
        **kwargs,
    )


def _jane() -> Contact:
    return Contact(
        given_name=" Jane ",
        family_name="Doe",
        phone_numbers=[
            PhoneField(category=PhoneCategory.MOBILE, number="+1 202 555 1234"),
            PhoneField(category=PhoneCategory.WORK, number="  "),
        ],
    )


def test_prepare_outgoing_normalizes_and_encodes() -> None:
    share = _service().prepare_outgoing(_jane())
    assert isinstance(share, OutgoingShare)
    assert share.display_name == "Jane Doe"
    payload = json.loads(share.payload)
    assert payload["contact"][0]["name"]["givenName"] == "Jane"
    assert len(payload["contact"][0]["number"]) == 1


def test_prepare_outgoing_rejects_invalid_contact() -> None:
    service = _service()
    assert isinstance(service.prepare_outgoing(Contact()), Invalid)
    unlabeled = Contact(
        given_name="Jane",
        emails=[EmailField(category=EmailCategory.CUSTOM, label=" ", address="j@d.test")],
    )
    result = service.prepare_outgoing(unlabeled)
    assert isinstance(result, Invalid)
    assert "label" in result.reason.lower()


def test_prepare_outgoing_disabled_by_configuration() -> None:
    result = _service(sending_enabled=False).prepare_outgoing(_jane())
    assert isinstance(result, Invalid)
    assert "disabled" in result.reason.lower()


def test_receive_data_message_round_trip() -> None:
    service = _service()
    share = service.prepare_outgoing(_jane())
    received = service.receive_data_message(share.payload)
    assert isinstance(received, ContactReceived)
    assert received.contact == _jane().normalized()
    assert received.display_name == "Jane Doe"


def test_receive_data_message_without_contact() -> None:
    result = _service().receive_data_message(b'{"body": "hello"}')
    assert isinstance(result, Invalid)


def test_received_contact_with_bad_label_is_kept_but_invalid() -> None:
    payload = json.dumps(
        {"contact": [{"name": {"givenName": "Jo"}, "number": [{"value": "1", "type": 4}]}]}
    ).encode("utf-8")
    received = _service().receive_data_message(payload)
    assert isinstance(received, ContactReceived)
    assert not received.contact.is_valid()


def test_import_vcard_stores_photo() -> None:
    store = InMemoryAvatarStore()
    service = _service(avatar_store=store)
    card = VCardCodec().encode(Contact(given_name="Ann"), avatar_data=b"jpeg-bytes")
    received = service.import_vcard(card)
    assert isinstance(received, ContactReceived)
    assert store.load(received.contact.avatar) == b"jpeg-bytes"


def test_import_vcard_rejects_garbage() -> None:
    assert isinstance(_service().import_vcard(b"nothing here"), Invalid)


def test_export_vcard_embeds_available_avatar() -> None:
    store = InMemoryAvatarStore()
    ref = store.save(b"jpeg-bytes")
    exported = _service(avatar_store=store).export_vcard(Contact(given_name="Ann", avatar=ref))
    assert isinstance(exported, VCardExport)
    assert b"PHOTO" in exported.data


def test_export_vcard_without_avatar_bytes() -> None:
    contact = Contact(given_name="Ann", avatar=AvatarRef(attachment_id="missing"))
    exported = _service().export_vcard(contact)
    assert isinstance(exported, VCardExport)
    assert b"PHOTO" not in exported.data


def test_import_native_record() -> None:
    record = NativeContactRecord(
        given_name="Jane",
        phone_numbers=[NativeLabeledValue("Assistant", "+1 202 555 0199")],
    )
    received = _service().import_native_record(record)
    assert isinstance(received, ContactReceived)
    phone = received.contact.phone_numbers[0]
    assert phone.category is PhoneCategory.CUSTOM
    assert phone.label == "Assistant"
    assert isinstance(_service().import_native_record(NativeContactRecord()), Invalid)


def test_export_native_record_drops_profile_avatar() -> None:
    contact = Contact(given_name="Jane", avatar=AvatarRef(attachment_id="p-1"), is_profile_avatar=True)
    exported = _service().export_native_record(contact)
    assert isinstance(exported, NativeExport)
    assert exported.record.image_id is None


def test_export_native_record_rejects_unlabeled_custom() -> None:
    contact = Contact(
        given_name="Jane",
        phone_numbers=[PhoneField(category=PhoneCategory.CUSTOM, label="", number="1")],
    )
    assert isinstance(_service().export_native_record(contact), Invalid)


def test_reachable_numbers_dedupes_and_skips_undialable() -> None:
    service = _service(find_reachable_numbers=partial(reachable_numbers, default_region="US"))
    contact = Contact(
        given_name="Jane",
        phone_numbers=[
            PhoneField(category=PhoneCategory.MOBILE, number="202 555 1234"),
            PhoneField(category=PhoneCategory.HOME, number="+1 (202) 555-1234"),
            PhoneField(category=PhoneCategory.WORK, number="ext. 12"),
        ],
    )
    assert service.reachable_numbers(contact) == ["+12025551234"]


def test_reachable_numbers_without_parser() -> None:
    assert _service().reachable_numbers(_jane()) == ["+1 202 555 1234"]


def test_export_vcard_names_the_exported_contact() -> None:
    exported = _service().export_vcard(Contact(given_name="  Ann ", family_name=" Lee"))
    assert isinstance(exported, VCardExport)
    assert exported.display_name == "Ann Lee"
    assert b"FN:Ann Lee" in exported.data
