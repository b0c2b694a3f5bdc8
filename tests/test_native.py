"""Tests for the native-record codec."""

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
from contactshare.infrastructure.labels import NATIVE_LABEL_HOME, NATIVE_LABEL_WORK
from contactshare.infrastructure.native import (
    NativeContactCodec,
    NativeContactRecord,
    NativeLabeledValue,
    NativePostalAddress,
    contact_for_native_record,
    native_record_for_contact,
)


def _record() -> NativeContactRecord:
    return NativeContactRecord(
        given_name="Jane",
        family_name="Doe",
        organization_name="Acme Corp",
        phone_numbers=[
            NativeLabeledValue("Mobile", "+1 202 555 0100"),
            NativeLabeledValue("Assistant", "+1 202 555 0199"),
        ],
        email_addresses=[NativeLabeledValue(NATIVE_LABEL_WORK, "jane@acme.test")],
        postal_addresses=[
            NativeLabeledValue(
                "_$!<Home>!$_",
                NativePostalAddress(street="1 Main St", sub_locality="Old Town", city="Springfield", state="IL"),
            )
        ],
        image_id="photo-42",
        image_content_type="image/png",
    )


def test_decode_maps_labels_to_categories() -> None:
    contact = contact_for_native_record(_record())
    assert contact is not None
    assert contact.display_name == "Jane Doe"
    assert contact.phone_numbers[0] == PhoneField(category=PhoneCategory.MOBILE, number="+1 202 555 0100")
    assert contact.phone_numbers[1] == PhoneField(
        category=PhoneCategory.CUSTOM, label="Assistant", number="+1 202 555 0199"
    )
    assert contact.emails[0].category is EmailCategory.WORK
    address = contact.addresses[0]
    assert address.category is AddressCategory.HOME
    assert address.neighborhood == "Old Town"
    assert address.region == "IL"


def test_decode_image_is_device_avatar() -> None:
    contact = contact_for_native_record(_record())
    assert contact.avatar == AvatarRef(attachment_id="photo-42", content_type="image/png")
    assert contact.is_profile_avatar is False


def test_decode_skips_image_when_policy_forbids() -> None:
    contact = contact_for_native_record(_record(), include_avatar=False)
    assert contact.avatar is None
    assert NativeContactCodec(include_avatar=False).decode(_record()).avatar is None


def test_decode_empty_record_is_absent() -> None:
    assert contact_for_native_record(NativeContactRecord()) is None
    blank = NativeContactRecord(
        given_name="  ",
        phone_numbers=[NativeLabeledValue("home", "  ")],
    )
    assert contact_for_native_record(blank) is None


def test_decode_record_with_only_fields() -> None:
    record = NativeContactRecord(phone_numbers=[NativeLabeledValue(None, "555 0100")])
    contact = contact_for_native_record(record)
    assert contact is not None
    assert contact.phone_numbers[0].category is PhoneCategory.HOME
    assert not contact.is_valid()


def test_encode_writes_system_labels_and_custom_labels() -> None:
    contact = Contact(
        given_name="Jane",
        phone_numbers=[
            PhoneField(category=PhoneCategory.HOME, number="1"),
            PhoneField(category=PhoneCategory.CUSTOM, label="Assistant", number="2"),
        ],
        addresses=[AddressField(category=AddressCategory.WORK, pobox="PO 7", city="Oslo")],
    )
    record = native_record_for_contact(contact)
    assert [p.label for p in record.phone_numbers] == [NATIVE_LABEL_HOME, "Assistant"]
    assert record.postal_addresses[0].label == NATIVE_LABEL_WORK
    assert record.postal_addresses[0].value.po_box == "PO 7"
    assert record.given_name == "Jane"
    assert record.family_name == ""


def test_encode_never_writes_profile_avatar() -> None:
    contact = Contact(given_name="Jane", avatar=AvatarRef(attachment_id="profile-1"), is_profile_avatar=True)
    record = native_record_for_contact(contact)
    assert record is not None
    assert record.image_id is None


def test_encode_writes_device_avatar() -> None:
    contact = Contact(given_name="Jane", avatar=AvatarRef(attachment_id="photo-1", content_type="image/jpeg"))
    record = native_record_for_contact(contact)
    assert record.image_id == "photo-1"
    assert record.image_content_type == "image/jpeg"


def test_encode_fails_for_unlabeled_custom_field() -> None:
    contact = Contact(
        given_name="Jane",
        emails=[EmailField(category=EmailCategory.CUSTOM, label="", address="j@d.test")],
    )
    assert native_record_for_contact(contact) is None


def test_encode_fails_without_name_or_organization() -> None:
    contact = Contact(phone_numbers=[PhoneField(category=PhoneCategory.HOME, number="1")])
    assert native_record_for_contact(contact) is None


def test_record_round_trip() -> None:
    contact = contact_for_native_record(_record())
    again = contact_for_native_record(native_record_for_contact(contact))
    assert again == contact
