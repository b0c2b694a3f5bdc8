"""Contact aggregate: identity, ordered field lists and an avatar handle."""

from dataclasses import dataclass, field, replace

from contactshare.domain.fields import AddressField, EmailField, PhoneField

# Display name used when a contact has no name and no organization.
UNKNOWN_CONTACT_NAME = "Unknown Contact"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True)
class AvatarRef:
    """Handle to an avatar image owned by the attachment subsystem. Never the bytes."""

    attachment_id: str
    content_type: str | None = None

    def __post_init__(self):
        if not self.attachment_id or not self.attachment_id.strip():
            raise ValueError("AvatarRef attachment_id must be non-empty.")


@dataclass(frozen=True)
class Contact:
    """
    A shareable contact card.
    Immutable: name derivation and normalization return new instances.
    display_name is derived from the name components and cannot be set.
    """

    given_name: str | None = None
    family_name: str | None = None
    middle_name: str | None = None
    name_prefix: str | None = None
    name_suffix: str | None = None
    organization_name: str | None = None
    phone_numbers: tuple[PhoneField, ...] = field(default=())
    emails: tuple[EmailField, ...] = field(default=())
    addresses: tuple[AddressField, ...] = field(default=())
    avatar: AvatarRef | None = None
    # Profile avatars must never be written to a device's native contacts.
    is_profile_avatar: bool = False

    def __post_init__(self):
        # Accept lists from callers; store tuples.
        for name in ("phone_numbers", "emails", "addresses"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    def name_components(self) -> tuple[str | None, ...]:
        """Prefix, given, middle, family, suffix."""
        return (
            self.name_prefix,
            self.given_name,
            self.middle_name,
            self.family_name,
            self.name_suffix,
        )

    @property
    def full_name(self) -> str:
        return " ".join(c for c in map(_clean, self.name_components()) if c)

    @property
    def display_name(self) -> str:
        return self.full_name or _clean(self.organization_name) or UNKNOWN_CONTACT_NAME

    def has_name_or_organization(self) -> bool:
        return bool(self.full_name or _clean(self.organization_name))

    def has_fields(self) -> bool:
        return bool(self.phone_numbers or self.emails or self.addresses)

    def all_fields(self) -> tuple:
        return self.phone_numbers + self.emails + self.addresses

    def is_valid(self) -> bool:
        if not self.has_name_or_organization():
            return False
        return all(f.is_valid() for f in self.all_fields())

    def normalized(self) -> "Contact":
        """Trimmed copy without empty fields. normalized().normalized() == normalized()."""
        return replace(
            self,
            given_name=_clean(self.given_name),
            family_name=_clean(self.family_name),
            middle_name=_clean(self.middle_name),
            name_prefix=_clean(self.name_prefix),
            name_suffix=_clean(self.name_suffix),
            organization_name=_clean(self.organization_name),
            phone_numbers=_normalize_all(self.phone_numbers),
            emails=_normalize_all(self.emails),
            addresses=_normalize_all(self.addresses),
        )

    def new_contact_with_name(
        self,
        name_prefix: str | None = None,
        given_name: str | None = None,
        middle_name: str | None = None,
        family_name: str | None = None,
        name_suffix: str | None = None,
    ) -> "Contact":
        """A fresh contact: new name, same fields, no organization or avatar."""
        return Contact(
            given_name=given_name,
            family_name=family_name,
            middle_name=middle_name,
            name_prefix=name_prefix,
            name_suffix=name_suffix,
            phone_numbers=self.phone_numbers,
            emails=self.emails,
            addresses=self.addresses,
        )

    def copy_contact_with_name(
        self,
        name_prefix: str | None = None,
        given_name: str | None = None,
        middle_name: str | None = None,
        family_name: str | None = None,
        name_suffix: str | None = None,
    ) -> "Contact":
        """Same contact with only the five name components replaced."""
        return replace(
            self,
            given_name=given_name,
            family_name=family_name,
            middle_name=middle_name,
            name_prefix=name_prefix,
            name_suffix=name_suffix,
        )

    def debug_description(self) -> str:
        lines = [f"[Contact] {self.display_name}"]
        if self.organization_name:
            lines.append(f"[Organization] {self.organization_name}")
        lines.extend(f.debug_description() for f in self.all_fields())
        if self.avatar is not None:
            kind = "profile" if self.is_profile_avatar else "device"
            lines.append(f"[Avatar] {self.avatar.attachment_id} ({kind})")
        return "\n".join(lines)


def _normalize_all(items: tuple) -> tuple:
    out = []
    for item in items:
        normalized = item.normalized()
        if normalized is not None:
            out.append(normalized)
    return tuple(out)
