"""Field value types: typed, labeled phone numbers, emails and postal addresses.

Every field has a category. Standard categories render a fixed label; the
CUSTOM category carries its own free-text label. A field whose category and
label disagree cannot be constructed.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum

# Label shown for a CUSTOM field whose label arrived blank.
UNLABELED_CUSTOM = "Other"


class PhoneCategory(Enum):
    HOME = "home"
    MOBILE = "mobile"
    WORK = "work"
    CUSTOM = "custom"


class EmailCategory(Enum):
    HOME = "home"
    MOBILE = "mobile"
    WORK = "work"
    CUSTOM = "custom"


class AddressCategory(Enum):
    HOME = "home"
    WORK = "work"
    CUSTOM = "custom"


_STANDARD_LABELS = {
    "home": "Home",
    "mobile": "Mobile",
    "work": "Work",
}


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _check_label(kind: str, category: Enum, label: str | None) -> None:
    if category.value == "custom":
        if label is None:
            raise ValueError(f"Custom {kind} must carry a label.")
    elif label is not None:
        raise ValueError(f"{kind.capitalize()} of category {category.name} cannot carry a label.")


class _LabeledField:
    """Capabilities shared by all field types."""

    category: Enum
    label: str | None

    def _label_is_valid(self) -> bool:
        if self.category.value == "custom":
            return bool(self.label and self.label.strip())
        return self.label is None

    def localized_label(self) -> str:
        if self.category.value == "custom":
            return (self.label or "").strip() or UNLABELED_CUSTOM
        return _STANDARD_LABELS[self.category.value]

    def _normalized_label(self) -> str | None:
        if self.label is None:
            return None
        return self.label.strip()


@dataclass(frozen=True)
class PhoneField(_LabeledField):
    category: PhoneCategory
    number: str
    label: str | None = None

    def __post_init__(self):
        _check_label("phone number", self.category, self.label)

    def is_valid(self) -> bool:
        return bool(self.number and self.number.strip()) and self._label_is_valid()

    def normalized(self) -> "PhoneField | None":
        number = _clean(self.number)
        if number is None:
            return None
        return replace(self, number=number, label=self._normalized_label())

    def debug_description(self) -> str:
        return f"[Phone] {self.localized_label()}: {self.number}"


@dataclass(frozen=True)
class EmailField(_LabeledField):
    category: EmailCategory
    address: str
    label: str | None = None

    def __post_init__(self):
        _check_label("email", self.category, self.label)

    def is_valid(self) -> bool:
        return bool(self.address and self.address.strip()) and self._label_is_valid()

    def normalized(self) -> "EmailField | None":
        address = _clean(self.address)
        if address is None:
            return None
        return replace(self, address=address, label=self._normalized_label())

    def debug_description(self) -> str:
        return f"[Email] {self.localized_label()}: {self.address}"


@dataclass(frozen=True)
class AddressField(_LabeledField):
    category: AddressCategory
    label: str | None = None
    street: str | None = None
    pobox: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None

    def __post_init__(self):
        _check_label("address", self.category, self.label)

    def components(self) -> tuple[str | None, ...]:
        """Street, pobox, neighborhood, city, region, postcode, country."""
        return tuple(
            getattr(self, f.name) for f in fields(self) if f.name not in ("category", "label")
        )

    def has_content(self) -> bool:
        return any(_clean(c) for c in self.components())

    def is_valid(self) -> bool:
        return self.has_content() and self._label_is_valid()

    def normalized(self) -> "AddressField | None":
        if not self.has_content():
            return None
        return replace(
            self,
            label=self._normalized_label(),
            street=_clean(self.street),
            pobox=_clean(self.pobox),
            neighborhood=_clean(self.neighborhood),
            city=_clean(self.city),
            region=_clean(self.region),
            postcode=_clean(self.postcode),
            country=_clean(self.country),
        )

    def debug_description(self) -> str:
        parts = ", ".join(c for c in self.components() if c)
        return f"[Address] {self.localized_label()}: {parts}"
