"""Application layer: share use cases, ports, and DTOs. Depends only on domain."""

from contactshare.application.dto import (
    ContactReceived,
    Invalid,
    NativeExport,
    OutgoingShare,
    VCardExport,
)
from contactshare.application.ports import (
    AvatarStore,
    CardCodec,
    MessageCodec,
    NativeRecordCodec,
)
from contactshare.application.share_service import ContactShareService

__all__ = [
    "AvatarStore",
    "CardCodec",
    "ContactReceived",
    "ContactShareService",
    "Invalid",
    "MessageCodec",
    "NativeExport",
    "NativeRecordCodec",
    "OutgoingShare",
    "VCardExport",
]
