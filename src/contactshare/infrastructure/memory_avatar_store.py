"""In-memory implementation of AvatarStore (no attachment backend)."""

import hashlib

from contactshare.domain import AvatarRef


class InMemoryAvatarStore:
    """Keeps avatar bytes in a dict keyed by content digest."""

    def __init__(self) -> None:
        self._by_id: dict[str, bytes] = {}

    def save(self, data: bytes, content_type: str | None = "image/jpeg") -> AvatarRef:
        attachment_id = hashlib.sha256(data).hexdigest()
        self._by_id[attachment_id] = data
        return AvatarRef(attachment_id=attachment_id, content_type=content_type)

    def load(self, ref: AvatarRef) -> bytes | None:
        return self._by_id.get(ref.attachment_id)
