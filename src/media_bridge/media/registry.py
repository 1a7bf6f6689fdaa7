from __future__ import annotations

from typing import TYPE_CHECKING

from media_bridge.core.errors import DuplicateMediaIdError

if TYPE_CHECKING:
    from .handle import MediaHandle


class MediaDispatchRegistry:
    """id -> MediaHandle mapping used to route inbound notifications."""

    def __init__(self) -> None:
        self._handles: dict[str, MediaHandle] = {}

    def add(self, handle: MediaHandle) -> None:
        if handle.id in self._handles:
            raise DuplicateMediaIdError(handle.id)
        self._handles[handle.id] = handle

    def get(self, media_id: str) -> MediaHandle | None:
        try:
            return self._handles.get(media_id)
        except TypeError:
            # Unhashable ids from the host cannot name a handle.
            return None

    def remove(self, media_id: str) -> MediaHandle | None:
        return self._handles.pop(media_id, None)

    def __contains__(self, media_id: object) -> bool:
        return self.get(media_id) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._handles)
