"""In-process proxy between application code and a native media host.

- `MediaHandle` forwards playback/recording requests over a `NativeBridge`.
- `MediaDispatcher` routes inbound status notifications back to handles.
"""

from __future__ import annotations

from media_bridge.core.errors import InvalidCallbackError, MediaBridgeError
from media_bridge.media import (
    MediaDispatcher,
    MediaError,
    MediaErrorCode,
    MediaHandle,
    MediaState,
    MessageKind,
    NativeBridge,
    get_dispatcher,
    install_dispatcher,
    uninstall_dispatcher,
)

__all__ = [
    "InvalidCallbackError",
    "MediaBridgeError",
    "MediaDispatcher",
    "MediaError",
    "MediaErrorCode",
    "MediaHandle",
    "MediaState",
    "MessageKind",
    "NativeBridge",
    "get_dispatcher",
    "install_dispatcher",
    "uninstall_dispatcher",
]
