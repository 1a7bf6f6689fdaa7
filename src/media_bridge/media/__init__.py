from __future__ import annotations

from .bridge import NativeBridge, RecordingBridge
from .constants import MediaErrorCode, MediaState, MessageKind
from .dispatcher import MediaDispatcher, get_dispatcher, install_dispatcher, uninstall_dispatcher
from .handle import MediaHandle
from .registry import MediaDispatchRegistry
from .types import BridgeCall, MediaError

__all__ = [
    "BridgeCall",
    "MediaDispatchRegistry",
    "MediaDispatcher",
    "MediaError",
    "MediaErrorCode",
    "MediaHandle",
    "MediaState",
    "MessageKind",
    "NativeBridge",
    "RecordingBridge",
    "get_dispatcher",
    "install_dispatcher",
    "uninstall_dispatcher",
]
