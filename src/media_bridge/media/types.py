from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .constants import MediaErrorCode

SuccessCallback = Callable[[], Any]
ErrorCallback = Callable[["MediaError"], Any]
StatusCallback = Callable[[int], Any]
PositionCallback = Callable[[Any], Any]
BridgeCallback = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class MediaError:
    """Error reported by the native host.

    `code` is passed through exactly as received; `message` is left empty
    because no code-to-message translation happens in this layer.
    """

    code: int
    message: str = ""

    @property
    def known_code(self) -> MediaErrorCode | None:
        try:
            return MediaErrorCode(self.code)
        except (ValueError, TypeError):
            return None


@dataclass(frozen=True, slots=True)
class BridgeCall:
    """One outbound request as seen by a bridge."""

    service: str
    action: str
    args: list[Any]
    on_success: BridgeCallback | None = None
    on_error: BridgeCallback | None = None
