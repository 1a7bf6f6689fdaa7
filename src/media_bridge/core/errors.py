from __future__ import annotations


class MediaBridgeError(Exception):
    """Base exception for this project."""


class ConfigError(MediaBridgeError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class InvalidCallbackError(MediaBridgeError, TypeError):
    """A callback slot was given a value that is neither None nor callable."""

    def __init__(self, slot: str, value: object):
        super().__init__(f"{slot} is not a function (got {type(value).__name__})")
        self.slot = slot
        self.value = value


class DispatcherNotInstalledError(MediaBridgeError):
    """No process-wide dispatcher has been installed."""

    def __init__(self) -> None:
        super().__init__("media dispatcher is not installed; call install_dispatcher() first")


class DuplicateMediaIdError(MediaBridgeError):
    def __init__(self, media_id: str):
        super().__init__(f"media id {media_id!r} is already registered")
        self.media_id = media_id


class MediaOperationError(MediaBridgeError):
    """A bridge operation reported failure through its error callback."""

    def __init__(self, action: str, detail: object = None):
        super().__init__(f"{action} failed: {detail!r}" if detail is not None else f"{action} failed")
        self.action = action
        self.detail = detail
