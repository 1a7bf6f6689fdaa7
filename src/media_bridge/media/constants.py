"""Message kinds, states and error codes shared with the native media host."""

from __future__ import annotations

from enum import IntEnum

SERVICE_NAME = "Media"

# Bridge action names understood by the native host.
ACTION_START_PLAYING = "startPlayingAudio"
ACTION_STOP_PLAYING = "stopPlayingAudio"
ACTION_PAUSE_PLAYING = "pausePlayingAudio"
ACTION_SEEK = "seekToAudio"
ACTION_GET_POSITION = "getCurrentPositionAudio"
ACTION_START_RECORDING = "startRecordingAudio"
ACTION_STOP_RECORDING = "stopRecordingAudio"
ACTION_RELEASE = "release"
ACTION_SET_VOLUME = "setVolume"


class MessageKind(IntEnum):
    STATE = 1
    DURATION = 2
    POSITION = 3
    ERROR = 9


class MediaState(IntEnum):
    NONE = 0
    STARTING = 1
    RUNNING = 2
    PAUSED = 3
    STOPPED = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class MediaErrorCode(IntEnum):
    NONE_ACTIVE = 0
    ABORTED = 1
    NETWORK = 2
    DECODE = 3
    NONE_SUPPORTED = 4


def parse_enum(enum_cls: type[IntEnum], value: object) -> int:
    """Accept an enum member name (case-insensitive) or an integer.

    Integers outside the enum are returned unchanged.

    Raises:
        ValueError: unknown name or non-integer value.
    """

    if isinstance(value, bool):
        raise ValueError(f"not a {enum_cls.__name__}: {value!r}")
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_cls.__members__:
            return enum_cls.__members__[key]
        if key.lstrip("-").isdigit():
            return parse_enum(enum_cls, int(key))
    raise ValueError(f"not a {enum_cls.__name__}: {value!r}")
