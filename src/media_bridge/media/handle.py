from __future__ import annotations

import asyncio
from typing import Any

from media_bridge.core.errors import InvalidCallbackError, MediaOperationError
from media_bridge.observability.logging import get_logger

from . import constants as c
from .dispatcher import MediaDispatcher, get_dispatcher
from .types import BridgeCallback, ErrorCallback, PositionCallback, StatusCallback, SuccessCallback

_log = get_logger(__name__)


class MediaHandle:
    """Proxy for one playable/recordable resource on the native host.

    Every method is a single non-blocking bridge request. Outcomes arrive later
    through the dispatcher: `success_callback()` when the host reports STOPPED,
    `status_callback(state)` on every state change, `position_callback(ms)` on
    position updates and `error_callback(MediaError)` on failures.

    Construction raises `InvalidCallbackError` when a callback slot holds a
    value that is neither None nor callable; in that case no id is assigned
    and nothing is registered.
    """

    def __init__(
        self,
        src: str,
        success_callback: SuccessCallback | None = None,
        error_callback: ErrorCallback | None = None,
        status_callback: StatusCallback | None = None,
        position_callback: PositionCallback | None = None,
        *,
        dispatcher: MediaDispatcher | None = None,
    ) -> None:
        for slot, cb in (
            ("success_callback", success_callback),
            ("error_callback", error_callback),
            ("status_callback", status_callback),
            ("position_callback", position_callback),
        ):
            if cb is not None and not callable(cb):
                _log.error("media_invalid_callback", slot=slot, value_type=type(cb).__name__, src=src)
                raise InvalidCallbackError(slot, cb)

        self._dispatcher = dispatcher if dispatcher is not None else get_dispatcher()

        self.id: str = self._dispatcher.new_id()
        self.src = src
        self.success_callback = success_callback
        self.error_callback = error_callback
        self.status_callback = status_callback
        self.position_callback = position_callback
        # Written only by the dispatcher.
        self._duration: Any = -1
        self._position: Any = -1
        self._state: Any = c.MediaState.NONE

        self._dispatcher.register(self)
        _log.info("media_created", media_id=self.id, src=src)

    def __repr__(self) -> str:
        return f"MediaHandle(id={self.id!r}, src={self.src!r})"

    @property
    def state(self) -> Any:
        """Last state reported by the host (`MediaState.NONE` until then)."""

        return self._state

    @property
    def last_position(self) -> Any:
        """Last position pushed by the host, -1 if none. Not a live query."""

        return self._position

    # Playback

    def play(self) -> None:
        """Start or resume playing `src`."""

        self._send(c.ACTION_START_PLAYING, self.id, self.src)

    def stop(self) -> Any:
        return self._send(c.ACTION_STOP_PLAYING, self.id)

    def pause(self) -> None:
        self._send(c.ACTION_PAUSE_PLAYING, self.id)

    def seek_to(self, milliseconds: int) -> None:
        """Jump to an absolute position. Range checks are left to the host."""

        self._send(c.ACTION_SEEK, self.id, milliseconds)

    def set_volume(self, volume: float) -> None:
        self._send(c.ACTION_SET_VOLUME, self.id, volume)

    def get_duration(self) -> Any:
        """Cached duration in milliseconds, or -1 if the host has not reported one.

        The duration is only known for media that is playing, paused or stopped.
        """

        return self._duration

    def get_current_position(self, on_success: BridgeCallback | None, on_error: BridgeCallback | None) -> None:
        """Ask the host for the live position; the answer goes to the given callbacks."""

        self._dispatcher.invoke(c.ACTION_GET_POSITION, [self.id], on_success=on_success, on_error=on_error)

    async def get_current_position_async(self) -> Any:
        """Awaitable form of `get_current_position`.

        Raises:
            MediaOperationError: the host answered through the error callback.
        """

        loop = asyncio.get_running_loop()
        fut: asyncio.Future[Any] = loop.create_future()

        def _resolve(value: Any = None) -> None:
            if not fut.done():
                fut.set_result(value)

        def _reject(detail: Any = None) -> None:
            if not fut.done():
                fut.set_exception(MediaOperationError(c.ACTION_GET_POSITION, detail))

        self.get_current_position(
            lambda value=None: _post(loop, _resolve, value),
            lambda detail=None: _post(loop, _reject, detail),
        )
        return await fut

    # Recording

    def start_record(self) -> None:
        """Start recording into `src`."""

        self._send(c.ACTION_START_RECORDING, self.id, self.src)

    def stop_record(self) -> None:
        self._send(c.ACTION_STOP_RECORDING, self.id)

    # Lifecycle

    def release(self) -> None:
        """Tell the host it may free resources for this id.

        With `media.evict_on_release` the handle is also dropped from the
        registry, so later notifications for it are ignored. The handle itself
        keeps working.
        """

        self._send(c.ACTION_RELEASE, self.id)
        if self._dispatcher.config.evict_on_release:
            self._dispatcher.unregister(self.id)
        _log.info("media_released", media_id=self.id, evicted=self._dispatcher.config.evict_on_release)

    def _send(self, action: str, *args: Any) -> Any:
        return self._dispatcher.invoke(action, args)


def _post(loop: asyncio.AbstractEventLoop, fn: Any, arg: Any) -> None:
    """Schedule `fn(arg)` on `loop`; answers arriving after the loop closed are dropped."""

    if loop.is_closed():
        return
    try:
        loop.call_soon_threadsafe(fn, arg)
    except RuntimeError:
        # Closed between the check and the call.
        return
