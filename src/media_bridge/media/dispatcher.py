"""Process-wide dispatcher for the native media host.

This module:
- Owns the id -> handle registry and the outbound `NativeBridge`.
- Receives status notifications from the host via `on_status`.
- Routes them to cached handle state or client callbacks.

Notification failures are non-fatal: unknown ids and kinds are dropped, and
exceptions raised by client callbacks are logged, never propagated to the host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Sequence

from media_bridge.core.config import MediaConfig
from media_bridge.core.errors import DispatcherNotInstalledError
from media_bridge.observability.context import bind_context, clear_context
from media_bridge.observability.ids import new_media_id
from media_bridge.observability.logging import get_logger

from .bridge import NativeBridge
from .constants import MediaState, MessageKind
from .registry import MediaDispatchRegistry
from .types import BridgeCallback, MediaError

if TYPE_CHECKING:
    from .handle import MediaHandle


class MediaDispatcher:
    def __init__(
        self,
        bridge: NativeBridge,
        *,
        config: MediaConfig | None = None,
        id_factory: Callable[[], str] = new_media_id,
    ) -> None:
        self._bridge = bridge
        self._config = config or MediaConfig()
        self._id_factory = id_factory
        self._registry = MediaDispatchRegistry()
        self._log = get_logger(__name__)

    @property
    def bridge(self) -> NativeBridge:
        return self._bridge

    @property
    def config(self) -> MediaConfig:
        return self._config

    @property
    def registry(self) -> MediaDispatchRegistry:
        return self._registry

    def new_id(self) -> str:
        return self._id_factory()

    def register(self, handle: MediaHandle) -> None:
        self._registry.add(handle)
        self._log.debug("media_registered", media_id=handle.id, src=handle.src, live=len(self._registry))

    def unregister(self, media_id: str) -> MediaHandle | None:
        handle = self._registry.remove(media_id)
        if handle is not None:
            self._log.debug("media_unregistered", media_id=media_id, live=len(self._registry))
        return handle

    def lookup(self, media_id: str) -> MediaHandle | None:
        return self._registry.get(media_id)

    def invoke(
        self,
        action: str,
        args: Sequence[Any],
        *,
        on_success: BridgeCallback | None = None,
        on_error: BridgeCallback | None = None,
    ) -> Any:
        """Forward one request to the bridge and return whatever it returns."""

        self._log.debug("media_invoke", action=action, bridge_args=list(args))
        return self._bridge.invoke(on_success, on_error, self._config.service, action, list(args))

    def on_status(self, media_id: str, kind: int, value: Any) -> None:
        """Entry point for status notifications from the native host."""

        handle = self._registry.get(media_id)
        if handle is None:
            if self._config.log_ignored:
                self._log.debug("media_status_unknown_id", media_id=media_id, kind=kind, value=value)
            return

        try:
            msg = MessageKind(kind)
        except (ValueError, TypeError):
            if self._config.log_ignored:
                self._log.debug("media_status_unknown_kind", media_id=media_id, kind=kind, value=value)
            return

        tokens = bind_context(media_id=media_id, message_kind=msg.name)
        try:
            if msg is MessageKind.STATE:
                self._on_state(handle, value)
            elif msg is MessageKind.DURATION:
                handle._duration = value
            elif msg is MessageKind.POSITION:
                handle._position = value
                if handle.position_callback is not None:
                    self._run_callback("position_callback", handle.position_callback, value)
            elif msg is MessageKind.ERROR:
                if handle.error_callback is not None:
                    self._run_callback("error_callback", handle.error_callback, MediaError(code=value))
        finally:
            clear_context(tokens)

    def _on_state(self, handle: MediaHandle, value: Any) -> None:
        state = _coerce_state(value)
        handle._state = state

        # success_callback strictly precedes status_callback for STOPPED.
        if state == MediaState.STOPPED and handle.success_callback is not None:
            self._run_callback("success_callback", handle.success_callback)
        if handle.status_callback is not None:
            self._run_callback("status_callback", handle.status_callback, state)

    def _run_callback(self, slot: str, callback: Callable[..., Any], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:  # noqa: BLE001
            self._log.exception("media_callback_error", slot=slot)


def _coerce_state(value: Any) -> Any:
    try:
        return MediaState(value)
    except (ValueError, TypeError):
        return value


_installed: MediaDispatcher | None = None


def install_dispatcher(
    bridge: NativeBridge,
    *,
    config: MediaConfig | None = None,
    id_factory: Callable[[], str] | None = None,
) -> MediaDispatcher:
    """Create the process-wide dispatcher, replacing any previous one."""

    global _installed
    if _installed is not None:
        get_logger(__name__).info("media_dispatcher_replaced", live=len(_installed.registry))
    if id_factory is None:
        _installed = MediaDispatcher(bridge, config=config)
    else:
        _installed = MediaDispatcher(bridge, config=config, id_factory=id_factory)
    return _installed


def get_dispatcher() -> MediaDispatcher:
    if _installed is None:
        raise DispatcherNotInstalledError()
    return _installed


def uninstall_dispatcher() -> None:
    global _installed
    _installed = None
