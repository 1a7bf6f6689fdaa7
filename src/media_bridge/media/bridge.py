from __future__ import annotations

from typing import Any, Protocol, Sequence

from media_bridge.observability.logging import get_logger

from .types import BridgeCall, BridgeCallback


class NativeBridge(Protocol):
    """Outbound channel to the native media host.

    `invoke` must return promptly. When callbacks are given the host resolves
    at most one of them, once. Completion of fire-and-forget requests is
    reported separately through `MediaDispatcher.on_status`.
    """

    def invoke(
        self,
        on_success: BridgeCallback | None,
        on_error: BridgeCallback | None,
        service: str,
        action: str,
        args: Sequence[Any],
    ) -> Any:
        ...


class RecordingBridge:
    """In-process stand-in for a native host.

    Records every request and never answers on its own; callers drive replies
    with `resolve` / `reject` and status notifications through the dispatcher.
    """

    def __init__(self, *, result: Any = None) -> None:
        self.calls: list[BridgeCall] = []
        self._result = result
        self._log = get_logger(__name__)

    def invoke(
        self,
        on_success: BridgeCallback | None,
        on_error: BridgeCallback | None,
        service: str,
        action: str,
        args: Sequence[Any],
    ) -> Any:
        call = BridgeCall(service=service, action=action, args=list(args), on_success=on_success, on_error=on_error)
        self.calls.append(call)
        self._log.info(
            "bridge_invoke",
            service=service,
            action=action,
            bridge_args=list(args),
            has_callbacks=on_success is not None or on_error is not None,
        )
        return self._result

    def last_call(self) -> BridgeCall | None:
        return self.calls[-1] if self.calls else None

    def pending(self) -> list[BridgeCall]:
        """Calls that still hold an unresolved callback."""

        return [c for c in self.calls if c.on_success is not None or c.on_error is not None]

    def resolve(self, call: BridgeCall, value: Any) -> None:
        self._settle(call, value, success=True)

    def reject(self, call: BridgeCall, detail: Any) -> None:
        self._settle(call, detail, success=False)

    def _settle(self, call: BridgeCall, value: Any, *, success: bool) -> None:
        idx = self.calls.index(call)
        # One-shot: drop both callbacks before running either.
        self.calls[idx] = BridgeCall(service=call.service, action=call.action, args=call.args)
        cb = call.on_success if success else call.on_error
        if cb is not None:
            cb(value)
