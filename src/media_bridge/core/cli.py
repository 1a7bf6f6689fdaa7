from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import yaml

from media_bridge.media.bridge import RecordingBridge
from media_bridge.media.constants import MediaErrorCode, MediaState, MessageKind, parse_enum
from media_bridge.media.dispatcher import MediaDispatcher
from media_bridge.media.handle import MediaHandle
from media_bridge.observability.logging import configure_logging, get_logger

from .config import LOG_LEVELS, AppConfig, load_config
from .errors import ConfigError

# Handle methods a replay script may call, with their positional arity.
_CALLS: dict[str, int] = {
    "play": 0,
    "stop": 0,
    "pause": 0,
    "seek_to": 1,
    "set_volume": 1,
    "start_record": 0,
    "stop_record": 0,
    "release": 0,
    "get_duration": 0,
    "get_current_position": 0,
}


class ScriptError(ValueError):
    def __init__(self, message: str, *, step: int):
        super().__init__(f"step {step}: {message}")
        self.step = step


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="media-bridge", description="Media bridge tools")
    p.add_argument("--config", default=None, help="YAML config path (defaults are used when omitted)")
    p.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        help="log level, overrides logging.level",
    )

    sub = p.add_subparsers(dest="command", required=True)
    replay = sub.add_parser("replay", help="drive one media handle from a YAML script against a recording bridge")
    replay.add_argument("script", help="YAML list of steps (call / notify)")
    replay.add_argument("--src", required=True, help="media source passed to the handle")
    return p


def load_script(path: str | Path) -> list[dict[str, Any]]:
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
    if not isinstance(raw, list):
        raise ScriptError("script must be a YAML list", step=0)
    steps: list[dict[str, Any]] = []
    for i, step in enumerate(raw, start=1):
        if not isinstance(step, dict) or ("call" in step) == ("notify" in step):
            raise ScriptError("each step needs exactly one of 'call' or 'notify'", step=i)
        steps.append(step)
    return steps


def run_script(handle: MediaHandle, dispatcher: MediaDispatcher, steps: list[dict[str, Any]]) -> None:
    log = get_logger("media_bridge.replay")
    bridge = dispatcher.bridge

    for i, step in enumerate(steps, start=1):
        if "call" in step:
            name = str(step["call"])
            args = step.get("args", [])
            if name not in _CALLS:
                raise ScriptError(f"unknown call {name!r}", step=i)
            if not isinstance(args, list) or len(args) != _CALLS[name]:
                raise ScriptError(f"{name} takes {_CALLS[name]} argument(s)", step=i)

            if name == "get_current_position":
                handle.get_current_position(
                    lambda value: log.info("position_result", value=value),
                    lambda detail: log.info("position_error", detail=detail),
                )
                continue

            out = getattr(handle, name)(*args)
            if name == "get_duration":
                log.info("duration", value=out)
            continue

        note = step["notify"]
        if not isinstance(note, dict) or "kind" not in note:
            raise ScriptError("notify needs a mapping with 'kind' and 'value'", step=i)
        try:
            kind = parse_enum(MessageKind, note["kind"])
            value = note.get("value")
            if kind == MessageKind.STATE:
                value = parse_enum(MediaState, value)
            elif kind == MessageKind.ERROR:
                value = parse_enum(MediaErrorCode, value)
        except ValueError as e:
            raise ScriptError(str(e), step=i) from e

        media_id = str(note.get("id", handle.id))
        # Answer a pending position query when the script reports a position.
        if kind == MessageKind.POSITION and isinstance(bridge, RecordingBridge):
            for call in bridge.pending():
                if call.args and call.args[0] == media_id:
                    bridge.resolve(call, value)
        dispatcher.on_status(media_id, kind, value)


def _client_callbacks(log: Any) -> dict[str, Any]:
    def on_success() -> None:
        log.info("callback_success")

    def on_error(err: Any) -> None:
        log.info("callback_error", code=err.code)

    def on_status(state: Any) -> None:
        label = state.label if isinstance(state, MediaState) else str(state)
        log.info("callback_status", state=state, label=label)

    def on_position(position: Any) -> None:
        log.info("callback_position", position=position)

    return {
        "success_callback": on_success,
        "error_callback": on_error,
        "status_callback": on_status,
        "position_callback": on_position,
    }


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=args.log_level or "INFO")
    log = get_logger("media_bridge.cli")

    try:
        cfg = load_config(args.config) if args.config else AppConfig.default()
        if args.log_level is None:
            configure_logging(level=cfg.logging.level)

        steps = load_script(args.script)
    except (ConfigError, ScriptError, OSError, yaml.YAMLError) as e:
        log.error("replay_failed", error=str(e))
        return 2

    bridge = RecordingBridge()
    dispatcher = MediaDispatcher(bridge, config=cfg.media)
    handle = MediaHandle(args.src, dispatcher=dispatcher, **_client_callbacks(log))

    try:
        run_script(handle, dispatcher, steps)
    except ScriptError as e:
        log.error("replay_failed", error=str(e))
        return 2

    log.info("replay_done", media_id=handle.id, bridge_calls=len(bridge.calls), duration=handle.get_duration())
    return 0
