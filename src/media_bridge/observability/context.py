from __future__ import annotations

from contextvars import ContextVar, Token


_media_id: ContextVar[str | None] = ContextVar("media_id", default=None)
_message_kind: ContextVar[str | None] = ContextVar("message_kind", default=None)


def bind_context(*, media_id: str, message_kind: str | None = None) -> tuple[Token, Token]:
    """Bind the media id (and inbound message kind) for the current dispatch.

    Returns tokens for `clear_context`.
    """

    return _media_id.set(media_id), _message_kind.set(message_kind)


def clear_context(tokens: tuple[Token, Token]) -> None:
    media_token, kind_token = tokens
    _message_kind.reset(kind_token)
    _media_id.reset(media_token)


def snapshot() -> dict[str, object]:
    """Return a snapshot of current observability context for logging."""

    out: dict[str, object] = {}
    if (v := _media_id.get()) is not None:
        out["media_id"] = v
    if (v := _message_kind.get()) is not None:
        out["message_kind"] = v
    return out
