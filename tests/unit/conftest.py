from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from media_bridge.core.config import MediaConfig
from media_bridge.media.dispatcher import MediaDispatcher


@dataclass(slots=True)
class FakeBridge:
    calls: list[tuple[str, str, list[Any]]] = field(default_factory=list)
    callbacks: list[tuple[Any, Any]] = field(default_factory=list)
    result: Any = None

    def invoke(self, on_success: Any, on_error: Any, service: str, action: str, args: Any) -> Any:
        self.calls.append((service, action, list(args)))
        self.callbacks.append((on_success, on_error))
        return self.result


class SequentialIds:
    def __init__(self) -> None:
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"m{self.n}"


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def dispatcher(bridge: FakeBridge) -> MediaDispatcher:
    return MediaDispatcher(bridge, config=MediaConfig(), id_factory=SequentialIds())
