from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if src.exists():
        sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _no_installed_dispatcher():
    from media_bridge.media.dispatcher import uninstall_dispatcher

    uninstall_dispatcher()
    yield
    uninstall_dispatcher()
