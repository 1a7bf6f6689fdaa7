from __future__ import annotations

from media_bridge.media.bridge import RecordingBridge
from media_bridge.media.dispatcher import MediaDispatcher
from media_bridge.media.handle import MediaHandle


def test_recording_bridge_records_calls() -> None:
    bridge = RecordingBridge()
    d = MediaDispatcher(bridge)
    m = MediaHandle("rec.amr", dispatcher=d)

    m.start_record()
    m.stop_record()

    assert [(c.service, c.action, c.args) for c in bridge.calls] == [
        ("Media", "startRecordingAudio", [m.id, "rec.amr"]),
        ("Media", "stopRecordingAudio", [m.id]),
    ]
    assert bridge.last_call().action == "stopRecordingAudio"
    assert bridge.pending() == []


def test_recording_bridge_resolves_once() -> None:
    bridge = RecordingBridge()
    d = MediaDispatcher(bridge)
    m = MediaHandle("a.mp3", dispatcher=d)
    got: list[object] = []

    m.get_current_position(got.append, lambda e: got.append(("err", e)))
    (call,) = bridge.pending()

    bridge.resolve(call, 321)

    assert got == [321]
    assert bridge.pending() == []
    assert bridge.calls[0].action == "getCurrentPositionAudio"


def test_recording_bridge_reject() -> None:
    bridge = RecordingBridge()
    d = MediaDispatcher(bridge)
    m = MediaHandle("a.mp3", dispatcher=d)
    got: list[object] = []

    m.get_current_position(got.append, lambda e: got.append(("err", e)))
    bridge.reject(bridge.pending()[0], "gone")

    assert got == [("err", "gone")]


def test_recording_bridge_result_is_returned() -> None:
    bridge = RecordingBridge(result="ack")
    m = MediaHandle("a.mp3", dispatcher=MediaDispatcher(bridge))

    assert m.stop() == "ack"
