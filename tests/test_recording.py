import pytest

from flowkit.state.recording import (
    RecordingMode,
    record_snapshot,
    record_steps,
    to_recording_mode,
)


def test_to_recording_mode():
    assert to_recording_mode("OFF") is RecordingMode.OFF
    assert to_recording_mode("Debugger") is RecordingMode.DEBUGGER
    with pytest.raises(ValueError):
        to_recording_mode("dddddd")


def test_to_recording_mode_accepts_a_mode():
    assert to_recording_mode(RecordingMode.FULL) is RecordingMode.FULL


def test_to_recording_mode_rejects_none():
    with pytest.raises(ValueError):
        to_recording_mode(None)


def test_error_names_the_value():
    with pytest.raises(ValueError, match=r"\[dddddd\]"):
        to_recording_mode("dddddd")


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        (RecordingMode.OFF, False),
        (RecordingMode.SNAPSHOT, False),
        (RecordingMode.STEP, True),
        (RecordingMode.FULL, True),
        (RecordingMode.DEBUGGER, True),
    ],
)
def test_record_steps(mode, expected):
    assert record_steps(mode) is expected


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        (RecordingMode.OFF, False),
        (RecordingMode.SNAPSHOT, True),
        (RecordingMode.STEP, False),
        (RecordingMode.FULL, True),
        (RecordingMode.DEBUGGER, False),
    ],
)
def test_record_snapshot(mode, expected):
    assert record_snapshot(mode) is expected