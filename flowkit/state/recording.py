"""State recording modes."""

from __future__ import annotations

from enum import Enum
from typing import Any


class RecordingMode(str, Enum):
    """What the state recorder stores."""

    OFF = "off"
    DEBUGGER = "debugger"
    STEP = "step"
    FULL = "full"
    SNAPSHOT = "snapshot"


def to_recording_mode(mode: Any) -> RecordingMode:
    """Return the recording mode named by ``mode``, ignoring case."""
    if isinstance(mode, RecordingMode):
        return mode
    if mode is None:
        text = ""
    elif isinstance(mode, (bytes, bytearray)):
        text = bytes(mode).decode("utf-8", errors="replace")
    else:
        text = str(mode)
    try:
        return RecordingMode(text.lower())
    except ValueError:
        raise ValueError(f"unsupported state recording mode [{text}]") from None


def record_steps(mode: RecordingMode) -> bool:
    """Return whether ``mode`` records steps."""
    return mode not in (RecordingMode.OFF, RecordingMode.SNAPSHOT)


def record_snapshot(mode: RecordingMode) -> bool:
    """Return whether ``mode`` records snapshots."""
    return mode in (RecordingMode.SNAPSHOT, RecordingMode.FULL)