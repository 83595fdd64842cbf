"""Status codes for flow, task and link instances."""

from enum import IntEnum


class FlowStatus(IntEnum):
    """State of a flow instance."""

    NOT_STARTED = 0
    ACTIVE = 100
    COMPLETED = 500
    CANCELLED = 600
    FAILED = 700


class TaskStatus(IntEnum):
    """State of a task instance."""

    NOT_STARTED = 0
    ENTERED = 10
    READY = 20
    WAITING = 30
    DONE = 40
    SKIPPED = 50
    FAILED = 100


class LinkStatus(IntEnum):
    """Outcome of evaluating a link."""

    FALSE = 1
    TRUE = 2
    SKIPPED = 3