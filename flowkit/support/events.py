"""Events published while flow and task instances run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

FLOW_EVENT_TYPE = "flowevent"
TASK_EVENT_TYPE = "taskevent"


class EventStatus(str, Enum):
    """Status reported by a flow or task event."""

    CREATED = "Created"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    FAILED = "Failed"
    SCHEDULED = "Scheduled"
    SKIPPED = "Skipped"
    STARTED = "Started"
    WAITING = "Waiting"
    UNKNOWN = "Created"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HostTask:
    """The task that started a subflow."""

    task_name: str = ""
    task_instance_id: str = ""


@dataclass(frozen=True)
class FlowEvent:
    """Execution details of a flow instance."""

    event_type: ClassVar[str] = FLOW_EVENT_TYPE

    flow_name: str
    flow_id: str
    flow_status: EventStatus
    flow_input: dict[str, Any] = field(default_factory=dict)
    flow_output: dict[str, Any] = field(default_factory=dict)
    flow_error: BaseException | None = None
    host_task: HostTask | None = None
    parent_flow_name: str = ""
    parent_flow_id: str = ""
    time: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class TaskEvent:
    """Execution details of a task instance."""

    event_type: ClassVar[str] = TASK_EVENT_TYPE

    activity_ref: str
    flow_name: str
    flow_id: str
    task_name: str
    task_instance_id: str
    task_type: str
    task_status: EventStatus
    time: datetime = field(default_factory=_now)
    task_input: dict[str, Any] = field(default_factory=dict)
    task_output: dict[str, Any] = field(default_factory=dict)
    task_error: BaseException | None = None