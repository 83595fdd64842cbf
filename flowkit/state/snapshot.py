"""Snapshots, steps and state records of flow instances, and their recorder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from flowkit.state.change import FlowChange, QueueChange


@dataclass
class TaskState:
    """Status of one task in a snapshot."""

    id: str = ""
    status: int = 0


@dataclass
class LinkState:
    """Status of one link in a snapshot."""

    id: int = 0
    status: int = 0


@dataclass
class WorkItem:
    """A queued unit of work in a snapshot."""

    id: int = 0
    subflow_id: int = 0
    task_id: str = ""


@dataclass
class SnapshotBase:
    """State shared by flow and subflow snapshots."""

    flow_uri: str = ""
    status: int = 0
    attrs: dict[str, Any] | None = None
    tasks: list[TaskState] = field(default_factory=list)
    links: list[LinkState] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty attributes, tasks and links."""
        out: dict[str, Any] = {"flowURI": self.flow_uri, "status": self.status}
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        if self.tasks:
            out["tasks"] = [{"id": t.id, "status": t.status} for t in self.tasks]
        if self.links:
            out["links"] = [{"id": link.id, "status": link.status} for link in self.links]
        return out


@dataclass
class Subflow(SnapshotBase):
    """Snapshot of a subflow started by a task."""

    id: int = 0
    task_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["id"] = self.id
        out["taskId"] = self.task_id
        return out


@dataclass
class Snapshot(SnapshotBase):
    """Snapshot of a flow instance with its work queue and subflows."""

    id: str = ""
    work_queue: list[WorkItem] = field(default_factory=list)
    subflows: list[Subflow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["id"] = self.id
        if self.work_queue:
            out["workQueue"] = [
                {"id": item.id, "subflowId": item.subflow_id, "taskId": item.task_id}
                for item in self.work_queue
            ]
        if self.subflows:
            out["subflows"] = [subflow.to_dict() for subflow in self.subflows]
        return out


@dataclass
class FlowState:
    """Start or end record of a flow instance."""

    user_id: str = ""
    app_name: str = ""
    app_version: str = ""
    host_id: str = ""
    flow_name: str = ""
    flow_instance_id: str = ""
    flow_stats: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None


@dataclass
class Step:
    """Changes made to a flow instance during one step."""

    id: int = 0
    flow_id: str = ""
    flow_changes: dict[int, FlowChange] = field(default_factory=dict)
    queue_changes: dict[int, QueueChange] = field(default_factory=dict)
    start_time: datetime | None = None
    end_time: datetime | None = None
    rerun: bool = False


@dataclass
class FlowInfo:
    """Summary of a recorded flow instance."""

    id: str = ""
    flow_uri: str = ""
    flow_name: str = ""
    status: int = 0
    host_id: str = ""
    flow_status: str = ""
    start_time: str = ""
    end_time: str = ""
    execution_time: str = ""


class Recorder(ABC):
    """A service that records the start, steps, snapshots and end of flow instances."""

    @abstractmethod
    def record_start(self, state: FlowState) -> None:
        """Record that a flow instance started."""

    @abstractmethod
    def record_snapshot(self, snapshot: Snapshot) -> None:
        """Record a snapshot of a flow instance."""

    @abstractmethod
    def record_step(self, step: Step) -> None:
        """Record the changes of the current step of a flow instance."""

    @abstractmethod
    def record_done(self, state: FlowState) -> None:
        """Record that a flow instance finished."""