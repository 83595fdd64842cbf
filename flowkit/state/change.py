"""Changes recorded for a flow instance during one step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ChangeType(IntEnum):
    """Kind of change made to an object of an instance."""

    ADD = 0
    UPDATE = 1
    DELETE = 2


@dataclass
class TaskChange:
    """Change to a task instance."""

    change_type: ChangeType = ChangeType.ADD
    status: int = 0
    input: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"change": int(self.change_type), "status": self.status, "input": self.input}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskChange:
        return cls(
            change_type=ChangeType(data.get("change", 0)),
            status=data.get("status") or 0,
            input=data.get("input"),
        )


@dataclass
class LinkChange:
    """Change to a link instance."""

    change_type: ChangeType = ChangeType.ADD
    status: int = 0
    from_task: str = ""
    to_task: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "change": int(self.change_type),
            "status": self.status,
            "from": self.from_task,
            "to": self.to_task,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinkChange:
        return cls(
            change_type=ChangeType(data.get("change", 0)),
            status=data.get("status") or 0,
            from_task=data.get("from") or "",
            to_task=data.get("to") or "",
        )


@dataclass
class QueueChange:
    """Change to the work queue of an instance."""

    change_type: ChangeType = ChangeType.ADD
    subflow_id: int = 0
    task_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "change": int(self.change_type),
            "subflowId": self.subflow_id,
            "taskId": self.task_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueueChange:
        return cls(
            change_type=ChangeType(data.get("change", 0)),
            subflow_id=data.get("subflowId") or 0,
            task_id=data.get("taskId") or "",
        )


@dataclass
class FlowChange:
    """Change to a flow or subflow instance."""

    new_flow: bool = False
    flow_uri: str = ""
    subflow_id: int = 0
    task_id: str = ""
    status: int = 0
    attrs: dict[str, Any] | None = None
    tasks: dict[str, TaskChange] | None = None
    links: dict[int, LinkChange] | None = None
    return_data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "newFlow": self.new_flow,
            "flowURI": self.flow_uri,
            "subflowId": self.subflow_id,
            "taskId": self.task_id,
            "status": self.status,
            "attrs": self.attrs,
            "tasks": None
            if self.tasks is None
            else {task_id: chg.to_dict() for task_id, chg in self.tasks.items()},
            "links": None
            if self.links is None
            else {str(link_id): chg.to_dict() for link_id, chg in self.links.items()},
            "returnData": self.return_data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FlowChange:
        tasks = data.get("tasks")
        links = data.get("links")
        return cls(
            new_flow=bool(data.get("newFlow", False)),
            flow_uri=data.get("flowURI") or "",
            subflow_id=data.get("subflowId") or 0,
            task_id=data.get("taskId") or "",
            status=data.get("status") or 0,
            attrs=data.get("attrs"),
            tasks=None
            if tasks is None
            else {task_id: TaskChange.from_dict(chg) for task_id, chg in tasks.items()},
            links=None
            if links is None
            else {int(link_id): LinkChange.from_dict(chg) for link_id, chg in links.items()},
            return_data=data.get("returnData"),
        )