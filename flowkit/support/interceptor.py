"""Interceptors that override the runtime data of tasks in a flow instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TaskInterceptor:
    """Overrides for one task: its inputs, outputs, and whether to skip it."""

    id: str = ""
    skip: bool = False
    inputs: dict[str, Any] | None = None
    outputs: dict[str, Any] | None = None


@dataclass
class Interceptor:
    """A set of task interceptors, looked up by task id."""

    task_interceptors: list[TaskInterceptor] = field(default_factory=list)
    _by_id: dict[str, TaskInterceptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._by_id = {ti.id: ti for ti in self.task_interceptors}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Interceptor:
        """Build an interceptor from its JSON form ``{"tasks": [...]}``."""
        return cls(
            task_interceptors=[
                TaskInterceptor(
                    id=item.get("id", ""),
                    skip=bool(item.get("skip", False)),
                    inputs=item.get("inputs"),
                    outputs=item.get("outputs"),
                )
                for item in data.get("tasks") or []
            ]
        )

    def get_task_interceptor(self, task_id: str) -> TaskInterceptor | None:
        """Return the interceptor for ``task_id``, or None."""
        return self._by_id.get(task_id)