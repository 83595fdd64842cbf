"""Flow models: a named set of flow and task behaviours."""

from __future__ import annotations

from flowkit.behavior import FlowBehavior, TaskBehavior


class FlowModel:
    """The execution model of a flow: its flow behaviour and task behaviours."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._flow_behavior: FlowBehavior | None = None
        self._default_task_behavior: TaskBehavior | None = None
        self._task_behaviors: dict[str, TaskBehavior] = {}

    def __repr__(self) -> str:
        return f"FlowModel({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def flow_behavior(self) -> FlowBehavior | None:
        return self._flow_behavior

    @property
    def default_task_behavior(self) -> TaskBehavior | None:
        return self._default_task_behavior

    def register_flow_behavior(self, flow_behavior: FlowBehavior) -> None:
        """Set the flow behaviour of the model."""
        self._flow_behavior = flow_behavior

    def register_default_task_behavior(self, task_type: str, task_behavior: TaskBehavior) -> None:
        """Register a task behaviour under ``task_type`` and make it the default."""
        self.register_task_behavior(task_type, task_behavior)
        self._default_task_behavior = task_behavior

    def register_task_behavior(self, task_type: str, task_behavior: TaskBehavior) -> None:
        """Register a task behaviour under ``task_type``."""
        self._task_behaviors[task_type] = task_behavior

    def is_valid_task_type(self, task_type: str) -> bool:
        """Return whether the model has a behaviour for ``task_type``.

        The empty type is valid when a default behaviour is set.
        """
        if task_type == "" and self._default_task_behavior is not None:
            return True
        return task_type in self._task_behaviors

    def get_task_behavior(self, task_type: str) -> TaskBehavior | None:
        """Return the behaviour for ``task_type``; the empty type gives the default."""
        if task_type == "":
            return self._default_task_behavior
        return self._task_behaviors.get(task_type)