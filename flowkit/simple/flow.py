"""The flow behaviour of the simple flow model.

Flow definitions are expected to expose ``tasks`` and ``error_handler``
(itself exposing ``tasks``); tasks expose ``id`` and ``from_links``.
"""

from __future__ import annotations

from typing import Any, Iterable

from flowkit.behavior import FlowBehavior, FlowContext, TaskEntry
from flowkit.status import TaskStatus


class SimpleFlowBehavior(FlowBehavior):
    """Starts with the leading tasks and finishes when every task is settled."""

    def start(self, ctx: FlowContext) -> tuple[bool, list[TaskEntry]]:
        return True, get_flow_task_entries(ctx.flow_definition.tasks, True)

    def start_error_handler(self, ctx: FlowContext) -> list[TaskEntry]:
        return get_flow_task_entries(ctx.flow_definition.error_handler.tasks, True)

    def resume(self, ctx: FlowContext) -> bool:
        return True

    def task_done(self, ctx: FlowContext) -> bool:
        logger = ctx.logger
        logger.debug("Checking if all tasks done or skipped")
        for task_inst in ctx.task_instances:
            if task_inst.status < TaskStatus.DONE:
                logger.debug("Task '%s' not done or skipped", task_inst.task.id)
                return False
        logger.debug("All tasks done or skipped")
        return True

    def done(self, ctx: FlowContext) -> None:
        ctx.logger.debug("Flow Done")


def get_flow_task_entries(tasks: Iterable[Any], leading_only: bool) -> list[TaskEntry]:
    """Return entries for the tasks, only those without incoming links if ``leading_only``."""
    return [
        TaskEntry(task=task, enter_code=0)
        for task in tasks
        if not leading_only or not task.from_links
    ]