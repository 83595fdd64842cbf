"""The basic task behaviour of the simple flow model.

Tasks are expected to expose ``id``; links expose ``type`` (a
:class:`~flowkit.behavior.LinkType`), ``to_task``, ``from_task`` and
``label``.
"""

from __future__ import annotations

import logging
from typing import Any

from flowkit.behavior import (
    EnterResult,
    EvalResult,
    LinkInstance,
    LinkType,
    TaskBehavior,
    TaskContext,
    TaskEntry,
)
from flowkit.simple.retry import eval_activity
from flowkit.status import LinkStatus, TaskStatus

PROPAGATE_SKIP = True

# Enter codes: 0 dependency, 1 expression branch, 2 otherwise branch,
# 3 label branch, 4 skip.
_CODE_DEFAULT = 0
_CODE_EXPRESSION = 1
_CODE_OTHERWISE = 2
_CODE_LABEL = 3
_CODE_SKIP = 4


def _not_evaluated(status: Any) -> bool:
    return status is None or int(status) < LinkStatus.FALSE


class BasicTaskBehavior(TaskBehavior):
    """Runs a task once its incoming links are settled and follows its links."""

    def enter(self, ctx: TaskContext) -> EnterResult:
        logger = ctx.flow_logger
        task = ctx.task
        logger.debug("Enter Task '%s'", task.id)
        ctx.status = TaskStatus.ENTERED

        link_insts = list(ctx.get_from_link_instances())
        ready = True
        skipped = False

        if link_insts:
            skipped = True
            logger.debug("Task '%s' has %d incoming Links", task.id, len(link_insts))
            for link_inst in link_insts:
                logger.debug(
                    "Task '%s': Link from Task '%s' has status '%s'",
                    task.id,
                    getattr(link_inst.link.from_task, "id", None),
                    link_status(link_inst),
                )
                if _not_evaluated(link_inst.status):
                    ready = False
                    break
                if link_inst.status == LinkStatus.TRUE:
                    skipped = False

        if not ready:
            logger.debug("Task '%s' Not Ready", task.id)
            return EnterResult.NOT_READY

        if skipped:
            ctx.status = TaskStatus.SKIPPED
            return EnterResult.SKIP

        logger.debug("Task '%s' Ready", task.id)
        ctx.status = TaskStatus.READY
        return EnterResult.EVAL

    def eval(self, ctx: TaskContext) -> EvalResult:
        if ctx.status == TaskStatus.SKIPPED:
            return EvalResult.SKIP

        task = ctx.task
        ctx.flow_logger.debug("Eval Task '%s'", task.id)
        try:
            done = eval_activity(ctx)
        except Exception as err:
            ctx.flow_logger.error("Error evaluating activity '%s' - %s", task.id, err)
            raise
        return EvalResult.DONE if done else EvalResult.WAIT

    def post_eval(self, ctx: TaskContext) -> EvalResult:
        task = ctx.task
        ctx.flow_logger.debug("PostEval Task '%s'", task.id)
        try:
            ctx.post_eval_activity()
        except Exception as err:
            ctx.flow_logger.error("Error post evaluating activity '%s' - %s", task.id, err)
            raise
        return EvalResult.DONE

    def done(self, ctx: TaskContext) -> tuple[bool, list[TaskEntry] | None]:
        logger = ctx.flow_logger
        task = ctx.task
        link_insts = list(ctx.get_to_link_instances())
        ctx.status = TaskStatus.DONE

        logger.debug("Task '%s' is done", task.id)
        logger.debug("Task '%s' has %d outgoing links", task.id, len(link_insts))

        if not link_insts:
            logger.debug("Notifying flow that end task '%s' is done", task.id)
            return True, None

        entries: list[TaskEntry] = []
        expr_link_followed = False
        has_expr_link = False
        otherwise: tuple[LinkInstance, TaskEntry] | None = None

        for link_inst in link_insts:
            link = link_inst.link
            # With skip propagation every link is followed; start them all as false.
            link_inst.status = LinkStatus.FALSE
            entry = TaskEntry(task=link.to_task, enter_code=_CODE_SKIP)
            entries.append(entry)

            if link.type == LinkType.ERROR:
                continue
            if link.type == LinkType.EXPR_OTHERWISE:
                otherwise = (link_inst, entry)
                continue
            if link.type == LinkType.DEPENDENCY:
                link_inst.status = LinkStatus.TRUE
                entry.enter_code = _CODE_DEFAULT
                continue
            if link.type == LinkType.LABEL:
                link_inst.status = LinkStatus.TRUE
                entry.enter_code = _CODE_LABEL
                continue
            if link.type == LinkType.EXPRESSION:
                has_expr_link = True
                to_id = link.to_task.id
                logger.debug(
                    "Task '%s': Evaluating Outgoing Expression Link to Task '%s'", task.id, to_id
                )
                try:
                    follow = ctx.eval_link(link)
                except Exception as err:
                    label = getattr(link, "label", "") or ""
                    if label:
                        message = (
                            f"error executing link [{task.id} -> {to_id}] "
                            f"with label [{label}]: {err}"
                        )
                    else:
                        message = f"error executing link [{task.id} -> {to_id}]: {err}"
                    raise RuntimeError(message) from err
                if follow:
                    expr_link_followed = True
                    link_inst.status = LinkStatus.TRUE
                    entry.enter_code = _CODE_EXPRESSION
                    logger.debug(
                        "Task '%s': Following Expression Link to task '%s'", task.id, to_id
                    )

        if otherwise is not None and has_expr_link and not expr_link_followed:
            otherwise_inst, otherwise_entry = otherwise
            otherwise_inst.status = LinkStatus.TRUE
            otherwise_entry.enter_code = _CODE_OTHERWISE
            logger.debug(
                "Task '%s': Following Otherwise Link to task '%s'",
                task.id,
                otherwise_inst.link.to_task.id,
            )

        sort_task_entries(entries)
        return False, entries

    def skip(self, ctx: TaskContext) -> tuple[bool, list[TaskEntry] | None, bool]:
        logger = ctx.flow_logger
        task = ctx.task
        link_insts = list(ctx.get_to_link_instances())
        ctx.status = TaskStatus.SKIPPED
        logger.debug("Task '%s' was skipped", task.id)

        if not link_insts:
            logger.debug("Notifying flow that end task '%s' is skipped", task.id)
            return True, None, PROPAGATE_SKIP

        logger.debug("Task '%s' has %d outgoing links", task.id, len(link_insts))
        entries = []
        for link_inst in link_insts:
            link_inst.status = LinkStatus.SKIPPED
            entries.append(TaskEntry(task=link_inst.link.to_task, enter_code=_CODE_SKIP))
        return False, entries, PROPAGATE_SKIP

    def error(
        self, ctx: TaskContext, err: BaseException
    ) -> tuple[bool, list[TaskEntry] | None]:
        link_insts = list(ctx.get_to_link_instances())
        if not any(inst.link.type == LinkType.ERROR for inst in link_insts):
            return False, None

        entries = []
        for link_inst in link_insts:
            if link_inst.link.type == LinkType.ERROR:
                link_inst.status = LinkStatus.TRUE
                code = _CODE_DEFAULT
            else:
                link_inst.status = LinkStatus.FALSE
                code = _CODE_SKIP
            entries.append(TaskEntry(task=link_inst.link.to_task, enter_code=code))

        sort_task_entries(entries)
        return True, entries


def link_status(inst: LinkInstance) -> str:
    """Return a readable name for the status of a link instance."""
    names = {
        LinkStatus.FALSE: "false",
        LinkStatus.TRUE: "true",
        LinkStatus.SKIPPED: "skipped",
    }
    return names.get(inst.status, "unknown")


def sort_task_entries(entries: list[TaskEntry]) -> None:
    """Sort entries in place by enter code, keeping the order of equal ones."""
    entries.sort(key=lambda entry: entry.enter_code)


logging.getLogger(__name__).addHandler(logging.NullHandler())