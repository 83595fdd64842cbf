"""The do-while task behaviour: repeats a task while a condition holds.

The task's ``loop_config`` may carry ``condition``, a callable taking the
task context, and ``delay`` in milliseconds. The working data
``"iteration"`` holds a :class:`DoWhile` whose ``index`` counts the runs.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from flowkit.behavior import EvalResult, TaskContext
from flowkit.simple.retry import eval_activity
from flowkit.simple.task import BasicTaskBehavior
from flowkit.status import TaskStatus

ITERATION_KEY = "iteration"


@dataclass
class DoWhile:
    """Number of completed runs of a do-while task."""

    index: int = 0


def _init_index(ctx: TaskContext) -> None:
    try:
        current = ctx.get_working_data(ITERATION_KEY)
    except KeyError:
        current = DoWhile(index=0)
    ctx.set_working_data(ITERATION_KEY, current)


def _update_index(ctx: TaskContext) -> None:
    try:
        current = ctx.get_working_data(ITERATION_KEY)
    except KeyError:
        current = DoWhile(index=1)
    else:
        current.index += 1
    ctx.set_working_data(ITERATION_KEY, current)


class DoWhileTaskBehavior(BasicTaskBehavior):
    """Runs a task, then runs it again for as long as its condition is true."""

    def eval(self, ctx: TaskContext) -> EvalResult:
        if ctx.status == TaskStatus.SKIPPED:
            return EvalResult.DONE

        task = ctx.task
        ctx.flow_logger.debug("Eval doWhile Task '%s'", task.id)

        _init_index(ctx)
        try:
            done = eval_activity(ctx)
        except Exception as err:
            ctx.flow_logger.error("Error evaluating activity '%s' - %s", task.id, err)
            ctx.status = TaskStatus.FAILED
            raise

        if not done:
            ctx.status = TaskStatus.WAITING
            return EvalResult.WAIT

        try:
            return self._check_condition(ctx)
        finally:
            _update_index(ctx)

    def post_eval(self, ctx: TaskContext) -> EvalResult:
        task = ctx.task
        ctx.flow_logger.debug("PostEval doWhile Task '%s'", task.id)

        _init_index(ctx)
        try:
            ctx.post_eval_activity()
        except Exception as err:
            ctx.flow_logger.error("Error post evaluating activity '%s' - %s", task.id, err)
            ctx.status = TaskStatus.FAILED
            raise
        ctx.status = TaskStatus.DONE

        try:
            return self._check_condition(ctx)
        finally:
            _update_index(ctx)

    def _check_condition(self, ctx: TaskContext) -> EvalResult:
        loop_config = getattr(ctx.task, "loop_config", None)
        condition = getattr(loop_config, "condition", None)
        if loop_config is None or condition is None:
            return EvalResult.DONE
        return self._evaluate_condition(ctx, loop_config, condition)

    def _evaluate_condition(
        self, ctx: TaskContext, loop_config: Any, condition: Callable[[TaskContext], Any]
    ) -> EvalResult:
        task_id = ctx.task.id
        logger = ctx.flow_logger
        if condition(ctx):
            delay = int(getattr(loop_config, "delay", 0) or 0)
            if delay > 0:
                logger.info(
                    "Dowhile Task[%s] execution delaying for %d milliseconds...", task_id, delay
                )
                time.sleep(delay / 1000.0)
            logger.info("Task[%s] repeating as doWhile condition evaluated to true", task_id)
            return EvalResult.REPEAT
        logger.info("Task[%s] doWhile condition evaluated to false", task_id)
        return EvalResult.DONE