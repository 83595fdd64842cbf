"""Retrying task activities that fail with a retriable error.

A task is retried when its activity raises an :class:`ActivityError` marked
retriable and the task definition carries a ``retry_on_err_config`` with
``count`` and ``interval`` (milliseconds). Either value may be a callable that
is resolved against the task context.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from flowkit.behavior import TaskContext

RETRY_ON_ERROR_ATTR = "_retryOnErrorAttr"


class ActivityError(Exception):
    """Error raised by an activity; ``retriable`` marks it as worth retrying."""

    def __init__(
        self,
        message: str = "",
        *,
        retriable: bool = False,
        code: str | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.retriable = retriable
        self.code = code
        self.data = data


@dataclass
class RetryData:
    """Retries left for a task and the pause between them in milliseconds."""

    count: int = 0
    interval: int = 0


def _resolve(value: Any, ctx: TaskContext) -> int:
    if callable(value):
        value = value(ctx)
    return int(value or 0)


def get_retry_data(ctx: TaskContext) -> RetryData:
    """Return the retry data of the task, building it on the first attempt."""
    try:
        existing = ctx.get_working_data(RETRY_ON_ERROR_ATTR)
    except KeyError:
        cfg = ctx.task.retry_on_err_config
        retry_data = RetryData(
            count=_resolve(getattr(cfg, "count", 0), ctx),
            interval=_resolve(getattr(cfg, "interval", 0), ctx),
        )
        ctx.set_working_data(RETRY_ON_ERROR_ATTR, retry_data)
        return retry_data

    if not isinstance(existing, RetryData):
        raise TypeError("error getting retry data")
    return existing


def retry_eval(ctx: TaskContext, retry_data: RetryData | None) -> bool:
    """Wait the configured interval, spend one retry and evaluate again."""
    if retry_data is None:
        raise ValueError("Retry Data not specified.")

    logger = ctx.flow_logger
    task_id = ctx.task.id
    logger.info("Task[%s] retrying on error. Retries left (%d)...", task_id, retry_data.count)

    if retry_data.interval > 0:
        logger.debug("Task[%s] sleeping for %d milliseconds...", task_id, retry_data.interval)
        time.sleep(retry_data.interval / 1000.0)

    retry_data.count -= 1
    ctx.set_working_data(RETRY_ON_ERROR_ATTR, retry_data)
    return eval_activity(ctx)


def eval_activity(ctx: TaskContext) -> bool:
    """Evaluate the task's activity, retrying retriable errors as configured."""
    try:
        return ctx.eval_activity()
    except ActivityError as err:
        if not err.retriable or getattr(ctx.task, "retry_on_err_config", None) is None:
            raise
        retry_data = get_retry_data(ctx)
        if retry_data.count <= 0:
            raise
    return retry_eval(ctx, retry_data)