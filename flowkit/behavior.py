"""Execution behaviours of flows and tasks, and the contexts they run in."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol, Sequence, runtime_checkable

from flowkit.status import FlowStatus, LinkStatus, TaskStatus


@dataclass
class TaskEntry:
    """A task to enter together with the code it is entered with."""

    task: Any = None
    enter_code: int = 0


class EvalResult(IntEnum):
    """Result of evaluating a task."""

    FAIL = 0
    DONE = 1
    REPEAT = 2
    WAIT = 3
    SKIP = 4


class EnterResult(IntEnum):
    """Result of entering a task."""

    NOT_READY = 0
    EVAL = 1
    SKIP = 2


class LinkType(IntEnum):
    """Kind of link between two tasks."""

    DEPENDENCY = 0
    EXPRESSION = 1
    LABEL = 2
    ERROR = 3
    EXPR_OTHERWISE = 4


@runtime_checkable
class LinkInstance(Protocol):
    """Runtime instance of a link."""

    @property
    def link(self) -> Any: ...

    status: LinkStatus


@runtime_checkable
class TaskInstance(Protocol):
    """Runtime instance of a task."""

    @property
    def task(self) -> Any: ...

    @property
    def status(self) -> TaskStatus: ...


@runtime_checkable
class FlowContext(Protocol):
    """Context handed to flow behaviours."""

    @property
    def flow_definition(self) -> Any: ...

    @property
    def task_instances(self) -> Sequence[TaskInstance]: ...

    @property
    def status(self) -> FlowStatus: ...

    @property
    def logger(self) -> logging.Logger: ...


@runtime_checkable
class TaskContext(Protocol):
    """Context handed to task behaviours.

    ``eval_activity`` and ``post_eval_activity`` return whether the activity
    is done and raise on failure. ``get_working_data`` raises ``KeyError``
    when the key was never set.
    """

    status: TaskStatus

    @property
    def task(self) -> Any: ...

    @property
    def flow_logger(self) -> logging.Logger: ...

    def get_from_link_instances(self) -> Sequence[LinkInstance]: ...

    def get_to_link_instances(self) -> Sequence[LinkInstance]: ...

    def eval_link(self, link: Any) -> bool: ...

    def eval_activity(self) -> bool: ...

    def post_eval_activity(self) -> bool: ...

    def get_setting(self, name: str) -> Any: ...

    def set_working_data(self, key: str, value: Any) -> None: ...

    def get_working_data(self, key: str) -> Any: ...


class FlowBehavior(ABC):
    """Execution behaviour of a flow."""

    @abstractmethod
    def start(self, ctx: FlowContext) -> tuple[bool, list[TaskEntry]]:
        """Return whether the flow can start and the tasks to enter."""

    @abstractmethod
    def start_error_handler(self, ctx: FlowContext) -> list[TaskEntry]:
        """Return the tasks the error handler starts with."""

    @abstractmethod
    def resume(self, ctx: FlowContext) -> bool:
        """Return whether the flow can resume."""

    @abstractmethod
    def task_done(self, ctx: FlowContext) -> bool:
        """Called when a terminal task is done; return whether the flow is done."""

    @abstractmethod
    def done(self, ctx: FlowContext) -> None:
        """Called when the flow is done."""


class TaskBehavior(ABC):
    """Execution behaviour of a task."""

    @abstractmethod
    def enter(self, ctx: TaskContext) -> EnterResult:
        """Decide whether the task is ready, to be skipped, or not ready."""

    @abstractmethod
    def eval(self, ctx: TaskContext) -> EvalResult:
        """Evaluate the task; raise to hand the error to the error handler."""

    @abstractmethod
    def post_eval(self, ctx: TaskContext) -> EvalResult:
        """Notify a waiting task; raise to hand the error to the error handler."""

    @abstractmethod
    def done(self, ctx: TaskContext) -> tuple[bool, list[TaskEntry] | None]:
        """Finish the task; return whether to notify the flow and the next tasks."""

    @abstractmethod
    def skip(self, ctx: TaskContext) -> tuple[bool, list[TaskEntry] | None, bool]:
        """Skip the task; return notify flag, next tasks and whether to propagate."""

    @abstractmethod
    def error(self, ctx: TaskContext, err: BaseException) -> tuple[bool, list[TaskEntry] | None]:
        """Handle an evaluation error; return whether it was handled and next tasks."""