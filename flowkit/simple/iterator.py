"""The iterator task behaviour: runs a task's activity once per item.

The task's ``loop_config`` carries ``iterate_on`` (a value, or a callable
resolved against the task context) and ``delay`` in milliseconds. While the
task runs, the working data ``"iteration"`` holds the current ``key``,
``value`` and ``index``.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from flowkit.behavior import EvalResult, TaskContext
from flowkit.simple.retry import eval_activity
from flowkit.simple.task import BasicTaskBehavior
from flowkit.status import TaskStatus

ITERATOR_KEY = "_iterator"
ITERATION_KEY = "iteration"


class LoopIterator(ABC):
    """Cursor over the items a task iterates on; starts before the first item."""

    def __init__(self) -> None:
        self._current = -1

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def _value_at(self, position: int) -> Any: ...

    @abstractmethod
    def advance(self) -> bool:
        """Move to the next item; return whether there is one."""

    @abstractmethod
    def has_next(self) -> bool:
        """Return whether the cursor has not yet run past the last item."""

    @property
    def index(self) -> int:
        return self._current

    @property
    def key(self) -> Any:
        return self._current

    @property
    def value(self) -> Any:
        if self._current < 0:
            raise IndexError("iterator has not been advanced")
        return self._value_at(self._current)


class ArrayIterator(LoopIterator):
    """Iterates over the items of a list."""

    def __init__(self, data: list[Any]) -> None:
        super().__init__()
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def _value_at(self, position: int) -> Any:
        return self._data[position]

    def advance(self) -> bool:
        """Move to the next item; return whether there is one."""
        self._current += 1
        return self._current < len(self._data)

    def has_next(self) -> bool:
        """Return whether the cursor has not yet run past the last item."""
        return self._current < len(self._data)


class IntIterator(LoopIterator):
    """Counts from 0 up to, not including, ``count``; key and value are the count."""

    def __init__(self, count: int) -> None:
        super().__init__()
        self._count = count

    def __len__(self) -> int:
        return max(self._count, 0)

    def has_next(self) -> bool:
        """Return whether the count has not yet been reached."""
        return self._current < self._count

    def advance(self) -> bool:
        """Move to the next number; return whether it is below the count."""
        self._current += 1
        return self._current < self._count

    def _value_at(self, position: int) -> Any:
        return position


class ObjectIterator(LoopIterator):
    """Iterates over the entries of a mapping; the key is the entry's key."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        super().__init__()
        self._data = data
        self._keys = list(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def key(self) -> Any:
        if 0 <= self._current < len(self._keys):
            return self._keys[self._current]
        return None

    def _value_at(self, position: int) -> Any:
        return self._data[self._keys[position]]

    def advance(self) -> bool:
        """Move to the next entry; return whether there is one."""
        self._current += 1
        return self._current < len(self._data)

    def has_next(self) -> bool:
        """Return whether the cursor has not yet run past the last entry."""
        return self._current < len(self._data)


class SequenceIterator(LoopIterator):
    """Iterates over any other sequence, such as a tuple or bytes."""

    def __init__(self, data: Sequence[Any]) -> None:
        super().__init__()
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def _value_at(self, position: int) -> Any:
        return self._data[position]

    def advance(self) -> bool:
        """Move to the next item; return whether there is one."""
        self._current += 1
        return self._current < len(self._data)

    def has_next(self) -> bool:
        """Return whether the cursor has not yet run past the last item."""
        return self._current < len(self._data)


def make_iterator(iterate_on: Any) -> LoopIterator:
    """Return the iterator suited to ``iterate_on``.

    Strings must hold an integer count; numbers are counts; mappings iterate
    their entries; lists and other sequences iterate their items.
    """
    if isinstance(iterate_on, bool):
        raise ValueError(f"'{iterate_on!r}' is not a valid iterate value")
    if isinstance(iterate_on, str):
        try:
            count = int(iterate_on.strip())
        except ValueError:
            raise ValueError(f"'{iterate_on}' is not a valid iterate value") from None
        return IntIterator(count)
    if isinstance(iterate_on, int):
        return IntIterator(iterate_on)
    if isinstance(iterate_on, float):
        return IntIterator(int(iterate_on))
    if isinstance(iterate_on, Mapping):
        return ObjectIterator(iterate_on)
    if isinstance(iterate_on, list):
        return ArrayIterator(iterate_on)
    if isinstance(iterate_on, Sequence) or isinstance(iterate_on, (bytes, bytearray)):
        return SequenceIterator(iterate_on)
    raise ValueError(f"'{iterate_on!r}' is not a valid iterate value")


def _delay_ms(ctx: TaskContext) -> int:
    loop_config = getattr(ctx.task, "loop_config", None)
    return int(getattr(loop_config, "delay", 0) or 0)


class IteratorTaskBehavior(BasicTaskBehavior):
    """Repeats a task once for every item of its ``iterate_on`` value."""

    def _start_iteration(self, ctx: TaskContext) -> tuple[LoopIterator, dict] | None:
        task = ctx.task
        loop_config = getattr(task, "loop_config", None)
        if loop_config is None:
            return None

        iterate_on = getattr(loop_config, "iterate_on", None)
        if callable(iterate_on):
            iterate_on = iterate_on(ctx)
        if iterate_on is None:
            return None

        try:
            itx = make_iterator(iterate_on)
        except ValueError as err:
            name = getattr(task, "name", None) or task.id
            message = f"iterator '{name}' not properly configured. {err}"
            ctx.flow_logger.error(message)
            raise ValueError(message) from None

        iteration = {"key": None, "value": None, "index": 0}
        ctx.set_working_data(ITERATOR_KEY, itx)
        ctx.set_working_data(ITERATION_KEY, iteration)
        return itx, iteration

    def eval(self, ctx: TaskContext) -> EvalResult:
        if ctx.status == TaskStatus.SKIPPED:
            return EvalResult.DONE

        logger = ctx.flow_logger
        task = ctx.task
        logger.debug("Eval Iterator Task '%s'", task.id)

        try:
            itx = ctx.get_working_data(ITERATOR_KEY)
        except KeyError:
            started = self._start_iteration(ctx)
            if started is None:
                return EvalResult.DONE
            itx, iteration = started
        else:
            try:
                iteration = ctx.get_working_data(ITERATION_KEY)
            except KeyError:
                iteration = {}

        if not itx.advance():
            return EvalResult.DONE

        logger.debug("Repeat:%s, Key:%r, Value:%r", True, itx.key, itx.value)
        if isinstance(iteration, dict):
            iteration["key"] = itx.key
            iteration["value"] = itx.value
            iteration["index"] = itx.index

        try:
            done = eval_activity(ctx)
        except Exception as err:
            logger.error("Error evaluating activity '%s' - %s", task.id, err)
            ctx.status = TaskStatus.FAILED
            raise

        delay = _delay_ms(ctx)
        if delay > 0:
            logger.info(
                "Iterate Task[%s] execution delaying for %d milliseconds...", task.id, delay
            )
            time.sleep(delay / 1000.0)

        if not done:
            ctx.status = TaskStatus.WAITING
            return EvalResult.WAIT
        return EvalResult.REPEAT

    def post_eval(self, ctx: TaskContext) -> EvalResult:
        task = ctx.task
        ctx.flow_logger.debug("PostEval Iterator Task '%s'", task.id)
        try:
            ctx.post_eval_activity()
        except Exception as err:
            ctx.flow_logger.error("Error post evaluating activity '%s' - %s", task.id, err)
            ctx.status = TaskStatus.FAILED
            raise
        ctx.status = TaskStatus.DONE

        itx = ctx.get_working_data(ITERATOR_KEY)
        return EvalResult.REPEAT if itx.has_next() else EvalResult.DONE