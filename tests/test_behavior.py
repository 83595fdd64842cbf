import logging

import pytest

from flowkit.behavior import (
    EnterResult,
    EvalResult,
    FlowBehavior,
    LinkInstance,
    LinkType,
    TaskBehavior,
    TaskEntry,
)
from flowkit.status import LinkStatus, TaskStatus


class _Link:
    def __init__(self, link):
        self._link = link
        self.status = LinkStatus.FALSE

    @property
    def link(self):
        return self._link


class _Task:
    def __init__(self, task_id, from_links=()):
        self.id = task_id
        self.from_links = list(from_links)


class _Definition:
    def __init__(self, tasks):
        self.tasks = tasks


class _FlowCtx:
    def __init__(self, tasks):
        self.flow_definition = _Definition(tasks)
        self.task_instances = []
        self.status = None
        self.logger = logging.getLogger("test")


class _LeadingFlow(FlowBehavior):
    def start(self, ctx):
        entries = [TaskEntry(t) for t in ctx.flow_definition.tasks if not t.from_links]
        return True, entries

    def start_error_handler(self, ctx):
        return []

    def resume(self, ctx):
        return True

    def task_done(self, ctx):
        return all(t.status >= TaskStatus.DONE for t in ctx.task_instances)

    def done(self, ctx):
        ctx.logger.debug("done")


def test_task_entry_defaults_to_code_zero():
    entry = TaskEntry("t1")
    assert entry.task == "t1"
    assert entry.enter_code == 0


def test_task_entries_sort_stably_by_code():
    entries = [TaskEntry("a", 3), TaskEntry("b", 0), TaskEntry("c", 0)]
    ordered = sorted(entries, key=lambda e: e.enter_code)
    assert [e.task for e in ordered] == ["b", "c", "a"]


def test_eval_result_order_follows_declaration():
    assert EvalResult(0) is EvalResult.FAIL
    assert list(EvalResult) == sorted(EvalResult)
    assert EnterResult(0) < EnterResult(1) < EnterResult(2)
    assert EnterResult(2) is EnterResult.SKIP


def test_link_types_are_distinct():
    assert [LinkType(t.value) for t in LinkType] == list(LinkType)
    assert len({t.value for t in LinkType}) == len(LinkType)


def test_behaviours_are_abstract():
    with pytest.raises(TypeError):
        FlowBehavior()
    with pytest.raises(TypeError):
        TaskBehavior()


def test_concrete_flow_behaviour_starts_leading_tasks():
    first = _Task("first")
    second = _Task("second", from_links=["l1"])
    ctx = _FlowCtx([first, second])
    started, entries = _LeadingFlow().start(ctx)
    expected = TaskEntry(first)
    assert started is True
    assert [(e.task, e.enter_code) for e in entries] == [(expected.task, expected.enter_code)]
    assert _LeadingFlow().task_done(ctx) is True


def test_link_instance_protocol():
    link = _Link("l")
    status = LinkStatus(2)
    link.status = status
    assert status is LinkStatus.TRUE
    assert LinkStatus.FALSE < status < LinkStatus.SKIPPED
    assert isinstance(link, LinkInstance)
    assert not isinstance(object(), LinkInstance)