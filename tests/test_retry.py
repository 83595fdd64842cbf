import logging
from types import SimpleNamespace

import pytest

from flowkit.simple.retry import (
    RETRY_ON_ERROR_ATTR,
    ActivityError,
    RetryData,
    eval_activity,
    get_retry_data,
    retry_eval,
)
from flowkit.status import TaskStatus


class FakeTaskContext:
    def __init__(self, results=(True,), retry_cfg=None):
        self.status = TaskStatus.NOT_STARTED
        self.task = SimpleNamespace(id="t1", retry_on_err_config=retry_cfg)
        self.flow_logger = logging.getLogger("flowkit.test.retry")
        self._results = list(results)
        self.calls = 0
        self.data = {}

    def eval_activity(self):
        self.calls += 1
        result = self._results[min(self.calls, len(self._results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    def post_eval_activity(self):
        return True

    def get_working_data(self, key):
        return self.data[key]

    def set_working_data(self, key, value):
        self.data[key] = value

    def get_from_link_instances(self):
        return []

    def get_to_link_instances(self):
        return []

    def eval_link(self, link):
        return True

    def get_setting(self, name):
        return "test"


def test_retry_eval_without_data_raises():
    ctx = FakeTaskContext()
    with pytest.raises(ValueError):
        retry_eval(ctx, None)


def test_retry_eval_spends_one_retry():
    ctx = FakeTaskContext()
    retry_data = RetryData(interval=1, count=1)
    assert retry_eval(ctx, retry_data) is True
    assert retry_data.count == 0
    assert ctx.data[RETRY_ON_ERROR_ATTR] is retry_data


def test_eval_activity_success():
    ctx = FakeTaskContext(results=(False,))
    assert eval_activity(ctx) is False
    assert ctx.calls == 1


def test_eval_activity_retries_until_success():
    err = ActivityError("boom", retriable=True)
    ctx = FakeTaskContext(results=(err, True), retry_cfg=SimpleNamespace(count=2, interval=0))
    assert eval_activity(ctx) is True
    assert ctx.calls == 2
    assert ctx.data[RETRY_ON_ERROR_ATTR].count == 1


def test_eval_activity_exhausts_retries():
    err = ActivityError("boom", retriable=True)
    ctx = FakeTaskContext(results=(err,), retry_cfg=SimpleNamespace(count=2, interval=0))
    with pytest.raises(ActivityError):
        eval_activity(ctx)
    assert ctx.calls == 3
    assert ctx.data[RETRY_ON_ERROR_ATTR].count == 0


def test_non_retriable_error_is_not_retried():
    err = ActivityError("boom", retriable=False)
    ctx = FakeTaskContext(results=(err, True), retry_cfg=SimpleNamespace(count=2, interval=0))
    with pytest.raises(ActivityError):
        eval_activity(ctx)
    assert ctx.calls == 1


def test_retriable_error_without_config_is_raised():
    err = ActivityError("boom", retriable=True)
    ctx = FakeTaskContext(results=(err, True))
    with pytest.raises(ActivityError):
        eval_activity(ctx)
    assert ctx.calls == 1


def test_other_errors_propagate():
    ctx = FakeTaskContext(results=(RuntimeError("x"),), retry_cfg=SimpleNamespace(count=2, interval=0))
    with pytest.raises(RuntimeError):
        eval_activity(ctx)
    assert ctx.calls == 1


def test_get_retry_data_resolves_callables_once():
    cfg = SimpleNamespace(count=lambda ctx: 3, interval=lambda ctx: 5)
    ctx = FakeTaskContext(retry_cfg=cfg)
    first = get_retry_data(ctx)
    assert first == RetryData(count=3, interval=5)
    first.count = 1
    assert get_retry_data(ctx) is first


def test_get_retry_data_rejects_foreign_data():
    ctx = FakeTaskContext(retry_cfg=SimpleNamespace(count=1, interval=0))
    ctx.data[RETRY_ON_ERROR_ATTR] = "test"
    with pytest.raises(TypeError):
        get_retry_data(ctx)