import pytest

from flowkit.status import FlowStatus, LinkStatus, TaskStatus


def test_flow_status_ordering_marks_terminal_states():
    assert FlowStatus(0) < FlowStatus(100) < FlowStatus(500)
    terminal = [s for s in FlowStatus if s >= FlowStatus(500)]
    assert terminal == [FlowStatus.COMPLETED, FlowStatus.CANCELLED, FlowStatus.FAILED]


def test_task_statuses_below_done_are_unfinished():
    unfinished = [s for s in TaskStatus if s < TaskStatus(40)]
    assert unfinished == [
        TaskStatus.NOT_STARTED,
        TaskStatus.ENTERED,
        TaskStatus.READY,
        TaskStatus.WAITING,
    ]


def test_link_status_ordering():
    assert LinkStatus(1) < LinkStatus(2) < LinkStatus(3)
    assert LinkStatus(1) is LinkStatus.FALSE
    assert LinkStatus(3) is LinkStatus.SKIPPED


def test_lookup_by_value():
    assert FlowStatus(700) is FlowStatus.FAILED
    assert TaskStatus(40) is TaskStatus.DONE
    assert LinkStatus(2) is LinkStatus.TRUE


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        FlowStatus(42)
    with pytest.raises(ValueError):
        LinkStatus(0)