import json

import pytest

from flowkit.state.change import ChangeType, FlowChange, LinkChange, QueueChange, TaskChange


def test_change_type_codes_follow_declaration_order():
    assert [ChangeType(code) for code in range(3)] == [
        ChangeType.ADD,
        ChangeType.UPDATE,
        ChangeType.DELETE,
    ]


def test_flow_change_round_trips_through_json():
    original = FlowChange(
        new_flow=True,
        flow_uri="res://flow:demo",
        status=100,
        attrs={"input": "value"},
        tasks={"t1": TaskChange(status=10, input={"a": 1})},
        links={3: LinkChange(change_type=ChangeType.UPDATE, status=2, from_task="t1", to_task="t2")},
    )
    restored = FlowChange.from_dict(json.loads(json.dumps(original.to_dict())))
    assert restored == original


def test_flow_change_uses_wire_key_names():
    data = FlowChange(flow_uri="x").to_dict()
    assert set(data) == {
        "newFlow",
        "flowURI",
        "subflowId",
        "taskId",
        "status",
        "attrs",
        "tasks",
        "links",
        "returnData",
    }


def test_queue_change_round_trip():
    original = QueueChange(change_type=ChangeType.DELETE, subflow_id=2, task_id="t9")
    assert QueueChange.from_dict(original.to_dict()) == original
    assert original.to_dict()["change"] == int(ChangeType.DELETE)


def test_link_change_keys():
    data = LinkChange(from_task="a", to_task="b").to_dict()
    assert data["from"] == "a"
    assert data["to"] == "b"


def test_missing_change_defaults_to_add():
    assert TaskChange.from_dict({"status": 5}).change_type is ChangeType.ADD


def test_unknown_change_type_is_rejected():
    with pytest.raises(ValueError):
        QueueChange.from_dict({"change": 42})