from flowkit.flowmodel import FlowModel


def test_name():
    assert FlowModel("my-model").name == "my-model"


def test_flow_behavior_registration():
    model = FlowModel("m")
    assert model.flow_behavior is None
    behaviour = object()
    model.register_flow_behavior(behaviour)
    assert model.flow_behavior is behaviour


def test_default_task_behavior_is_registered_under_its_type():
    model = FlowModel("m")
    basic = object()
    model.register_default_task_behavior("basic", basic)
    assert model.default_task_behavior is basic
    assert model.get_task_behavior("") is basic
    assert model.get_task_behavior("basic") is basic


def test_empty_type_needs_default():
    model = FlowModel("m")
    assert model.is_valid_task_type("") is False
    assert model.get_task_behavior("") is None
    model.register_default_task_behavior("basic", object())
    assert model.is_valid_task_type("") is True


def test_named_task_behaviours():
    model = FlowModel("m")
    iterator = object()
    model.register_task_behavior("iterator", iterator)
    assert model.is_valid_task_type("iterator") is True
    assert model.get_task_behavior("iterator") is iterator
    assert model.is_valid_task_type("doWhile") is False
    assert model.get_task_behavior("doWhile") is None