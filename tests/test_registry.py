import pytest

from flowkit import registry
from flowkit.flowmodel import FlowModel
from flowkit.validators import is_valid_task_type


@pytest.fixture(autouse=True)
def _empty_registry():
    registry._clear()
    yield
    registry._clear()


def test_registry():
    flow_model = FlowModel("test")
    registry.register(flow_model)
    assert len(registry.registered()) == 1
    assert registry.get("test") is flow_model


def test_duplicate_rejected():
    registry.register(FlowModel("dup"))
    with pytest.raises(ValueError):
        registry.register(FlowModel("dup"))


def test_none_rejected():
    with pytest.raises(ValueError):
        registry.register(None)
    with pytest.raises(ValueError):
        registry.register_default(None)


def test_missing_model():
    with pytest.raises(ModelNotFoundErrorAlias):
        registry.get("nope")


ModelNotFoundErrorAlias = registry.ModelNotFoundError


def test_register_registers_validator():
    model = FlowModel("with-validator")
    model.register_task_behavior("custom", object())
    registry.register(model)
    assert is_valid_task_type("with-validator", "custom") is True


def test_register_default_keeps_existing_model_of_same_name():
    first = FlowModel("shared")
    second = FlowModel("shared")
    registry.register(first)
    registry.register_default(second)
    assert registry.get("shared") is first
    assert registry.default() is second


def test_register_default_adds_new_model_and_validator():
    assert registry.default() is None
    model = FlowModel("fresh")
    model.register_default_task_behavior("basic", object())
    registry.register_default(model)
    assert registry.get("fresh") is model
    assert is_valid_task_type("", "") is True
    assert is_valid_task_type("", "basic") is True