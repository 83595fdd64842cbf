from flowkit.validators import (
    get_model_validator,
    is_valid_task_type,
    register_model_validator,
)


class _Validator:
    def __init__(self, types):
        self.types = set(types)

    def is_valid_task_type(self, task_type):
        return task_type in self.types


def test_registered_validator_is_returned():
    validator = _Validator(["basic"])
    register_model_validator("validators-model-a", validator)
    assert get_model_validator("validators-model-a") is validator


def test_missing_validator():
    assert get_model_validator("validators-missing") is None
    assert is_valid_task_type("validators-missing", "basic") is False


def test_validation_delegates_to_validator():
    register_model_validator("validators-model-b", _Validator(["basic", "iterator"]))
    assert is_valid_task_type("validators-model-b", "iterator") is True
    assert is_valid_task_type("validators-model-b", "doWhile") is False


def test_registration_replaces_previous():
    register_model_validator("validators-model-c", _Validator(["x"]))
    register_model_validator("validators-model-c", _Validator(["y"]))
    assert is_valid_task_type("validators-model-c", "y") is True
    assert is_valid_task_type("validators-model-c", "x") is False