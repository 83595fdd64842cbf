"""Registry of validators that know which task types a model supports."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelValidator(Protocol):
    """Anything that can tell whether a task type is valid."""

    def is_valid_task_type(self, task_type: str) -> bool: ...


_validators: dict[str, ModelValidator] = {}


def register_model_validator(model_name: str, validator: ModelValidator) -> None:
    """Register ``validator`` under ``model_name``, replacing any previous one."""
    _validators[model_name] = validator


def get_model_validator(model_name: str) -> ModelValidator | None:
    """Return the validator for ``model_name``, or None."""
    return _validators.get(model_name)


def is_valid_task_type(model_name: str, task_type: str) -> bool:
    """Return whether ``task_type`` is valid for the named model."""
    validator = _validators.get(model_name)
    if validator is None:
        return False
    return validator.is_valid_task_type(task_type)