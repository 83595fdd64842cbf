"""Process-wide registry of flow models."""

from __future__ import annotations

import threading

from flowkit.flowmodel import FlowModel
from flowkit.validators import register_model_validator

_lock = threading.RLock()
_models: dict[str, FlowModel] = {}
_default: FlowModel | None = None


class ModelNotFoundError(LookupError):
    """Raised when no model is registered under the requested name."""


def register(flow_model: FlowModel) -> None:
    """Register ``flow_model`` under its name; names must be unique."""
    if flow_model is None:
        raise ValueError("model cannot be None")
    with _lock:
        model_id = flow_model.name
        if model_id in _models:
            raise ValueError(f"model {model_id} already registered")
        _models[model_id] = flow_model
        register_model_validator(model_id, flow_model)


def registered() -> list[FlowModel]:
    """Return all registered models."""
    with _lock:
        return list(_models.values())


def get(model_id: str) -> FlowModel:
    """Return the model registered as ``model_id``."""
    with _lock:
        try:
            return _models[model_id]
        except KeyError:
            raise ModelNotFoundError("model not found") from None


def register_default(flow_model: FlowModel) -> None:
    """Make ``flow_model`` the default, registering it if its name is free."""
    global _default
    if flow_model is None:
        raise ValueError("model cannot be None")
    with _lock:
        _models.setdefault(flow_model.name, flow_model)
        _default = flow_model
        register_model_validator("", flow_model)


def default() -> FlowModel | None:
    """Return the default model, or None if none was set."""
    return _default


def _clear() -> None:
    global _default
    with _lock:
        _models.clear()
        _default = None