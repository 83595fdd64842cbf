"""The simple flow model and its behaviours."""

from __future__ import annotations

from flowkit.flowmodel import FlowModel
from flowkit.simple.dowhile import DoWhileTaskBehavior
from flowkit.simple.flow import SimpleFlowBehavior
from flowkit.simple.iterator import IteratorTaskBehavior
from flowkit.simple.task import BasicTaskBehavior

MODEL_NAME = "flogo-simple"


def new_model() -> FlowModel:
    """Return a new simple flow model with its basic, iterator and doWhile tasks."""
    model = FlowModel(MODEL_NAME)
    model.register_flow_behavior(SimpleFlowBehavior())
    model.register_default_task_behavior("basic", BasicTaskBehavior())
    model.register_task_behavior("iterator", IteratorTaskBehavior())
    model.register_task_behavior("doWhile", DoWhileTaskBehavior())
    return model