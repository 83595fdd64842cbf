# flowkit

Building blocks for running process flows. The package provides:

- a pluggable execution model made of flow and task behaviors;
- a simple default model with basic, iterator and do-while tasks;
- tools for recording flow state and rebuilding it.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `flowkit.status` holds `FlowStatus`, `TaskStatus` and `LinkStatus`, which are integer enums.
- `flowkit.behavior` holds:
  - the abstract `FlowBehavior` and `TaskBehavior` classes;
  - the `FlowContext`, `TaskContext`, `TaskInstance` and `LinkInstance` protocols that they work on;
  - `TaskEntry`, `EvalResult`, `EnterResult` and `LinkType`.
- `flowkit.flowmodel` holds `FlowModel`, which maps task types to task behaviors. The empty type stands for the default behavior.
- `flowkit.validators` is a registry of objects that can tell whether a task type is valid for a named model. Its functions are `register_model_validator`, `get_model_validator` and `is_valid_task_type`.
- `flowkit.registry` is a thread-safe, process-wide registry of models. It offers `register`, `registered`, `get`, `register_default` and `default`.
  - `get` raises `ModelNotFoundError` for an unknown name.
  - `register` raises `ValueError` for a duplicate name.
- `flowkit.copying` holds `deep_copy` and `deep_copy_map`.
- `flowkit.simple` holds the simple model:
  - `flowkit.simple.models.new_model()` returns a model named `"flogo-simple"`.
  - Its task types are `basic` (the default), `iterator` and `doWhile`.
  - Its behavior classes are `BasicTaskBehavior`, `IteratorTaskBehavior`, `DoWhileTaskBehavior` and `SimpleFlowBehavior`.
  - `flowkit.simple.retry` retries an activity when it raises an `ActivityError` with `retriable=True`. This happens only when the task carries a `retry_on_err_config` that has `count` and `interval`; the interval is in milliseconds.
- `flowkit.state.change` holds the per-step change records `FlowChange`, `TaskChange`, `LinkChange` and `QueueChange`. Each has `to_dict` and `from_dict`.
- `flowkit.state.snapshot` holds:
  - `Snapshot`, `Subflow`, `Step`, `FlowState` and `FlowInfo`;
  - the abstract `Recorder` interface.
- `flowkit.state.recording` holds the `RecordingMode` values `off`, `debugger`, `step`, `full` and `snapshot`, plus `to_recording_mode`, `record_steps` and `record_snapshot`.
- `flowkit.state.rebuild` holds `steps_to_snapshot`, which rebuilds a snapshot from recorded steps.
- `flowkit.support.interceptor` holds `Interceptor` and `TaskInterceptor`. These are per-task overrides of inputs, outputs and skipping.
- `flowkit.support.env` holds:
  - `get_user_name`, which reads `FLOGO_APP_USERNAME` and falls back to `"flogo"`;
  - `get_host_id`, which reads `FLOGO_HOST_NAME` and falls back to the machine's host name;
  - `get_app_name` and `get_app_version`, which read `FLOGO_APP_NAME` and `FLOGO_APP_VERSION`.
- `flowkit.support.events` holds the `FlowEvent`, `TaskEvent` and `HostTask` data classes and the `EventStatus` enum.
- `flowkit.support.provider` loads flow definitions as parsed JSON:
  - `BasicRemoteFlowProvider` loads from `file://` URIs, which may be gzip-compressed.
  - It also loads from `http://` URIs. A response with the header `flow-compressed: true` is taken to hold base64 gzip data.
  - `FlowManager` caches flows by URI. It can optionally pass each one through a `materialize` callable.
  - Failures raise `FlowProviderError`.
- `flowkit.tester.server` holds `Server`, a threaded WSGI server:
  - `start()` serves in a background thread.
  - `stop()` stops accepting connections.
  - `wait_stop(timeout)` waits, for up to `timeout` seconds, until requests in progress have finished.
  - Every response carries an `X-Server-Instance-Id` header.
  - Misuse and failures raise `ServerError`.

## Example

```python
from flowkit.registry import register
from flowkit.simple.models import new_model
from flowkit.state.recording import record_steps, to_recording_mode

model = new_model()
register(model)

behavior = model.get_task_behavior("iterator")
assert model.is_valid_task_type("doWhile")
assert model.is_valid_task_type("")  # the default behavior is set

mode = to_recording_mode("Full")
assert record_steps(mode)
```

The next example rebuilds a snapshot from recorded steps. The steps are applied newest first, and the newest non-zero status wins.

```python
from flowkit.state.change import ChangeType, FlowChange, QueueChange, TaskChange
from flowkit.state.rebuild import steps_to_snapshot
from flowkit.state.snapshot import Step

steps = [
    Step(
        id=0,
        flow_id="flow-1",
        flow_changes={0: FlowChange(new_flow=True, flow_uri="res://flow:demo", status=100,
                                    tasks={"t1": TaskChange(status=10)})},
        queue_changes={0: QueueChange(task_id="t1")},
    ),
    Step(
        id=1,
        flow_id="flow-1",
        flow_changes={0: FlowChange(attrs={"t1.out": "done"},
                                    tasks={"t1": TaskChange(status=40)})},
        queue_changes={0: QueueChange(change_type=ChangeType.DELETE)},
    ),
]

snapshot = steps_to_snapshot("flow-1", steps)
print(snapshot.to_dict())
# {'flowURI': 'res://flow:demo', 'status': 100, 'attrs': {'t1.out': 'done'},
#  'tasks': [{'id': 't1', 'status': 40}], 'id': 'flow-1'}
```

## Writing contexts

The behaviors are duck-typed. They work on any objects that match the protocols in `flowkit.behavior`:

- Tasks expose `id`, and `from_links` where the flow behavior needs it.
- Links expose `type` (a `LinkType`), `to_task`, `from_task` and `label`.
- A task context's `eval_activity()` returns whether the activity is done and raises on failure.
- A task context's `get_working_data(key)` raises `KeyError` for a key that was never set.
- Iterator and do-while tasks read `loop_config`:
  - `iterate_on` is a value or a callable taking the context.
  - `condition` is a callable taking the context.
  - `delay` is in milliseconds.

## What this package does not do

flowkit has no flow definition parser, no flow instance engine and no work queue. It also has no action that runs flows on demand. The behaviors decide what happens next, but something else must create and step the flow and task instances.

The `Server` has no built-in routes for starting, restarting or resuming flows. It serves whatever WSGI application you give it. There is no command-line program.