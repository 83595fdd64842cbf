"""Rebuilding a snapshot of a flow instance from its recorded steps."""

from __future__ import annotations

from collections.abc import Sequence

from flowkit.state.change import ChangeType, FlowChange, LinkChange, TaskChange
from flowkit.state.snapshot import (
    LinkState,
    Snapshot,
    SnapshotBase,
    Step,
    Subflow,
    TaskState,
    WorkItem,
)


def steps_to_snapshot(flow_id: str, steps: Sequence[Step]) -> Snapshot:
    """Return the snapshot reached after ``steps``, applying the newest first.

    The first non-zero status seen wins, so the newest one is kept. The work
    queue holds the items added after the newest removal from the queue.
    """
    snapshot = Snapshot(id=flow_id)
    subflows: dict[int, Subflow] = {}
    first_deleted: int | None = None
    queue_done = False

    for step in reversed(steps):
        for flow_change in step.flow_changes.values():
            if flow_change.subflow_id > 0:
                subflow = subflows.get(flow_change.subflow_id)
                if subflow is None:
                    subflow = Subflow(id=flow_change.subflow_id, task_id=flow_change.task_id)
                    subflows[flow_change.subflow_id] = subflow
                update_flow(subflow, flow_change)
            else:
                update_flow(snapshot, flow_change)

        if queue_done:
            continue
        for queue_id, queue_change in step.queue_changes.items():
            if first_deleted is None and queue_change.change_type == ChangeType.DELETE:
                first_deleted = queue_id
            elif queue_id == first_deleted:
                queue_done = True
                break
            if queue_change.change_type == ChangeType.ADD:
                snapshot.work_queue.append(
                    WorkItem(
                        id=queue_id,
                        subflow_id=queue_change.subflow_id,
                        task_id=queue_change.task_id,
                    )
                )

    snapshot.subflows = list(subflows.values())
    return snapshot


def update_flow(base: SnapshotBase, change: FlowChange) -> None:
    """Apply a flow change to a snapshot that already holds newer changes."""
    if change.attrs:
        if base.attrs is None:
            base.attrs = dict(change.attrs)
        else:
            base.attrs.update(change.attrs)

    if base.status == 0:
        base.status = change.status

    if change.new_flow:
        base.flow_uri = change.flow_uri

    for task_id, task_change in (change.tasks or {}).items():
        update_tasks(base, task_id, task_change)
    for link_id, link_change in (change.links or {}).items():
        update_links(base, link_id, link_change)


def update_tasks(base: SnapshotBase, task_id: str, change: TaskChange) -> None:
    """Add the task to the snapshot, or set its status if it has none yet."""
    existing = next((t for t in reversed(base.tasks) if t.id == task_id), None)
    if existing is None:
        base.tasks.append(TaskState(id=task_id, status=change.status))
    elif existing.status == 0:
        existing.status = change.status


def update_links(base: SnapshotBase, link_id: int, change: LinkChange) -> None:
    """Add the link to the snapshot, or set its status if it has none yet."""
    existing = next((link for link in reversed(base.links) if link.id == link_id), None)
    if existing is None:
        base.links.append(LinkState(id=link_id, status=change.status))
    elif existing.status == 0:
        existing.status = change.status