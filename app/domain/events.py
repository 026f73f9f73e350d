"""Domain events emitted by the task workflow.

Events are immutable facts consumed by side-effect sinks (activity log,
notifications). Sinks must never change the outcome of the operation that
emitted the event.
"""

from dataclasses import dataclass

TASK_STATUS_CHANGED = "task.status_changed"


@dataclass(frozen=True)
class TaskStatusChanged:
    """A task moved from one workflow status to another."""

    task_id: str
    actor_id: str
    from_status_name: str | None
    to_status_name: str
    remarks: str | None = None
    task_title: str | None = None
    actor_name: str | None = None

    @property
    def name(self) -> str:
        return TASK_STATUS_CHANGED
