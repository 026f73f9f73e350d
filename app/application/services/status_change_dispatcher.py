"""Fan-out of task.status_changed events to side-effect sinks.

The status change is already persisted when dispatch runs. A failing sink is
logged and skipped; it never reaches the caller and never undoes the change.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any

from app.domain.events import TaskStatusChanged
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.services import IActivityLogger, IStatusChangeSink

logger = get_logger(__name__)


class StatusChangeDispatcher:
    """Delivers each event to every sink in order.

    isolate, when given, wraps each sink call (e.g. a database savepoint) so a
    sink's storage failure cannot poison the enclosing transaction.
    """

    def __init__(
        self,
        sinks: Sequence[IStatusChangeSink],
        isolate: Callable[[], AbstractAsyncContextManager[Any]] | None = None,
    ) -> None:
        self._sinks = tuple(sinks)
        self._isolate = isolate

    async def dispatch(self, event: TaskStatusChanged) -> None:
        for sink in self._sinks:
            try:
                if self._isolate is None:
                    await sink.handle(event)
                else:
                    async with self._isolate():
                        await sink.handle(event)
            except Exception as e:
                logger.warning(
                    "Status change sink %s failed for task %s: %s",
                    type(sink).__name__,
                    event.task_id,
                    str(e),
                    exc_info=True,
                )


class ActivityLogSink:
    """Records task.status_changed with {from, to, remarks} in the activity log."""

    def __init__(self, activity_logger: IActivityLogger) -> None:
        self._activity_logger = activity_logger

    async def handle(self, event: TaskStatusChanged) -> None:
        await self._activity_logger.log(
            action=event.name,
            resource="task",
            resource_id=event.task_id,
            details={
                "from": event.from_status_name,
                "to": event.to_status_name,
                "remarks": event.remarks,
            },
            actor_id=event.actor_id,
        )
