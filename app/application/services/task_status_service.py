"""Task status machine: validates and executes one status change.

Gates run in a fixed order and the first failure wins with no partial
effects: task lookup, target lookup, active edge, role gate, remarks. The
write is conditional on the status read at validation time; when another
request got there first the task is re-read and re-validated up to
conflict_retries times. Final statuses stamp completed_at but do not lock
the task.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.task import StatusChangeResult, WorkflowStatusRef
from app.application.services.transition_guards import (
    DEFAULT_GUARDS,
    TransitionContext,
    TransitionGuard,
    run_guards,
)
from app.domain.events import TaskStatusChanged
from app.domain.exceptions import (
    AuthenticationException,
    InvalidTargetStatusException,
    ResourceNotFoundException,
    StatusConflictException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        ITaskCommentRepository,
        ITaskRepository,
        IWorkflowStatusRepository,
        IWorkflowTransitionRepository,
    )
    from app.application.services.status_change_dispatcher import StatusChangeDispatcher
    from app.domain.entities import Principal

logger = get_logger(__name__)


def status_change_comment(from_name: str | None, to_name: str, remarks: str) -> str:
    """Body of the system comment recorded when remarks accompany a status change."""
    return f'Status changed from "{from_name or "Unknown"}" to "{to_name}": {remarks}'


class TaskStatusService:
    """Moves tasks between workflow statuses along active transitions."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        comment_repo: ITaskCommentRepository,
        status_repo: IWorkflowStatusRepository,
        transition_repo: IWorkflowTransitionRepository,
        dispatcher: StatusChangeDispatcher | None = None,
        *,
        guards: tuple[TransitionGuard, ...] = DEFAULT_GUARDS,
        conflict_retries: int = 1,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._comment_repo = comment_repo
        self._status_repo = status_repo
        self._transition_repo = transition_repo
        self._dispatcher = dispatcher
        self._guards = guards
        self._conflict_retries = conflict_retries
        self._clock = clock

    async def _build_context(
        self,
        task_id: str,
        to_status_id: str,
        principal: Principal,
        remarks: str | None,
    ) -> TransitionContext:
        task = await self._task_repo.get_task(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        to_status = await self._status_repo.get_status(to_status_id)
        if to_status is None or not to_status.is_active:
            raise InvalidTargetStatusException(to_status_id)
        from_status = await self._status_repo.get_status(task.status_id)
        edge = await self._transition_repo.find_active_edge(task.status_id, to_status.id)
        return TransitionContext(
            task=task,
            from_status=from_status,
            to_status=to_status,
            edge=edge,
            principal=principal,
            remarks=remarks.strip() if remarks else None,
        )

    async def transition(
        self,
        task_id: str,
        to_status_id: str,
        principal: Principal | None,
        remarks: str | None = None,
        *,
        actor_name: str | None = None,
    ) -> StatusChangeResult:
        """Move task to to_status_id on behalf of principal.

        Raises:
            AuthenticationException: No principal.
            ResourceNotFoundException: Unknown task.
            InvalidTargetStatusException: Target status missing or inactive.
            TransitionNotAllowedException: No active edge from the current status.
            RoleNotPermittedException: Edge is role-gated and principal holds none of the roles.
            RemarksRequiredException: Edge requires remarks and none were given.
            StatusConflictException: Concurrent writers kept winning after all retries.
        """
        if principal is None:
            raise AuthenticationException()
        attempt = 0
        while True:
            ctx = await self._build_context(task_id, to_status_id, principal, remarks)
            run_guards(ctx, self._guards)
            completed_at = self._clock() if ctx.to_status.is_final else None
            updated = await self._task_repo.update_status_if_current(
                ctx.task.id,
                expected_status_id=ctx.task.status_id,
                new_status_id=ctx.to_status.id,
                completed_at=completed_at,
            )
            if updated is not None:
                break
            if attempt >= self._conflict_retries:
                logger.info(
                    "Status change conflict on task %s (expected status %s)",
                    task_id,
                    ctx.task.status_id,
                )
                raise StatusConflictException(task_id, ctx.task.status_id)
            attempt += 1
            logger.debug("Retrying status change on task %s (attempt %s)", task_id, attempt)

        comment = None
        if ctx.remarks:
            comment = await self._comment_repo.create_comment(
                task_id=updated.id,
                author_id=principal.id,
                content=status_change_comment(ctx.from_name, ctx.to_name, ctx.remarks),
                is_system_generated=True,
            )

        logger.info(
            "Task %s status changed %r -> %r by %s",
            updated.id,
            ctx.from_name,
            ctx.to_name,
            principal.id,
        )
        if self._dispatcher is not None:
            await self._dispatcher.dispatch(
                TaskStatusChanged(
                    task_id=updated.id,
                    actor_id=principal.id,
                    from_status_name=ctx.from_name,
                    to_status_name=ctx.to_name,
                    remarks=ctx.remarks,
                    task_title=updated.title,
                    actor_name=actor_name,
                )
            )

        return StatusChangeResult(
            task=updated,
            from_status=(
                WorkflowStatusRef(id=ctx.from_status.id, name=ctx.from_status.name)
                if ctx.from_status
                else None
            ),
            to_status=WorkflowStatusRef(id=ctx.to_status.id, name=ctx.to_status.name),
            comment=comment,
        )

    async def assign_initial_status(self) -> str:
        """Return the status id a new task starts in: the default, else the first active status.

        Raises:
            ResourceNotFoundException: No active status exists.
        """
        default = await self._status_repo.get_default()
        if default is not None:
            return default.id
        active = await self._status_repo.list_active()
        if not active:
            raise ResourceNotFoundException("workflow_status", "default")
        return active[0].id
