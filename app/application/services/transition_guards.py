"""Guards for a single task status transition.

Each guard is a pure function over a TransitionContext that raises the
matching domain exception or returns None. Guards run in tuple order and
the first failure wins.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from app.application.dtos.task import TaskResult
from app.application.dtos.workflow import WorkflowStatusResult, WorkflowTransitionResult
from app.domain.entities import Principal
from app.domain.exceptions import (
    RemarksRequiredException,
    RoleNotPermittedException,
    TransitionNotAllowedException,
)


@dataclass(frozen=True)
class TransitionContext:
    """Everything a guard may look at: task, both statuses, the edge (if any), actor, remarks."""

    task: TaskResult
    from_status: WorkflowStatusResult | None
    to_status: WorkflowStatusResult
    edge: WorkflowTransitionResult | None
    principal: Principal
    remarks: str | None = None

    @property
    def from_name(self) -> str | None:
        return self.from_status.name if self.from_status else None

    @property
    def to_name(self) -> str:
        return self.to_status.name

    @property
    def has_remarks(self) -> bool:
        return bool(self.remarks and self.remarks.strip())


TransitionGuard = Callable[[TransitionContext], None]


def passes_role_gate(edge: WorkflowTransitionResult, principal: Principal) -> bool:
    """An empty allowed-role list admits anyone; otherwise the principal needs one listed role."""
    if not edge.allowed_role_ids:
        return True
    return principal.holds_any_role(frozenset(edge.allowed_role_ids))


def require_active_edge(ctx: TransitionContext) -> None:
    if ctx.edge is None:
        raise TransitionNotAllowedException(ctx.from_name, ctx.to_name)


def require_allowed_role(ctx: TransitionContext) -> None:
    if ctx.edge is not None and not passes_role_gate(ctx.edge, ctx.principal):
        raise RoleNotPermittedException(ctx.from_name, ctx.to_name)


def require_remarks(ctx: TransitionContext) -> None:
    if ctx.edge is not None and ctx.edge.requires_remarks and not ctx.has_remarks:
        raise RemarksRequiredException(ctx.from_name, ctx.to_name)


DEFAULT_GUARDS: tuple[TransitionGuard, ...] = (
    require_active_edge,
    require_allowed_role,
    require_remarks,
)


def run_guards(
    ctx: TransitionContext, guards: tuple[TransitionGuard, ...] = DEFAULT_GUARDS
) -> None:
    """Run guards in order; the first one to raise aborts the transition."""
    for guard in guards:
        guard(ctx)
