"""In-memory repository doubles implementing the application Protocols.

State lives in plain dicts so tests can arrange and inspect it directly.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Any

from app.application.dtos import (
    ActivityLogEntry,
    ActivityLogResult,
    DepartmentResult,
    NotificationCreate,
    NotificationResult,
    NotificationRuleResult,
    PermissionDefinition,
    PermissionResult,
    RoleResult,
    TaskCommentResult,
    TaskResult,
    UserResult,
    WorkflowStatusCreate,
    WorkflowStatusResult,
    WorkflowTransitionCreate,
    WorkflowTransitionResult,
)

_ids = itertools.count(1)


def next_id(prefix: str) -> str:
    return f"{prefix}{next(_ids)}"


class FakePermissionRepository:
    def __init__(self, permissions: Iterable[PermissionResult] = ()) -> None:
        self.rows: dict[str, PermissionResult] = {p.id: p for p in permissions}

    def add(self, code: str, group: str = "General") -> PermissionResult:
        resource, _, action = code.partition(":")
        perm = PermissionResult(
            id=next_id("perm"),
            code=code,
            resource=resource,
            action=action,
            description=None,
            group=group,
        )
        self.rows[perm.id] = perm
        return perm

    async def get_all_permissions(self) -> list[PermissionResult]:
        return list(self.rows.values())

    async def get_by_ids(self, permission_ids: Iterable[str]) -> list[PermissionResult]:
        return [self.rows[i] for i in permission_ids if i in self.rows]

    async def get_by_codes(self, codes: Iterable[str]) -> list[PermissionResult]:
        wanted = set(codes)
        return [p for p in self.rows.values() if p.code in wanted]

    async def get_all_codes(self) -> set[str]:
        return {p.code for p in self.rows.values()}

    async def upsert(self, definition: PermissionDefinition) -> PermissionResult:
        for p in self.rows.values():
            if p.code == definition.code:
                return p
        return self.add(definition.code, definition.group)


class FakeRoleRepository:
    def __init__(self, permission_repo: FakePermissionRepository) -> None:
        self.permission_repo = permission_repo
        self.rows: dict[str, RoleResult] = {}
        self.cloned_from: dict[str, str] = {}

    def _with_permissions(self, role: RoleResult, permission_ids: Iterable[str]) -> RoleResult:
        perms = sorted(
            (self.permission_repo.rows[i] for i in permission_ids),
            key=lambda p: p.code,
        )
        return replace(
            role,
            permission_ids=tuple(p.id for p in perms),
            permission_codes=tuple(p.code for p in perms),
        )

    def add(
        self,
        slug: str,
        permission_codes: Iterable[str] = (),
        *,
        name: str | None = None,
        is_system: bool = False,
        is_active: bool = True,
    ) -> RoleResult:
        by_code = {p.code: p.id for p in self.permission_repo.rows.values()}
        role = RoleResult(
            id=next_id("role"),
            name=name or slug.replace("-", " ").title(),
            slug=slug,
            description=None,
            is_system=is_system,
            is_active=is_active,
        )
        role = self._with_permissions(role, [by_code[c] for c in permission_codes])
        self.rows[role.id] = role
        return role

    async def get_role(self, role_id: str) -> RoleResult | None:
        return self.rows.get(role_id)

    async def get_by_slug(self, slug: str) -> RoleResult | None:
        return next((r for r in self.rows.values() if r.slug == slug), None)

    async def get_active_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        return [self.rows[i] for i in role_ids if i in self.rows and self.rows[i].is_active]

    async def get_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        return [self.rows[i] for i in role_ids if i in self.rows]

    async def list_roles(self, include_inactive: bool = True) -> list[RoleResult]:
        roles = sorted(self.rows.values(), key=lambda r: r.name)
        return [r for r in roles if include_inactive or r.is_active]

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None,
        permission_ids: Iterable[str],
        *,
        is_system: bool = False,
        created_by: str | None = None,
        cloned_from: str | None = None,
    ) -> RoleResult:
        role = RoleResult(
            id=next_id("role"),
            name=name,
            slug=slug,
            description=description,
            is_system=is_system,
            is_active=True,
            created_by=created_by,
        )
        role = self._with_permissions(role, permission_ids)
        self.rows[role.id] = role
        if cloned_from:
            self.cloned_from[role.id] = cloned_from
        return role

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
        is_system: bool | None = None,
        permission_ids: Iterable[str] | None = None,
    ) -> RoleResult | None:
        role = self.rows.get(role_id)
        if role is None:
            return None
        changes = {
            k: v
            for k, v in {
                "name": name,
                "slug": slug,
                "description": description,
                "is_active": is_active,
                "is_system": is_system,
            }.items()
            if v is not None
        }
        role = replace(role, **changes)
        if permission_ids is not None:
            role = self._with_permissions(role, permission_ids)
        self.rows[role_id] = role
        return role

    async def delete_role(self, role_id: str) -> bool:
        return self.rows.pop(role_id, None) is not None


class FakeUserRepository:
    def __init__(self) -> None:
        self.users: dict[str, UserResult] = {}
        self.roles: dict[str, list[str]] = {}

    def add(
        self,
        user_id: str,
        role_ids: Iterable[str] = (),
        *,
        email: str | None = None,
        is_active: bool = True,
    ) -> UserResult:
        user = UserResult(
            id=user_id,
            name=user_id.title(),
            email=email if email is not None else f"{user_id}@example.com",
            is_active=is_active,
        )
        self.users[user_id] = user
        self.roles[user_id] = list(role_ids)
        return user

    async def get_user(self, user_id: str) -> UserResult | None:
        return self.users.get(user_id)

    async def get_role_ids(self, user_id: str) -> list[str]:
        return list(self.roles.get(user_id, []))

    async def get_active_user_ids_with_roles(self, role_ids: Iterable[str]) -> list[str]:
        wanted = set(role_ids)
        return [
            uid
            for uid, user in self.users.items()
            if user.is_active and wanted.intersection(self.roles.get(uid, []))
        ]

    async def get_users(self, user_ids: Iterable[str]) -> list[UserResult]:
        return [self.users[i] for i in user_ids if i in self.users]


class FakeDepartmentRepository:
    def __init__(self) -> None:
        self.rows: dict[str, DepartmentResult] = {}

    def add(self, department_id: str, head_id: str | None) -> DepartmentResult:
        dept = DepartmentResult(id=department_id, name=department_id.title(), head_id=head_id)
        self.rows[department_id] = dept
        return dept

    async def get_department(self, department_id: str) -> DepartmentResult | None:
        return self.rows.get(department_id)


class FakeWorkflowStatusRepository:
    def __init__(self) -> None:
        self.rows: dict[str, WorkflowStatusResult] = {}

    def add(
        self,
        name: str,
        order: int = 0,
        *,
        is_default: bool = False,
        is_final: bool = False,
        is_active: bool = True,
    ) -> WorkflowStatusResult:
        status = WorkflowStatusResult(
            id=next_id("status"),
            name=name,
            slug=name.lower().replace(" ", "-"),
            color="#6b7280",
            order=order,
            is_default=is_default,
            is_final=is_final,
            is_active=is_active,
        )
        self.rows[status.id] = status
        return status

    async def get_status(self, status_id: str) -> WorkflowStatusResult | None:
        return self.rows.get(status_id)

    async def get_by_slug(self, slug: str) -> WorkflowStatusResult | None:
        return next((s for s in self.rows.values() if s.slug == slug), None)

    async def get_by_name(self, name: str) -> WorkflowStatusResult | None:
        return next((s for s in self.rows.values() if s.name == name), None)

    async def get_default(self) -> WorkflowStatusResult | None:
        return next(
            (s for s in self.rows.values() if s.is_default and s.is_active), None
        )

    async def list_active(self) -> list[WorkflowStatusResult]:
        return sorted(
            (s for s in self.rows.values() if s.is_active), key=lambda s: (s.order, s.name)
        )

    async def create_status(self, data: WorkflowStatusCreate) -> WorkflowStatusResult:
        status = WorkflowStatusResult(
            id=next_id("status"),
            name=data.name,
            slug=data.slug,
            color=data.color,
            order=data.order,
            is_default=data.is_default,
            is_final=data.is_final,
            is_active=True,
        )
        self.rows[status.id] = status
        return status

    async def update_status(self, status_id: str, **fields: Any) -> WorkflowStatusResult | None:
        status = self.rows.get(status_id)
        if status is None:
            return None
        self.rows[status_id] = replace(status, **fields)
        return self.rows[status_id]

    async def clear_defaults(self, except_status_id: str | None = None) -> int:
        changed = 0
        for sid, status in list(self.rows.items()):
            if sid != except_status_id and status.is_default:
                self.rows[sid] = replace(status, is_default=False)
                changed += 1
        return changed


class FakeWorkflowTransitionRepository:
    def __init__(self) -> None:
        self.rows: dict[str, WorkflowTransitionResult] = {}

    def add(
        self,
        from_status_id: str,
        to_status_id: str,
        *,
        allowed_role_ids: Iterable[str] = (),
        requires_remarks: bool = False,
        requires_approval: bool = False,
        is_active: bool = True,
    ) -> WorkflowTransitionResult:
        edge = WorkflowTransitionResult(
            id=next_id("edge"),
            from_status_id=from_status_id,
            to_status_id=to_status_id,
            allowed_role_ids=tuple(allowed_role_ids),
            requires_remarks=requires_remarks,
            requires_approval=requires_approval,
            approver_role_ids=(),
            is_active=is_active,
        )
        self.rows[edge.id] = edge
        return edge

    async def get_transition(self, transition_id: str) -> WorkflowTransitionResult | None:
        return self.rows.get(transition_id)

    async def get_by_pair(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        return next(
            (
                e
                for e in self.rows.values()
                if e.from_status_id == from_status_id and e.to_status_id == to_status_id
            ),
            None,
        )

    async def find_active_edge(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        edge = await self.get_by_pair(from_status_id, to_status_id)
        return edge if edge is not None and edge.is_active else None

    async def list_active(self) -> list[WorkflowTransitionResult]:
        return [e for e in self.rows.values() if e.is_active]

    async def list_active_from(self, from_status_id: str) -> list[WorkflowTransitionResult]:
        return [
            e for e in self.rows.values() if e.is_active and e.from_status_id == from_status_id
        ]

    async def create_transition(self, data: WorkflowTransitionCreate) -> WorkflowTransitionResult:
        return self.add(
            data.from_status_id,
            data.to_status_id,
            allowed_role_ids=data.allowed_role_ids,
            requires_remarks=data.requires_remarks,
            requires_approval=data.requires_approval,
        )

    async def update_transition(
        self, transition_id: str, **fields: Any
    ) -> WorkflowTransitionResult | None:
        edge = self.rows.get(transition_id)
        if edge is None:
            return None
        self.rows[transition_id] = replace(edge, **fields)
        return self.rows[transition_id]


class FakeTaskRepository:
    """Task store with a hook that lets a test play a concurrent writer.

    before_write(task_id) runs inside update_status_if_current, right before
    the compare-and-set, and may change the stored status.
    """

    def __init__(self) -> None:
        self.rows: dict[str, TaskResult] = {}
        self.before_write = None
        self.write_attempts = 0

    def add(
        self,
        status_id: str,
        *,
        title: str = "Prepare report",
        created_by: str = "creator",
        department_id: str | None = None,
        assignee_ids: Iterable[str] = (),
    ) -> TaskResult:
        task = TaskResult(
            id=next_id("task"),
            title=title,
            status_id=status_id,
            completed_at=None,
            created_by=created_by,
            department_id=department_id,
            assignee_ids=tuple(assignee_ids),
            version=1,
        )
        self.rows[task.id] = task
        return task

    def set_status(self, task_id: str, status_id: str) -> None:
        task = self.rows[task_id]
        self.rows[task_id] = replace(task, status_id=status_id, version=task.version + 1)

    async def get_task(self, task_id: str) -> TaskResult | None:
        return self.rows.get(task_id)

    async def update_status_if_current(
        self,
        task_id: str,
        expected_status_id: str,
        new_status_id: str,
        completed_at: datetime | None = None,
    ) -> TaskResult | None:
        self.write_attempts += 1
        if self.before_write is not None:
            self.before_write(task_id)
        task = self.rows.get(task_id)
        if task is None or task.status_id != expected_status_id:
            return None
        changes: dict[str, Any] = {"status_id": new_status_id, "version": task.version + 1}
        if completed_at is not None:
            changes["completed_at"] = completed_at
        self.rows[task_id] = replace(task, **changes)
        return self.rows[task_id]


class FakeTaskCommentRepository:
    def __init__(self) -> None:
        self.rows: list[TaskCommentResult] = []

    async def create_comment(
        self,
        task_id: str,
        author_id: str,
        content: str,
        *,
        is_system_generated: bool = False,
    ) -> TaskCommentResult:
        comment = TaskCommentResult(
            id=next_id("comment"),
            task_id=task_id,
            author_id=author_id,
            content=content,
            is_system_generated=is_system_generated,
        )
        self.rows.append(comment)
        return comment

    async def list_for_task(self, task_id: str) -> list[TaskCommentResult]:
        return [c for c in self.rows if c.task_id == task_id]


class FakeActivityLogger:
    """IActivityLogger double recording each call as a dict."""

    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []

    async def log(
        self,
        action: str,
        resource: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> None:
        self.entries.append(
            {
                "action": action,
                "resource": resource,
                "resource_id": resource_id,
                "details": details or {},
                "actor_id": actor_id,
            }
        )


class FakeActivityLogRepository:
    def __init__(self) -> None:
        self.rows: list[ActivityLogResult] = []
        self.entries: list[ActivityLogEntry] = []

    async def create_entry(self, entry: ActivityLogEntry) -> ActivityLogResult:
        self.entries.append(entry)
        result = ActivityLogResult(
            id=next_id("log"),
            action=entry.action,
            resource=entry.resource,
            resource_id=entry.resource_id,
            actor_id=entry.actor_id,
            details=entry.details,
        )
        self.rows.append(result)
        return result

    async def list_for_resource(
        self, resource: str, resource_id: str, limit: int = 100
    ) -> list[ActivityLogResult]:
        return [r for r in self.rows if r.resource == resource and r.resource_id == resource_id]


class FakeNotificationRuleRepository:
    def __init__(self) -> None:
        self.rows: list[NotificationRuleResult] = []

    def add(
        self,
        strategy: str,
        channels: Iterable[str] = ("in_app",),
        *,
        event: str = "status_changed",
        recipient_role_ids: Iterable[str] = (),
        is_active: bool = True,
    ) -> NotificationRuleResult:
        rule = NotificationRuleResult(
            id=next_id("rule"),
            event=event,
            channels=tuple(channels),
            recipient_strategy=strategy,
            recipient_role_ids=tuple(recipient_role_ids),
            is_active=is_active,
        )
        self.rows.append(rule)
        return rule

    async def get_active_for_event(self, event: str) -> list[NotificationRuleResult]:
        return [r for r in self.rows if r.event == event and r.is_active]


class FakeNotificationRepository:
    def __init__(self) -> None:
        self.rows: dict[str, NotificationResult] = {}

    async def create_many(
        self, notifications: list[NotificationCreate]
    ) -> list[NotificationResult]:
        created = []
        for n in notifications:
            result = NotificationResult(
                id=next_id("notif"),
                recipient_id=n.recipient_id,
                type=n.type,
                title=n.title,
                message=n.message,
                related_task_id=n.related_task_id,
                related_user_id=n.related_user_id,
                is_read=False,
                email_sent=False,
            )
            self.rows[result.id] = result
            created.append(result)
        return created

    async def mark_email_sent(self, notification_ids: Iterable[str]) -> int:
        count = 0
        for nid in notification_ids:
            if nid in self.rows:
                self.rows[nid] = replace(self.rows[nid], email_sent=True)
                count += 1
        return count

    async def list_for_recipient(
        self, recipient_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        return [
            n
            for n in self.rows.values()
            if n.recipient_id == recipient_id and (not unread_only or not n.is_read)
        ]


class FakeNotificationSender:
    def __init__(self, fail_for: Iterable[str] = ()) -> None:
        self.sent: list[tuple[list[str], str, str]] = []
        self.fail_for = set(fail_for)

    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        if self.fail_for.intersection(to_emails):
            raise RuntimeError("SMTP unavailable")
        self.sent.append((list(to_emails), subject, body))


class FakeCache:
    """ICacheService double backed by a dict; availability can be toggled."""

    def __init__(self, available: bool = True) -> None:
        self.store: dict[str, Any] = {}
        self.available = available
        self.deleted_patterns: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any | None:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        self.store[key] = value
        return True

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def delete_pattern(self, pattern: str) -> int:
        self.deleted_patterns.append(pattern)
        prefix = pattern.rstrip("*")
        doomed = [k for k in self.store if k.startswith(prefix)]
        for k in doomed:
            del self.store[k]
        return len(doomed)
