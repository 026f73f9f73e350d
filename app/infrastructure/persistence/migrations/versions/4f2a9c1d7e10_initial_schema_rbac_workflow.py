"""Initial schema: permissions, roles, users, workflow, tasks, activity log, notifications

Revision ID: 4f2a9c1d7e10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _is_active() -> sa.Column:
    return sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False)


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("resource", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("group", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
        sa.UniqueConstraint("resource", "action", name="uq_permission_resource_action"),
    )

    op.create_table(
        "role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        _is_active(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_role_slug"), "role", ["slug"], unique=True)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("permission_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["role.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )

    op.create_table(
        "department",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("code", sa.String(length=10), nullable=True),
        sa.Column("head_id", sa.String(), nullable=True),
        _is_active(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # role_id has no foreign key: role deletion leaves assignments dangling.
    op.create_table(
        "user_role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("assigned_by", sa.String(), nullable=True),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )
    op.create_index("ix_user_role_user", "user_role", ["user_id"], unique=False)
    op.create_index(op.f("ix_user_role_role_id"), "user_role", ["role_id"], unique=False)

    op.create_table(
        "workflow_status",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("is_final", sa.Boolean(), nullable=False),
        _is_active(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_workflow_status_slug"), "workflow_status", ["slug"], unique=True)
    op.create_index(op.f("ix_workflow_status_order"), "workflow_status", ["order"], unique=False)

    op.create_table(
        "workflow_transition",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("from_status_id", sa.String(), nullable=False),
        sa.Column("to_status_id", sa.String(), nullable=False),
        sa.Column("allowed_role_ids", sa.JSON(), nullable=False),
        sa.Column("requires_remarks", sa.Boolean(), nullable=False),
        sa.Column("requires_approval", sa.Boolean(), nullable=False),
        sa.Column("approver_role_ids", sa.JSON(), nullable=False),
        _is_active(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["from_status_id"], ["workflow_status.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_status_id"], ["workflow_status.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "from_status_id", "to_status_id", name="uq_workflow_transition_pair"
        ),
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("status_id", sa.String(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("department_id", sa.String(), nullable=True),
        sa.Column("assignee_ids", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["status_id"], ["workflow_status.id"]),
        sa.ForeignKeyConstraint(["department_id"], ["department.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_task_status_id"), "task", ["status_id"], unique=False)

    op.create_table(
        "task_comment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_system_generated", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_task_comment_task_created", "task_comment", ["task_id", "created_at"], unique=False
    )

    op.create_table(
        "activity_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("resource", sa.String(), nullable=False),
        sa.Column("resource_id", sa.String(), nullable=False),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_activity_log_action"), "activity_log", ["action"], unique=False)
    op.create_index(
        "ix_activity_log_actor_created", "activity_log", ["actor_id", "created_at"], unique=False
    )
    op.create_index(
        "ix_activity_log_resource",
        "activity_log",
        ["resource", "resource_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "notification_rule",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event", sa.String(), nullable=False),
        sa.Column("channels", sa.JSON(), nullable=False),
        sa.Column("recipient_strategy", sa.String(), nullable=False),
        sa.Column("recipient_role_ids", sa.JSON(), nullable=False),
        _is_active(),
        *_timestamps(),
        sa.CheckConstraint(
            "recipient_strategy IN ('assignees', 'creator', 'department_head', 'specific_roles')",
            name="notification_rule_strategy_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notification_rule_event"), "notification_rule", ["event"], unique=False)

    op.create_table(
        "notification",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("recipient_id", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("related_task_id", sa.String(), nullable=True),
        sa.Column("related_user_id", sa.String(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_sent", sa.Boolean(), nullable=False),
        sa.Column("email_sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notification_recipient_read",
        "notification",
        ["recipient_id", "is_read", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index("ix_notification_recipient_read", table_name="notification")
    op.drop_table("notification")
    op.drop_index(op.f("ix_notification_rule_event"), table_name="notification_rule")
    op.drop_table("notification_rule")
    op.drop_index("ix_activity_log_resource", table_name="activity_log")
    op.drop_index("ix_activity_log_actor_created", table_name="activity_log")
    op.drop_index(op.f("ix_activity_log_action"), table_name="activity_log")
    op.drop_table("activity_log")
    op.drop_index("ix_task_comment_task_created", table_name="task_comment")
    op.drop_table("task_comment")
    op.drop_index(op.f("ix_task_status_id"), table_name="task")
    op.drop_table("task")
    op.drop_table("workflow_transition")
    op.drop_index(op.f("ix_workflow_status_order"), table_name="workflow_status")
    op.drop_index(op.f("ix_workflow_status_slug"), table_name="workflow_status")
    op.drop_table("workflow_status")
    op.drop_index(op.f("ix_user_role_role_id"), table_name="user_role")
    op.drop_index("ix_user_role_user", table_name="user_role")
    op.drop_table("user_role")
    op.drop_table("app_user")
    op.drop_table("department")
    op.drop_table("role_permission")
    op.drop_index(op.f("ix_role_slug"), table_name="role")
    op.drop_table("role")
    op.drop_table("permission")
