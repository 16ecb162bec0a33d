"""initial skill exchange schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates:
  • users, user_profiles
  • pair_requests (with the dedup index used for pending-request lookups)
  • skill_sessions
  • skill_analytics, user_stats (rollups rebuilt by the analytics service)
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_is_active", "users", ["is_active"])

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("teach_skills", sa.JSON(), nullable=False),
        sa.Column("learn_skills", sa.JSON(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_user_profiles_user_id", "user_profiles", ["user_id"], unique=True)
    op.create_index("ix_user_profiles_is_public", "user_profiles", ["is_public"])

    op.create_table(
        "pair_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("requester_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("requested_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("skill", sa.String(length=100), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        *_timestamps(),
    )
    op.create_index("ix_pair_requests_requester_id", "pair_requests", ["requester_id"])
    op.create_index("ix_pair_requests_requested_id", "pair_requests", ["requested_id"])
    op.create_index(
        "ix_pair_requests_dedup",
        "pair_requests",
        ["requester_id", "requested_id", "skill", "status"],
    )

    op.create_table(
        "skill_sessions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("pair_request_id", sa.Uuid(), sa.ForeignKey("pair_requests.id"), nullable=False),
        sa.Column("teacher_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("learner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("skill", sa.String(length=100), nullable=False),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("meeting_link", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="scheduled"),
        *_timestamps(),
    )
    op.create_index("ix_skill_sessions_pair_request_id", "skill_sessions", ["pair_request_id"])
    op.create_index("ix_skill_sessions_teacher_id", "skill_sessions", ["teacher_id"])
    op.create_index("ix_skill_sessions_learner_id", "skill_sessions", ["learner_id"])
    op.create_index("ix_skill_sessions_status", "skill_sessions", ["status"])

    op.create_table(
        "skill_analytics",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("skill_name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("teach_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("learn_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_requests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("successful_matches", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_skill_analytics_total_requests", "skill_analytics", ["total_requests"])

    op.create_table(
        "user_stats",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False, unique=True),
        sa.Column("teach_skills", sa.JSON(), nullable=False),
        sa.Column("learn_skills", sa.JSON(), nullable=False),
        sa.Column("sent_requests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("received_requests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("accepted_requests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_sessions", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("user_stats")
    op.drop_index("ix_skill_analytics_total_requests", table_name="skill_analytics")
    op.drop_table("skill_analytics")
    op.drop_table("skill_sessions")
    op.drop_index("ix_pair_requests_dedup", table_name="pair_requests")
    op.drop_table("pair_requests")
    op.drop_table("user_profiles")
    op.drop_table("users")
