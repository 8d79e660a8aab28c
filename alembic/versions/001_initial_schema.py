"""Initial schema — channels, messages, cases, pattern overrides, commitments.

Revision ID: 001
Revises: None
Create Date: 2024-11-04
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(sa.schema.CreateSequence(sa.Sequence("case_ticket_number_seq", start=1000)))

    # Channels
    op.create_table(
        "channels",
        sa.Column("id", sa.String(100), primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="normal"),
        sa.Column("awaiting_reply", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("last_client_message_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_team_message_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Messages (case_id FK is added after cases exists)
    op.create_table(
        "messages",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "channel_id", sa.String(100),
            sa.ForeignKey("channels.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("sender_role", sa.String(20), nullable=False, server_default="client"),
        sa.Column("sender_id", sa.String(100), nullable=True),
        sa.Column("sender_name", sa.String(255), nullable=True),
        sa.Column("category", sa.String(30), nullable=True),
        sa.Column("sentiment", sa.String(20), nullable=True),
        sa.Column("intent", sa.String(30), nullable=True),
        sa.Column("urgency", sa.Integer, nullable=True),
        sa.Column("is_problem", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("needs_response", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("auto_reply_candidate", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("entities", JSONB, nullable=False, server_default="{}"),
        sa.Column("case_id", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_messages_channel_created", "messages", ["channel_id", "created_at"])
    op.create_index("idx_messages_case", "messages", ["case_id"])

    # Cases
    op.create_table(
        "cases",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "ticket_number", sa.Integer, nullable=False, unique=True,
            server_default=sa.text("nextval('case_ticket_number_seq')"),
        ),
        sa.Column(
            "channel_id", sa.String(100),
            sa.ForeignKey("channels.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("severity", sa.String(20), nullable=False, server_default="normal"),
        sa.Column("status", sa.String(20), nullable=False, server_default="detected"),
        sa.Column(
            "source_message_id", sa.Integer,
            sa.ForeignKey("messages.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("messages_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("source_message_id", name="uq_cases_source_message"),
    )
    op.create_index(
        "idx_cases_channel_status_created", "cases", ["channel_id", "status", "created_at"]
    )
    op.create_foreign_key(
        "fk_messages_case_id", "messages", "cases", ["case_id"], ["id"], ondelete="SET NULL"
    )

    # Case activity log
    op.create_table(
        "case_activities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "case_id", sa.Integer,
            sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("kind", sa.String(30), nullable=False),
        sa.Column("message_id", sa.Integer, nullable=True),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_case_activities_case", "case_activities", ["case_id"])

    # Pattern overrides
    op.create_table(
        "pattern_overrides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_name", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("data", JSONB, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("group_name", "name", name="uq_pattern_overrides_key"),
    )

    # Staff commitments
    op.create_table(
        "commitments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "channel_id", sa.String(100),
            sa.ForeignKey("channels.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "message_id", sa.Integer,
            sa.ForeignKey("messages.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("phrase", sa.String(255), nullable=False),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_vague", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("sender_name", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_commitments_status_due", "commitments", ["status", "due_at"])


def downgrade() -> None:
    op.drop_table("commitments")
    op.drop_table("pattern_overrides")
    op.drop_table("case_activities")
    op.drop_constraint("fk_messages_case_id", "messages", type_="foreignkey")
    op.drop_table("cases")
    op.drop_table("messages")
    op.drop_table("channels")
    op.execute(sa.schema.DropSequence(sa.Sequence("case_ticket_number_seq")))
