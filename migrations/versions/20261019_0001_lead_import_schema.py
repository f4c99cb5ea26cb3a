"""lead import schema: brokers, team, leads, distribution, csv imports

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _broker_fk() -> sa.Column:
    return sa.Column(
        "broker_id",
        sa.String(length=36),
        sa.ForeignKey("brokers.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "brokers",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("commission_rate", sa.Float(), nullable=True),
        sa.Column("lead_distribution_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
    )

    op.create_table(
        "team_members",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _broker_fk(),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.UniqueConstraint("broker_id", "user_id", name="uq_team_members_broker_user"),
    )
    op.create_index("ix_team_members_broker_id", "team_members", ["broker_id"])
    op.create_index("ix_team_members_user_id", "team_members", ["user_id"])

    op.create_table(
        "leads",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _broker_fk(),
        sa.Column("external_id", sa.String(length=255), nullable=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("business_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("loan_amount", sa.String(length=120), nullable=True),
        sa.Column("loan_purpose", sa.String(length=255), nullable=True),
        sa.Column("loan_term", sa.String(length=120), nullable=True),
        sa.Column("monthly_turnover", sa.String(length=120), nullable=True),
        sa.Column("money_timeline", sa.String(length=120), nullable=True),
        sa.Column("property_type", sa.String(length=120), nullable=True),
        sa.Column("status", sa.String(length=40), nullable=False, server_default="new"),
        sa.Column("sub_status", sa.String(length=60), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("call_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("source", sa.String(length=120), nullable=True),
        sa.Column("assigned_to", sa.String(length=36), nullable=True),
        *_audit_columns(),
        sa.CheckConstraint("call_count >= 0", name="ck_leads_call_count_non_negative"),
        sa.CheckConstraint(
            "sub_status IS NULL OR status IN ('pending', 'bad_lead')",
            name="ck_leads_sub_status_scope",
        ),
    )
    op.create_index("ix_leads_broker_id", "leads", ["broker_id"])
    op.create_index("idx_leads_broker_status", "leads", ["broker_id", "status"])
    op.create_index("idx_leads_broker_assigned", "leads", ["broker_id", "assigned_to"])

    op.create_table(
        "lead_distribution_allocations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _broker_fk(),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("percentage", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.UniqueConstraint("broker_id", "user_id", name="uq_allocations_broker_user"),
        sa.CheckConstraint("percentage > 0 AND percentage <= 100", name="ck_allocations_percentage_range"),
    )
    op.create_index("ix_lead_distribution_allocations_broker_id", "lead_distribution_allocations", ["broker_id"])

    op.create_table(
        "lead_distribution_counter",
        sa.Column(
            "broker_id",
            sa.String(length=36),
            sa.ForeignKey("brokers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("counter", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("counter >= 0 AND counter < 100", name="ck_counter_range"),
    )

    op.create_table(
        "csv_imports",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _broker_fk(),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("total_rows", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("imported_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("skipped_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("errors", sa.JSON(), nullable=True),
        sa.Column("imported_by", sa.String(length=36), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_csv_imports_broker_id", "csv_imports", ["broker_id"])
    op.create_index("idx_csv_imports_created_at", "csv_imports", ["created_at"])


def downgrade() -> None:
    op.drop_table("csv_imports")
    op.drop_table("lead_distribution_counter")
    op.drop_table("lead_distribution_allocations")
    op.drop_table("leads")
    op.drop_table("team_members")
    op.drop_table("brokers")
