"""Initial schema — users, sites, articles, automations, sources.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _site_child(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "site_id", UUID(as_uuid=True),
            sa.ForeignKey(
                "sites.id", ondelete="CASCADE",
                name=f"fk_{table}_site_id_sites",
            ),
            nullable=False,
        ),
        *columns,
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(f"ix_{table}_site_id", table, ["site_id"])


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.Column("tokens_balance", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "sites",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey(
                "users.id", ondelete="CASCADE", name="fk_sites_user_id_users",
            ),
            nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="GENERIC"),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("wp_config", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "url", name="uq_sites_user_id_url"),
    )
    op.create_index("ix_sites_user_id", "sites", ["user_id"])

    _site_child(
        "articles",
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text, nullable=True),
    )
    _site_child(
        "automations",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    _site_child(
        "sources",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("url", sa.Text, nullable=True),
    )


def downgrade() -> None:
    for table in ("sources", "automations", "articles"):
        op.drop_index(f"ix_{table}_site_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_sites_user_id", table_name="sites")
    op.drop_table("sites")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
