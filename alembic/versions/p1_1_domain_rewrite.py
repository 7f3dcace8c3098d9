"""Add user and domainrewrite tables

Revision ID: p1_1_domain_rewrite
"""
from alembic import op
import sqlalchemy as sa

revision = "p1_1_domain_rewrite"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("industry", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_user_id", "user", ["id"])
    op.create_index("ix_user_username", "user", ["username"], unique=True)
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "domainrewrite",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("domain", sa.String(255), unique=True, nullable=False),
        sa.Column("portfolio_id", sa.String(64), nullable=False),
        sa.Column("portfolio_path", sa.String(512), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("user.id"), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_domainrewrite_id", "domainrewrite", ["id"])
    op.create_index("ix_domainrewrite_user_id", "domainrewrite", ["user_id"])
    op.create_index("ix_domainrewrite_domain_status", "domainrewrite", ["domain", "status"])


def downgrade() -> None:
    op.drop_index("ix_domainrewrite_domain_status", table_name="domainrewrite")
    op.drop_index("ix_domainrewrite_user_id", table_name="domainrewrite")
    op.drop_index("ix_domainrewrite_id", table_name="domainrewrite")
    op.drop_table("domainrewrite")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_index("ix_user_id", table_name="user")
    op.drop_table("user")
