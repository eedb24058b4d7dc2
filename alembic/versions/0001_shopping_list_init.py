"""shopping list init

Revision ID: 0001_shopping_list_init
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_shopping_list_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "shopping_namespaces",
        sa.Column("namespace", sa.String(length=64), primary_key=True),
        sa.Column("created_ts", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "shopping_items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "namespace",
            sa.String(length=64),
            sa.ForeignKey("shopping_namespaces.namespace"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_ts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_ns", sa.BigInteger(), nullable=False, server_default="0"),
        sa.UniqueConstraint("namespace", "name", name="uq_shopping_items_namespace_name"),
    )
    op.create_index(
        "ix_shopping_items_namespace_created",
        "shopping_items",
        ["namespace", "created_ns"],
    )


def downgrade() -> None:
    op.drop_index("ix_shopping_items_namespace_created", table_name="shopping_items")
    op.drop_table("shopping_items")
    op.drop_table("shopping_namespaces")
