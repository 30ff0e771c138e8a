"""create users, books, borrow_requests and borrow_history tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ---- users -------------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    # ---- books -------------------------------------------------------------
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=400), nullable=False),
        sa.Column("author", sa.String(length=240), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # ---- borrow_requests ---------------------------------------------------
    op.create_table(
        "borrow_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.CheckConstraint(
            "status IN ('Pending', 'Approved', 'Denied')",
            name="ck_borrow_requests_status",
        ),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_borrow_requests_book_id_status",
        "borrow_requests",
        ["book_id", "status"],
        unique=False,
    )
    op.create_index(
        op.f("ix_borrow_requests_user_id"), "borrow_requests", ["user_id"], unique=False
    )

    # ---- borrow_history ----------------------------------------------------
    op.create_table(
        "borrow_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("borrowed_on", sa.DateTime(timezone=True), nullable=False),
        sa.Column("returned_on", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("borrow_history")

    op.drop_index(op.f("ix_borrow_requests_user_id"), table_name="borrow_requests")
    op.drop_index("ix_borrow_requests_book_id_status", table_name="borrow_requests")
    op.drop_table("borrow_requests")

    op.drop_table("books")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
