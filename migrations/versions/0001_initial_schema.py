"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-01-12

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)

    # Books
    op.create_table(
        "books",
        sa.Column("openlibraryid", sa.String(length=32), nullable=False),
        sa.Column("isbn", sa.String(length=32), nullable=True),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("author", sa.String(length=300), nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("publisher", sa.String(length=200), nullable=True),
        sa.Column("language", sa.String(length=16), nullable=True),
        sa.Column("pages", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("openlibraryid"),
    )
    with op.batch_alter_table("books", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_books_isbn"), ["isbn"], unique=False)
        batch_op.create_index(batch_op.f("ix_books_title"), ["title"], unique=False)

    # Stock
    op.create_table(
        "stock",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("openlibraryid", sa.String(length=32), nullable=False),
        sa.Column("quality", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity >= 0", name="ck_stock_quantity_nonneg"),
        sa.CheckConstraint("quality BETWEEN 1 AND 5", name="ck_stock_quality_range"),
        sa.ForeignKeyConstraint(["openlibraryid"], ["books.openlibraryid"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("openlibraryid", "quality", name="uq_stock_olid_quality"),
    )
    with op.batch_alter_table("stock", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_stock_openlibraryid"), ["openlibraryid"], unique=False)

    # Wishlist
    op.create_table(
        "wishlist",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("openlibraryid", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("author", sa.String(length=300), nullable=False),
        sa.Column("cover_url", sa.String(length=500), nullable=True),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "openlibraryid", name="uq_wishlist_user_olid"),
    )
    with op.batch_alter_table("wishlist", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_wishlist_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_wishlist_openlibraryid"), ["openlibraryid"], unique=False)

    # Rentals
    op.create_table(
        "rentals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("stock_id", sa.Integer(), nullable=False),
        sa.Column("start_at", sa.DateTime(), nullable=True),
        sa.Column("end_at", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("note", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("decided_at", sa.DateTime(), nullable=True),
        sa.Column("decided_by", sa.Integer(), nullable=True),
        sa.Column("returned_at", sa.DateTime(), nullable=True),
        sa.Column("returned_by", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'dismissed', 'not_returned', 'completed')",
            name="ck_rentals_status",
        ),
        sa.CheckConstraint(
            "(start_at IS NULL AND end_at IS NULL) OR "
            "(start_at IS NOT NULL AND end_at IS NOT NULL AND end_at > start_at)",
            name="ck_rentals_window",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["stock_id"], ["stock.id"]),
        sa.ForeignKeyConstraint(["decided_by"], ["users.id"]),
        sa.ForeignKeyConstraint(["returned_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("rentals", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_rentals_user_id"), ["user_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_rentals_stock_id"), ["stock_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_rentals_status"), ["status"], unique=False)
        batch_op.create_index(batch_op.f("ix_rentals_end_at"), ["end_at"], unique=False)


def downgrade():
    op.drop_table("rentals")
    op.drop_table("wishlist")
    op.drop_table("stock")
    op.drop_table("books")
    op.drop_table("users")
