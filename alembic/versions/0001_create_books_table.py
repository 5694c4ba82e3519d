from alembic import op
import sqlalchemy as sa


revision = "0001_create_books"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=100), nullable=False),
        sa.Column("isbn", sa.String(length=17), nullable=False),
        sa.Column("publication_year", sa.Integer(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_books_id", "books", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_books_id", table_name="books")
    op.drop_table("books")
