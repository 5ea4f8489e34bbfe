"""create accounts and audio_files tables

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    op.create_table(
        "audio_files",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("s3_key", sa.String(length=1024), nullable=False),
        sa.Column("s3_url", sa.String(length=2048), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=100), nullable=False),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("s3_key", name="uq_audio_files_s3_key"),
        sa.CheckConstraint(
            "category IN ('Music', 'Podcast', 'Audiobook', 'Sound Effect', 'Voice Recording', 'Other')",
            name="ck_audio_files_category",
        ),
    )
    op.create_index("ix_audio_files_owner_id", "audio_files", ["owner_id"])
    op.create_index("ix_audio_files_owner_created", "audio_files", ["owner_id", "created_at"])
    op.create_index("ix_audio_files_owner_file_name", "audio_files", ["owner_id", "file_name"])


def downgrade() -> None:
    op.drop_index("ix_audio_files_owner_file_name", table_name="audio_files")
    op.drop_index("ix_audio_files_owner_created", table_name="audio_files")
    op.drop_index("ix_audio_files_owner_id", table_name="audio_files")
    op.drop_table("audio_files")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
