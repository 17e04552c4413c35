"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `notes` table holding every user's notes.
How:   Portable column types (UUID, TIMESTAMP WITH TIME ZONE) plus an index
       on owner for the "my notes" listing.

Rollback: downgrade() drops the table entirely (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table; see notekeeper/models/note.py for column docs."""
    op.create_table(
        "notes",
        # Generated by the application (uuid4) on insert
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Unique identifier assigned at insert",
        ),
        sa.Column(
            "owner",
            sa.String(255),
            nullable=False,
            comment="User id of the creator, taken from the auth token",
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "author",
            sa.String(255),
            nullable=False,
            comment="Free-text attribution shown with the note",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_notes_owner", "notes", ["owner"])


def downgrade() -> None:
    """Drop the notes table. WARNING: all note data is lost."""
    op.drop_index("idx_notes_owner", table_name="notes")
    op.drop_table("notes")
