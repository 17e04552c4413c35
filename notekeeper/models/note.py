"""
NoteKeeper Backend: Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key generated in Python: works unchanged on PostgreSQL
      and on the SQLite database used by the test suite
    - owner: opaque user id from the auth token, indexed for "my notes"
    - author: free-text attribution, unrelated to owner
    - created_at: UTC with timezone, never a naive datetime
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A short text note owned by one user.

    Lifecycle:
        1. Created by its owner (id and created_at assigned here)
        2. Partially updated by its owner (title/content/author only)
        3. Deleted by its owner
    `owner`, `id` and `created_at` never change after insert.
    """

    __tablename__ = "notes"

    # Mutable through a partial update; everything else is fixed at insert
    EDITABLE_FIELDS = ("title", "content", "author")

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned at insert",
    )

    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User id of the creator, taken from the auth token",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Free-text attribution shown with the note",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    # "My notes" filters on owner on every call
    __table_args__ = (
        Index("idx_notes_owner", "owner"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, owner='{self.owner}', title='{self.title}')>"
