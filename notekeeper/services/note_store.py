"""
NoteKeeper Backend: Note Store (Persistence)
============================================

What:  Keyed storage of Note records with lookup by id and by owner.
How:   Thin wrapper around one AsyncSession. Writes are flushed, not
       committed; get_db_session commits once the request succeeds.
Who:   Created per request by the get_note_store dependency and handed to
       NoteService.

Error Handling:
    Every SQLAlchemy failure is wrapped in StorageError with the operation
    name in its context. A malformed identifier (not a UUID) is also a
    StorageError: the id reached the store, which cannot address it.
    Missing records are signalled with None, never with an exception.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends
from sqlalchemy import asc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.database import get_db_session
from notekeeper.exceptions import StorageError
from notekeeper.models.note import Note

logger = logging.getLogger(__name__)

NoteId = Union[str, uuid.UUID]


def _parse_id(note_id: NoteId) -> uuid.UUID:
    if isinstance(note_id, uuid.UUID):
        return note_id
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        raise StorageError(
            message="Malformed note identifier",
            context={"note_id": str(note_id), "operation": "parse_id"},
        )


def _snapshot(note: Note) -> Note:
    """Detached copy of a note, readable after the row is gone."""
    return Note(
        id=note.id,
        owner=note.owner,
        title=note.title,
        content=note.content,
        author=note.author,
        created_at=note.created_at,
    )


class NoteStore:
    """
    Durable storage of notes for a single database session.

    Operations:
        insert, find_by_id, find_by_owner, find_all, update_by_id, delete_by_id
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _failed(self, operation: str, exc: Exception, **context: Any) -> StorageError:
        logger.error("Note store %s failed: %s", operation, exc, exc_info=True)
        context.update(operation=operation, original_error=type(exc).__name__)
        return StorageError(context=context)

    async def insert(self, note: Note) -> Note:
        """
        Persists a new note and returns it with id and created_at assigned.

        Raises:
            StorageError: The flush failed
        """
        try:
            self.session.add(note)
            # id and created_at defaults are filled in on flush
            await self.session.flush()
            return note
        except SQLAlchemyError as e:
            raise self._failed("insert", e, owner=note.owner)

    async def find_by_id(self, note_id: NoteId) -> Optional[Note]:
        nid = _parse_id(note_id)
        try:
            return await self.session.get(Note, nid)
        except SQLAlchemyError as e:
            raise self._failed("find_by_id", e, note_id=str(nid))

    async def find_by_owner(self, owner_id: str) -> List[Note]:
        """All notes owned by `owner_id`, oldest first."""
        try:
            result = await self.session.execute(
                select(Note).where(Note.owner == owner_id).order_by(asc(Note.created_at))
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failed("find_by_owner", e, owner=owner_id)

    async def find_all(self) -> List[Note]:
        try:
            result = await self.session.execute(select(Note).order_by(asc(Note.created_at)))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failed("find_all", e)

    async def update_by_id(self, note_id: NoteId, fields: Dict[str, Any]) -> Optional[Note]:
        """
        Merges the supplied fields into the stored note.

        Only editable fields (title, content, author) are applied; anything
        else in `fields` is ignored, so owner/id/created_at cannot change.

        Returns:
            The updated note, or None if no note has this id.
        """
        note = await self.find_by_id(note_id)
        if note is None:
            return None
        try:
            for name in Note.EDITABLE_FIELDS:
                if name in fields:
                    setattr(note, name, fields[name])
            await self.session.flush()
            return note
        except SQLAlchemyError as e:
            raise self._failed("update_by_id", e, note_id=str(note_id))

    async def delete_by_id(self, note_id: NoteId) -> Optional[Note]:
        """
        Removes a note.

        Returns:
            A detached copy of the note as it was just before deletion, or
            None if no note has this id.
        """
        note = await self.find_by_id(note_id)
        if note is None:
            return None
        deleted = _snapshot(note)
        try:
            await self.session.delete(note)
            await self.session.flush()
            return deleted
        except SQLAlchemyError as e:
            raise self._failed("delete_by_id", e, note_id=str(note_id))


async def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """FastAPI dependency: a NoteStore bound to the request's session."""
    return NoteStore(db)
