"""
NoteKeeper Backend: Note Service (Business Logic)
=================================================

What:  The six note operations: list mine, list all, create, update,
       delete, get by id.
Why:   Keeps ownership and validation rules in one place, independent of HTTP.
How:   Each call receives a per-request NoteStore and, for protected
       operations, the caller's user id resolved by the auth dependency.

Mutation Flow (update / delete):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Exists?    │───▶│  Caller is   │───▶│  Store   │
    │          │    │  else 404   │    │  owner? else │    │  write   │
    └──────────┘    └─────────────┘    │  forbidden   │    └──────────┘
                                       └──────────────┘
    Existence is always checked first, so a nonexistent id is reported as
    not found whoever asks, and ownership of a missing id is never revealed.

Concurrency:
    The check-then-write sequence is not atomic. If the owner deletes the
    note between the checks and the write, the store returns None and the
    caller gets a late NotFoundError. No locking is attempted.

Design Decision:
    NoteService is stateless; the singleton `note_service` is shared by all
    requests.
"""

import logging
from typing import Any, Dict, List, Optional

from notekeeper.exceptions import ForbiddenError, NotFoundError, ValidationError
from notekeeper.models.note import Note
from notekeeper.services.note_store import NoteId, NoteStore

logger = logging.getLogger(__name__)


# (field, minimum length, message)
CREATE_RULES = (
    ("title", 3, "Enter a valid title"),
    ("content", 5, "Content must be atleast 5 characters"),
    ("author", 5, "Description must be atleast 5 characters"),
)


def validate_create(title: Any, content: Any, author: Any) -> None:
    """
    Checks every create rule and reports all violations at once.

    A value that is missing or not a string violates its rule just like a
    too-short one.

    Raises:
        ValidationError: At least one field is missing, not text, or too short
    """
    values = {"title": title, "content": content, "author": author}
    errors: List[Dict[str, Any]] = []
    for field, min_length, message in CREATE_RULES:
        value = values[field]
        if not isinstance(value, str) or len(value) < min_length:
            errors.append({
                "field": field,
                "message": message,
                "value": value,
                "location": "body",
            })
    if errors:
        raise ValidationError(errors=errors)


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        StorageError from the store propagates unchanged. Missing notes
        become NotFoundError, ownership failures ForbiddenError, rule
        violations ValidationError.
    """

    async def list_my_notes(self, store: NoteStore, user_id: str) -> List[Note]:
        return await store.find_by_owner(user_id)

    async def list_all_notes(self, store: NoteStore) -> List[Note]:
        return await store.find_all()

    async def get_note(self, store: NoteStore, note_id: NoteId) -> Note:
        """
        Raises:
            NotFoundError: No note has this id
        """
        note = await store.find_by_id(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def create_note(
        self,
        store: NoteStore,
        user_id: str,
        title: Any,
        content: Any,
        author: Any,
    ) -> Note:
        """
        Validates the fields and stores a new note owned by `user_id`.

        Returns:
            The stored note with its id and created_at assigned

        Raises:
            ValidationError: Lists every violated field
            StorageError: The insert failed
        """
        validate_create(title, content, author)
        note = await store.insert(
            Note(title=title, content=content, author=author, owner=user_id)
        )
        logger.info("Note %s created by %s", note.id, user_id)
        return note

    async def _get_owned_note(self, store: NoteStore, note_id: NoteId, user_id: str) -> Note:
        """
        Two-step guard used before any mutation.

        Raises:
            NotFoundError: Checked first, whoever the caller is
            ForbiddenError: The note exists but belongs to someone else
        """
        note = await self.get_note(store, note_id)
        if note.owner != user_id:
            logger.warning("User %s denied access to note %s", user_id, note.id)
            raise ForbiddenError(context={"note_id": str(note.id), "user_id": user_id})
        return note

    async def update_note(
        self,
        store: NoteStore,
        user_id: str,
        note_id: NoteId,
        fields: Dict[str, Any],
    ) -> Note:
        """
        Applies a partial update. Only supplied fields change and they are
        not re-validated; an empty `fields` leaves the note untouched.

        Raises:
            NotFoundError: No note has this id (also when deleted concurrently)
            ForbiddenError: Caller does not own the note
        """
        await self._get_owned_note(store, note_id, user_id)
        updated = await store.update_by_id(note_id, fields)
        if updated is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s updated by %s (fields: %s)", updated.id, user_id, sorted(fields))
        return updated

    async def delete_note(self, store: NoteStore, user_id: str, note_id: NoteId) -> Note:
        """
        Removes a note owned by the caller.

        Returns:
            The note as it was immediately before deletion

        Raises:
            NotFoundError: No note has this id (also when deleted concurrently)
            ForbiddenError: Caller does not own the note
        """
        await self._get_owned_note(store, note_id, user_id)
        deleted = await store.delete_by_id(note_id)
        if deleted is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s deleted by %s", deleted.id, user_id)
        return deleted


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
