"""
NoteKeeper Backend: Note Store Tests
====================================

What:  NoteStore against a real SQLite database (aiosqlite).
Why:   The store is the only code that touches SQL; mocks would hide
       mistakes in queries and flush behaviour.
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from notekeeper.exceptions import StorageError
from notekeeper.models.note import Note
from notekeeper.services.note_store import NoteStore


def _note(owner="alice", title="Trip", content="Went hiking", author="Alice W", **kw):
    return Note(owner=owner, title=title, content=content, author=author, **kw)


class TestInsertAndFind:

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_created_at(self, db_session):
        store = NoteStore(db_session)

        note = await store.insert(_note())

        assert isinstance(note.id, uuid.UUID)
        assert note.created_at is not None
        assert note.owner == "alice"

    @pytest.mark.asyncio
    async def test_insert_keeps_supplied_created_at(self, db_session):
        store = NoteStore(db_session)
        when = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

        note = await store.insert(_note(created_at=when))

        assert note.created_at == when

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, db_session):
        store = NoteStore(db_session)

        first = await store.insert(_note())
        second = await store.insert(_note())

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_find_by_id_round_trip_across_sessions(self, db_session, session_factory):
        inserted = await NoteStore(db_session).insert(_note())
        await db_session.commit()

        async with session_factory() as other:
            found = await NoteStore(other).find_by_id(inserted.id)

        assert found is not None
        assert found.id == inserted.id
        assert (found.owner, found.title, found.content, found.author) == (
            "alice", "Trip", "Went hiking", "Alice W",
        )

    @pytest.mark.asyncio
    async def test_find_by_id_accepts_string_id(self, db_session):
        store = NoteStore(db_session)
        inserted = await store.insert(_note())

        found = await store.find_by_id(str(inserted.id))

        assert found is not None and found.id == inserted.id

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, db_session):
        assert await NoteStore(db_session).find_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_id_malformed_raises_storage_error(self, db_session):
        with pytest.raises(StorageError) as exc_info:
            await NoteStore(db_session).find_by_id("not-a-uuid")

        assert exc_info.value.context["note_id"] == "not-a-uuid"


class TestListing:

    @pytest.mark.asyncio
    async def test_find_by_owner_only_returns_owned_notes(self, db_session):
        store = NoteStore(db_session)
        base = datetime(2024, 1, 15, tzinfo=timezone.utc)
        first = await store.insert(_note(title="First", created_at=base))
        await store.insert(_note(owner="bob", title="Bobs"))
        second = await store.insert(_note(title="Second", created_at=base + timedelta(minutes=1)))

        notes = await store.find_by_owner("alice")

        assert [n.id for n in notes] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_find_by_owner_unknown_user_is_empty(self, db_session):
        assert await NoteStore(db_session).find_by_owner("nobody") == []

    @pytest.mark.asyncio
    async def test_find_all_returns_every_owner(self, db_session):
        store = NoteStore(db_session)
        await store.insert(_note(owner="alice"))
        await store.insert(_note(owner="bob"))

        notes = await store.find_all()

        assert sorted(n.owner for n in notes) == ["alice", "bob"]


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_merges_only_supplied_fields(self, db_session):
        store = NoteStore(db_session)
        note = await store.insert(_note())

        updated = await store.update_by_id(note.id, {"title": "Hike"})

        assert updated.title == "Hike"
        assert updated.content == "Went hiking"
        assert updated.author == "Alice W"

    @pytest.mark.asyncio
    async def test_update_never_changes_owner_or_id(self, db_session):
        store = NoteStore(db_session)
        note = await store.insert(_note())
        original_id = note.id

        updated = await store.update_by_id(
            note.id, {"owner": "mallory", "id": uuid.uuid4(), "content": "Changed text"}
        )

        assert updated.owner == "alice"
        assert updated.id == original_id
        assert updated.content == "Changed text"

    @pytest.mark.asyncio
    async def test_update_with_no_fields_is_a_no_op(self, db_session):
        store = NoteStore(db_session)
        note = await store.insert(_note())

        updated = await store.update_by_id(note.id, {})

        assert (updated.title, updated.content, updated.author) == ("Trip", "Went hiking", "Alice W")

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        assert await NoteStore(db_session).update_by_id(uuid.uuid4(), {"title": "x"}) is None


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_pre_deletion_record(self, db_session):
        store = NoteStore(db_session)
        note = await store.insert(_note())
        note_id = note.id

        deleted = await store.delete_by_id(note_id)

        assert deleted.id == note_id
        assert deleted.title == "Trip"
        assert await store.find_by_id(note_id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_none(self, db_session):
        assert await NoteStore(db_session).delete_by_id(uuid.uuid4()) is None


class TestBackendFailure:
    """Driver errors surface as StorageError with the operation name."""

    def _broken_session(self):
        session = MagicMock()
        boom = OperationalError("SELECT", {}, Exception("database is locked"))
        session.execute = AsyncMock(side_effect=boom)
        session.get = AsyncMock(side_effect=boom)
        session.flush = AsyncMock(side_effect=boom)
        return session

    @pytest.mark.asyncio
    async def test_find_all_failure(self):
        with pytest.raises(StorageError) as exc_info:
            await NoteStore(self._broken_session()).find_all()
        assert exc_info.value.context["operation"] == "find_all"

    @pytest.mark.asyncio
    async def test_find_by_id_failure(self):
        with pytest.raises(StorageError) as exc_info:
            await NoteStore(self._broken_session()).find_by_id(uuid.uuid4())
        assert exc_info.value.context["operation"] == "find_by_id"

    @pytest.mark.asyncio
    async def test_insert_failure(self):
        with pytest.raises(StorageError) as exc_info:
            await NoteStore(self._broken_session()).insert(_note())
        assert exc_info.value.context["operation"] == "insert"
        assert "database is locked" not in exc_info.value.message
