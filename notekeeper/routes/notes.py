"""
NoteKeeper Backend: Notes Route Handlers
========================================

What:  HTTP surface of the six note operations.
How:   Resolves the caller (protected routes), builds the request's
       NoteStore, delegates to NoteService, shapes the JSON response.

Endpoints:
    GET    /notes/mine    protected   caller's notes
    GET    /notes/all     public      every note
    POST   /notes         protected   create
    PUT    /notes/{id}    protected   partial update (owner only)
    DELETE /notes/{id}    protected   delete (owner only)
    GET    /notes/{id}    public      single note

Route order matters: /notes/mine and /notes/all are declared before
/notes/{note_id} so they are not captured as ids.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from notekeeper.auth import get_current_user
from notekeeper.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteDeleteResponse,
    NoteResponse,
    NoteUpdate,
    NoteUpdateResponse,
    ValidationErrorResponse,
)
from notekeeper.services.note_service import note_service
from notekeeper.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

_AUTH_RESPONSES = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Storage error", "model": ErrorResponse}}


@router.get(
    "/mine",
    response_model=List[NoteResponse],
    responses={**_AUTH_RESPONSES, **_SERVER_ERROR},
    summary="List the caller's notes",
)
async def list_my_notes(
    user_id: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = await note_service.list_my_notes(store, user_id)
    return [NoteResponse.model_validate(n) for n in notes]


@router.get(
    "/all",
    response_model=List[NoteResponse],
    responses=_SERVER_ERROR,
    summary="List every note",
)
async def list_all_notes(
    store: NoteStore = Depends(get_note_store),
) -> List[NoteResponse]:
    notes = await note_service.list_all_notes(store)
    return [NoteResponse.model_validate(n) for n in notes]


@router.post(
    "",
    response_model=NoteResponse,
    responses={
        400: {"description": "One or more fields failed validation", "model": ValidationErrorResponse},
        **_AUTH_RESPONSES,
        **_SERVER_ERROR,
    },
    summary="Create a note",
    description=(
        "Creates a note owned by the caller. Title needs at least 3 characters, "
        "content and author at least 5. All violations are reported together."
    ),
)
async def create_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    note = await note_service.create_note(
        store,
        user_id,
        title=payload.title,
        content=payload.content,
        author=payload.author,
    )
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteUpdateResponse,
    responses={
        **_AUTH_RESPONSES,
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Partially update a note",
    description=(
        "Replaces only the supplied fields. Absent or empty fields are left unchanged. "
        "Only the note's owner may update it."
    ),
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = None,
    user_id: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> NoteUpdateResponse:
    fields = payload.supplied_fields() if payload is not None else {}
    note = await note_service.update_note(store, user_id, note_id, fields)
    return NoteUpdateResponse(note=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    response_model=NoteDeleteResponse,
    responses={
        **_AUTH_RESPONSES,
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> NoteDeleteResponse:
    note = await note_service.delete_note(store, user_id, note_id)
    return NoteDeleteResponse(note=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    note = await note_service.get_note(store, note_id)
    return NoteResponse.model_validate(note)
