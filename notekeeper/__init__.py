"""
NoteKeeper Backend: Application Package
=======================================

What: Authenticated note-taking REST API (create, list, update, delete notes).
Who:  Imported by uvicorn (`notekeeper.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Auth dependency (identity)        │  ← Bearer token → user id
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Ownership, validation
    ├─────────────────────────────────────┤
    │          Note Store (Persistence)   │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never talk to the database directly; they hand a per-request
    NoteStore to the NoteService, which owns every business rule.
"""

__version__ = "1.0.0"
