# Services package init
"""
NoteKeeper Backend: Services Layer
==================================

What:  Business logic and persistence access between routes and the database.

Service Inventory:
    - NoteStore: per-request persistence of Note records (one AsyncSession)
    - NoteService: ownership checks, validation and the six note operations

Why services are separate from routes:
    Services can be unit-tested with a mocked store, without HTTP.
"""
