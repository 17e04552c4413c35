# Routes package init
"""
NoteKeeper Backend: API Routes Package
======================================

Route Inventory:
    - notes.py:   /notes/mine, /notes/all, /notes, /notes/{id}
    - health.py:  GET /health

Design Principle:
    Routes are THIN. They resolve the caller and the store through
    dependencies, call NoteService, and shape the response. Errors are
    raised as exceptions and rendered by the handlers in main.py.
"""
