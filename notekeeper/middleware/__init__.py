# Middleware package init
"""
NoteKeeper Backend: Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the logging middleware and the error handlers
       can read it from the ContextVar
    2. Logging wraps everything below it, so the measured duration covers
       auth, validation and database work

Authentication is not a middleware: it is a route dependency
(notekeeper.auth.get_current_user) because public and protected routes
share the /notes prefix.
"""
