"""
NoteKeeper Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract for notes.
Why:   Typed request parsing, automatic serialization, and OpenAPI docs.

Design Decision:
    Request models only check types. Business rules (minimum lengths) live
    in NoteService so they are enforced, and reported as one list of
    violations, no matter who calls the service.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /notes.

    Fields are not type-checked here: a missing, null or non-string value
    fails its rule in the service, so it lands in the same error list as
    too-short values instead of hiding them.
    """
    title: Any = Field(
        default=None,
        json_schema_extra={"type": "string"},
        description="Note title (min 3 characters)",
    )
    content: Any = Field(
        default=None,
        json_schema_extra={"type": "string"},
        description="Note body (min 5 characters)",
    )
    author: Any = Field(
        default=None,
        json_schema_extra={"type": "string"},
        description="Attribution (min 5 characters)",
    )


class NoteUpdate(BaseModel):
    """
    Body of PUT /notes/{id}. Every field is optional.

    Absent, null and empty values are treated as "leave unchanged".
    """
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None

    def supplied_fields(self) -> Dict[str, str]:
        """Returns only the fields the client actually wants to change."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, returned by every note endpoint."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    owner: str = Field(description="User id of the note's creator")
    title: str
    content: str
    author: str
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class NoteUpdateResponse(BaseModel):
    """Returned by PUT /notes/{id}."""
    note: NoteResponse


class NoteDeleteResponse(BaseModel):
    """Returned by DELETE /notes/{id}: confirmation plus the removed note."""
    success: str = Field(default="Note has been deleted")
    note: NoteResponse


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    field: str = Field(description="Name of the offending body field")
    message: str = Field(description="Human-readable rule description")
    value: Optional[Any] = Field(default=None, description="Value that was rejected")
    location: str = Field(default="body")


class ValidationErrorResponse(BaseModel):
    """400 body: every violated field, not just the first one."""
    errors: List[FieldError]


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-validation error.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
