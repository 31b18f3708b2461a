"""
Note Schemas

Pydantic models for Note API request/response validation.
Create and update share one payload: both always replace title and content.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from notes_service.models.note import TITLE_MAX_LENGTH


class NotePayload(BaseModel):
    """
    Request body for POST /notes and PUT /notes/{id}.

    Both fields are required and must contain non-whitespace text.
    Values are stored trimmed.
    """

    title: str = Field(..., max_length=TITLE_MAX_LENGTH, description="Note title")
    content: str = Field(..., description="Note content")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value


class NoteRead(BaseModel):
    """Full Note representation including both timestamps."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)  # Enables ORM model conversion


class NoteList(BaseModel):
    """Response for GET /notes, newest note first."""

    notes: list[NoteRead]


class DeleteResponse(BaseModel):
    message: str = "Note deleted successfully"
