"""
Words API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the HTTP contract for the words collection.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these to parse request bodies and serialize responses.

Validation:
    WordCreate only enforces shape: a JSON object whose fields, when present,
    are strings. Absence, emptiness and length are left to the database
    (NOT NULL, VARCHAR(255)), so a missing field fails at insert time.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class WordCreate(BaseModel):
    """Body of POST /words."""

    chinese: Optional[str] = Field(default=None, description="Source-language text")
    pinyin: Optional[str] = Field(default=None, description="Phonetic transcription")
    english: Optional[str] = Field(default=None, description="English translation")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WordResponse(BaseModel):
    """One row of the words table, as returned by GET /words."""

    id: int = Field(description="Database-assigned identifier")
    chinese: str
    pinyin: str
    english: str

    model_config = {"from_attributes": True}


class WordCreatedResponse(BaseModel):
    """
    Returned by POST /words with HTTP 201.

    The created row and its id are intentionally not echoed.
    """

    status: Literal["success"] = "success"
    message: str = Field(default="Word added.", description="Human-readable result")


class ErrorResponse(BaseModel):
    """
    Generic error body for storage failures.

    Carries no driver message, SQL or constraint name.
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
