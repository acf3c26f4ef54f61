"""
Anekazoo Animals API - Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the JSON contract of the animals API.
How:   FastAPI validates request bodies against AnimalCreate and serializes
       responses through AnimalResponse (by alias, so `class_` goes out as
       `class`).
Who:   Used by route handlers and returned by the animal store.

Decoding rules:
    Request bodies are decoded strictly: `name` and `class` must be JSON
    strings, `legs` must be a JSON integer. "4", 4.0 and true are all
    rejected for `legs`. Any `id` sent in a body is ignored.
    There is no further validation (empty names, negative legs are accepted).
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AnimalCreate(BaseModel):
    """
    Body of POST /animals and PUT /animals/{id}.

    PUT replaces every field, so both operations share one shape.
    """
    name: str = Field(strict=True, description="Unique animal name")
    class_: str = Field(alias="class", strict=True, description="Taxonomic class, e.g. Mammal")
    legs: int = Field(strict=True, description="Number of legs")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AnimalResponse(BaseModel):
    """Full representation of a stored animal."""
    id: int = Field(description="Store-generated identifier")
    name: str = Field(description="Unique animal name")
    class_: str = Field(alias="class", description="Taxonomic class")
    legs: int = Field(description="Number of legs")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Example:
        {
            "error": "conflict",
            "message": "Animal with this name already exists"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
