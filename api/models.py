"""
Pydantic request/response models for the fact store API.

Vote counters keep their camelCase column names on the wire.  Request models
only describe the shape of the body; content rules (text length, URL scheme,
known category) are enforced by the board client before it submits.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class FactCreate(BaseModel):
    """Body of POST /api/v1/facts.  Vote counters are always server-initialized."""
    text: str = Field(..., description="The factual claim", examples=["The Eiffel Tower can be 15 cm taller during summer."])
    source: str = Field(..., description="Link backing the claim", examples=["https://www.toureiffel.paris/en"])
    category: str = Field(..., description="Category name from GET /api/v1/categories", examples=["science"])


class FactOut(BaseModel):
    """A stored fact with its vote counters."""
    id: int = Field(..., description="Store-assigned unique ID", examples=[42])
    created_at: str | None = Field(None, description="Creation timestamp (UTC, ISO 8601)")
    text: str = Field(..., description="The factual claim")
    source: str = Field(..., description="Link backing the claim")
    category: str = Field(..., description="Category name", examples=["science"])
    votesInteresting: int = Field(0, ge=0, description="'Interesting' votes", examples=[24])
    votesMindblowing: int = Field(0, ge=0, description="'Mind-blowing' votes", examples=[9])
    votesFalse: int = Field(0, ge=0, description="'False' votes", examples=[4])


class CategoryOut(BaseModel):
    """A topical category and its display color."""
    name: str = Field(..., description="Unique category key", examples=["science"])
    color: str = Field(..., description="Display color (CSS hex)", examples=["#16a34a"])


class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Bad request"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[400])
