"""Pydantic request/response schemas for the showtracker API.

Request models reject what the upstream lookup cannot use: a missing or
empty query, a missing, zero, or non-integer id.  FastAPI turns a failed
validation into ``RequestValidationError``, which the handler in
``showtracker.api.middleware`` renders as HTTP 400 ``{"error": ...}``.

Successful lookups are not described by a response model: the body is the
upstream JSON passed through byte for byte.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt, field_validator


class SearchRequest(BaseModel):
    """Body of ``POST /tv/search``."""

    query: str = Field(..., min_length=1, description="Free-text TV show title query")


class DetailsRequest(BaseModel):
    """Body of ``POST /tv/details``."""

    id: StrictInt = Field(..., description="TMDB TV show id")

    @field_validator("id")
    @classmethod
    def _id_not_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("id is required")
        return value


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    upstream: str
    upstream_available: bool = Field(
        description="Whether the upstream fetcher has the credentials it needs",
    )
    caches: dict[str, int] = Field(
        default_factory=dict,
        description="Number of cached entries per namespace",
    )
