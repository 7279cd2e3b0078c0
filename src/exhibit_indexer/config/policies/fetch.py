"""Policy for the default file-content retrieval collaborator."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FetchPolicy(BaseModel):
    """HTTP settings applied when fetching full-text files."""

    request_timeout_seconds: float = Field(default=20.0, ge=1.0)
    user_agent: str = Field(default="ExhibitIndexer/1.0", min_length=3)
    encoding: str | None = Field(
        default="utf-8",
        description="Encoding forced onto responses; None keeps the server declared one.",
    )


__all__ = ["FetchPolicy"]
