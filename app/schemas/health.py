"""Schema for the GET /health response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability for load balancers."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    version: str = Field(description="User directory API version")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the user database",
    )
    user_count: int | None = Field(
        default=None,
        description="Number of user records; omitted when the database is unreachable",
    )
