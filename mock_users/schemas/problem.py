"""Error Body Schemas: Pydantic models documenting the failure payloads.

Invariants:
    - ProblemDetails mirrors the problem payload: type, title, status, detail, instance
    - ErrorList mirrors the update-validation payload: {"errors": [...]}

Design Decisions:
    - Used for OpenAPI `responses=` docs on the user routes; bodies themselves are
      rendered by MockUsersError.to_response()
"""

from pydantic import BaseModel, Field


class ProblemDetails(BaseModel):
    """Structured error body returned by create failures."""
    type: str
    title: str
    status: int = Field(ge=400, le=599)
    detail: str
    instance: str


class ErrorList(BaseModel):
    """Validation failures returned by update."""
    errors: list[str]


class HealthResponse(BaseModel):
    """Liveness check body."""
    status: str
    service: str
    version: str
