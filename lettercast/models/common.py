"""
Common response models.

Small response bodies shared by the auxiliary endpoints.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Literal

from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Acknowledgement body."""

    status: str


class HealthResponse(BaseModel):
    """Health check body."""

    status: Literal["healthy", "degraded"]
    checks: dict[str, str]


class PromptTemplateInfo(BaseModel):
    """Public description of one persona template."""

    id: str
    name: str
    description: str


class PurgeResponse(BaseModel):
    """Result of purging expired cache entries."""

    purged: int
