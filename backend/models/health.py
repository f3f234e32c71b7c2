"""
Health check schemas.

Dependencies: pydantic
System role: Health check API contracts
"""

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    environment: str
    version: str


class DatabaseHealthResponse(BaseModel):
    """Database connectivity check response model."""

    status: str
    message: str
