"""Pydantic schemas for API validation."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class Tag(BaseModel):
    """Schema for tag response."""
    id: int
    tag: str
    count: int

    class Config:
        from_attributes = True


class UpsertRequest(BaseModel):
    """Schema for submitting tags."""
    tags: List[str]


class UpsertResponse(BaseModel):
    """Schema for the result of submitting tags."""
    message: str
    count: int


class MessageResponse(BaseModel):
    """Schema for a plain confirmation message."""
    message: str


class DatabaseStatus(BaseModel):
    """Schema for the database liveness check."""
    success: bool
    time: datetime


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    error: str
    details: Optional[str] = None
