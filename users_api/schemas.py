"""Pydantic models for request/response schemas."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class UpsertUser(BaseModel):
    """Request body for creating or replacing a user."""
    email: str = Field(..., description="User email address (unique key)")
    password: str = Field(..., description="User password, stored as given")
    fullname: str = Field(..., description="User full name")
    role: str = Field(..., description="User role")


class User(BaseModel):
    """Stored user record."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Store-assigned identifier")
    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    fullname: str = Field(..., description="User full name")
    role: str = Field(..., description="User role")


class MessageResponse(BaseModel):
    """Confirmation body, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for conflicts, missing users and bad input."""
    error: str


class UserError(str, Enum):
    """Expected outcomes of user operations that did not produce a record."""
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
