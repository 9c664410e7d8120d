"""Pydantic models documenting the HTTP request/response bodies."""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UserCreateBody(BaseModel):
    """Request body for POST /users (OpenAPI documentation only)."""
    lastname: str
    firstname: str
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)


class UserResponse(BaseModel):
    """Response model for a user. Timestamps are RFC 3339 strings."""
    id: str = Field(..., description="User ID (UUID4)")
    lastname: str
    firstname: str
    email: str
    created_at: str
    updated_at: str


class UsersResponse(BaseModel):
    users: list[UserResponse]


class FieldErrorResponse(BaseModel):
    field: str
    tag: str = Field(..., description="Failed constraint, e.g. required, email, min")
    param: str = Field('', description="Constraint parameter, e.g. the minimum length")


class ErrorResponse(BaseModel):
    """Error body returned for every handled domain error."""
    code: int
    message: str
    errors: Optional[list[FieldErrorResponse]] = None
