"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., max_length=255, description="Username")
    password: str = Field(..., max_length=128, description="Password")


class LoginResponse(BaseModel):
    """JWT returned after successful login."""

    message: str = Field(default="Login successful")
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")


class CurrentUser(BaseModel):
    """Authenticated identity (id, username, role) decoded from the bearer token."""

    id: int
    username: str
    role: str

    class Config:
        from_attributes = True
