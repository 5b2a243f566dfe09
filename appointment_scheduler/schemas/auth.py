"""
Pydantic schemas for authentication endpoints
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Request body for customer registration."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "password": "secret123"
        }
    })


class LoginRequest(BaseModel):
    """Request body for login."""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str


class TokenResponse(BaseModel):
    """Response with an access token and the user it belongs to."""
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
    details: Optional[dict] = None
