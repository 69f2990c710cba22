"""
Pydantic schemas for authentication and profile endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password (min 6 characters)")
    full_name: str = Field(..., min_length=1, max_length=200, description="User's full name")
    education_level: str = Field(..., min_length=1, max_length=100, description="Highest completed education level")
    current_gpa: float = Field(..., ge=0.0, le=4.0, description="Current GPA on a 4.0 scale")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        password_bytes = v.encode("utf-8")
        if len(password_bytes) > 72:
            raise ValueError("Password must be 72 characters or fewer")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "full_name": "Jane Doe",
                "education_level": "Bachelor's",
                "current_gpa": 3.4
            }
        }


class ProfileUpdate(BaseModel):
    """Schema for updating the signed-in user's profile."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    education_level: Optional[str] = Field(None, min_length=1, max_length=100)
    current_gpa: Optional[float] = Field(None, ge=0.0, le=4.0)

    @field_validator("full_name")
    @classmethod
    def full_name_not_null(cls, v: Optional[str]) -> str:
        """Only runs for values the client sent; an explicit null cannot clear the name."""
        if v is None:
            raise ValueError("Full name cannot be empty")
        return v


class ProfileResponse(BaseModel):
    id: int
    full_name: str
    education_level: Optional[str] = None
    current_gpa: Optional[float] = None

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Current identity and profile, returned by sign-up, sign-in and session restore."""
    user_id: int = Field(..., description="Authenticated user ID")
    email: str = Field(..., description="Authenticated user email")
    is_admin: bool = Field(False, description="Whether the user may import catalog data")
    profile: Optional[ProfileResponse] = Field(None, description="User profile")
    access_token: Optional[str] = Field(None, description="Bearer token for subsequent requests")
    token_type: str = "bearer"
