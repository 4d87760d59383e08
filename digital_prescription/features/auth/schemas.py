from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional
from datetime import datetime
from digital_prescription.features.auth.models import Role


# Request Schemas
class RegisterRequest(BaseModel):
    """Registration request schema."""

    username: str = Field(..., min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    password: str = Field(..., min_length=6, max_length=100)
    role: Role
    specialization: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def doctor_requires_specialization(self):
        if self.role == "DOCTOR" and not (self.specialization and self.specialization.strip()):
            raise ValueError("Doctors must provide a specialization")
        return self


class LoginRequest(BaseModel):
    """Login request schema."""

    username: str
    password: str


# Response Schemas
class UserResponse(BaseModel):
    """User response schema."""

    id: str
    username: str
    email: Optional[str] = None
    role: Role
    specialization: Optional[str] = None
    is_active: bool
    created_at: datetime


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str
    token_type: str = "bearer"
    role: Role
    user: UserResponse
