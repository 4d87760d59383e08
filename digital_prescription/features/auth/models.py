# Auth Feature - Models

from typing import Optional, Literal
from beanie import Document, Indexed
from pydantic import EmailStr
from digital_prescription.shared.models import TimestampMixin


Role = Literal["DOCTOR", "PATIENT"]


class User(Document, TimestampMixin):
    """
    User document model.
    Doctors and patients share one collection and are told apart by role.
    """

    username: Indexed(str, unique=True)
    email: Optional[EmailStr] = None
    password_hash: str

    role: Role

    # Doctors receive symptom messages whose disease type matches this value
    specialization: Optional[str] = None

    is_active: bool = True

    class Settings:
        name = "users"
        use_state_management = True
        indexes = [
            [("role", 1), ("specialization", 1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "username": "dr.house",
                "email": "house@example.com",
                "role": "DOCTOR",
                "specialization": "Cardiology",
            }
        }
