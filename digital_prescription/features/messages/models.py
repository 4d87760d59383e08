# Messages Feature - Models

from typing import Optional
from datetime import datetime
from beanie import Document, Indexed
from pydantic import Field
from digital_prescription.shared.models import TimestampMixin, utc_now


class SymptomMessage(Document, TimestampMixin):
    """
    Symptom message document model.
    A patient's report, routed to every doctor of one specialization.
    """

    # Patient who submitted the report
    sender_id: Indexed(str)
    sender_name: str

    # Any doctor of the specialization may answer; receiver_id is the first one found
    specialization: Indexed(str)
    receiver_id: str

    content: str
    severity: Optional[str] = None  # HIGH, MEDIUM, LOW
    sent_at: datetime = Field(default_factory=utc_now)

    # Set once a doctor responds with a prescription
    is_resolved: bool = False

    class Settings:
        name = "messages"
        use_state_management = True
        indexes = [
            [("specialization", 1), ("is_resolved", 1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "sender_id": "665f1c2e9b1e8a3d4c5b6a71",
                "sender_name": "jane",
                "specialization": "Cardiology",
                "receiver_id": "665f1c2e9b1e8a3d4c5b6a72",
                "content": "Chest tightness after climbing stairs",
                "severity": "HIGH",
                "is_resolved": False,
            }
        }
