# Side Effects Feature - Models

from typing import Optional
from datetime import date
from beanie import Document, Indexed
from digital_prescription.shared.models import TimestampMixin


class SideEffectLog(Document, TimestampMixin):
    """A side effect a patient noticed while on a medication course."""

    patient_id: Indexed(str)
    medication_id: Indexed(str)

    description: str
    severity: Optional[str] = None  # HIGH, MEDIUM, LOW
    date_logged: date

    class Settings:
        name = "side_effect_logs"
        use_state_management = True
        indexes = [
            [("patient_id", 1), ("date_logged", -1)],
        ]
