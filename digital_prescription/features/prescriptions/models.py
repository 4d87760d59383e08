# Prescriptions Feature - Models

from typing import Optional
from datetime import date, datetime
from beanie import Document, Indexed
from pydantic import Field
from digital_prescription.shared.models import TimestampMixin, utc_now


class Prescription(Document, TimestampMixin):
    """
    Prescription document model.
    The clinical order a doctor issues to a patient. Owns its medication courses.
    """

    doctor_id: Indexed(str)
    patient_id: Indexed(str)

    # Routed symptom message this prescription answers, if any
    message_id: Optional[str] = None

    diagnosis: Optional[str] = None
    issued_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "prescriptions"
        use_state_management = True
        indexes = [
            [("patient_id", 1), ("issued_at", -1)],
        ]


class MedicationCourse(Document, TimestampMixin):
    """
    Medication course document model.
    One prescribed regimen: what to take, when during the day, and for how many days.
    Immutable once created, apart from the start date backfill done by reminders.
    """

    prescription_id: Indexed(str)
    patient_id: Indexed(str)

    medication_name: str
    dosage_timing: Optional[str] = None  # e.g. "Morning, Night"

    # 0 means no defined course length; treated as a single day
    duration_days: int = 0

    start_date: Optional[date] = None
    end_date: Optional[date] = None  # start_date + duration_days

    class Settings:
        name = "medication_courses"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "prescription_id": "665f1c2e9b1e8a3d4c5b6a70",
                "patient_id": "665f1c2e9b1e8a3d4c5b6a71",
                "medication_name": "Amoxicillin 500mg",
                "dosage_timing": "Morning, Night",
                "duration_days": 5,
                "start_date": "2024-01-01",
                "end_date": "2024-01-06",
            }
        }
