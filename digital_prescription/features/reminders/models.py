# Reminders Feature - Models

from datetime import date
from beanie import Document, Indexed
from pymongo import ASCENDING, IndexModel
from digital_prescription.shared.models import TimestampMixin


class ReminderRecord(Document, TimestampMixin):
    """
    Reminder document model.
    Whether a patient took a course's dose on one calendar day.
    At most one record exists per (medication_id, reminder_date).
    """

    medication_id: Indexed(str)
    patient_id: Indexed(str)

    reminder_date: date
    taken: bool = False

    # 1-based index into the course; 0 when the date is outside [1, duration_days]
    day_number: int = 0

    class Settings:
        name = "reminders"
        use_state_management = True
        indexes = [
            IndexModel(
                [("medication_id", ASCENDING), ("reminder_date", ASCENDING)],
                name="medication_date_unique",
                unique=True,
            ),
            [("patient_id", 1), ("reminder_date", 1)],
        ]
