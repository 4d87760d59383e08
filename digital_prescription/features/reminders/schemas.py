# Reminders Feature - Schemas

from typing import Optional, List
from datetime import date
from pydantic import BaseModel


class MedicationSnapshot(BaseModel):
    """Denormalized copy of the course a reminder belongs to."""
    id: str
    name: str
    dosage_timing: Optional[str] = None
    duration_days: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ReminderView(BaseModel):
    """Response schema for a daily reminder."""
    id: str
    medication: MedicationSnapshot
    taken: bool
    day_number: int = 0
    date: date


class CalendarDay(BaseModel):
    """One day of a course calendar."""
    day_number: int
    taken: bool = False
    recorded: bool = False  # a reminder row exists for this day
    date: date


class CourseCalendarResponse(BaseModel):
    """Read-only view of every day in a course window."""
    medication: MedicationSnapshot
    days: List[CalendarDay]
    days_taken: int
