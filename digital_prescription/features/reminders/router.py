# Reminders Feature - Router

from typing import List
from datetime import date
from fastapi import APIRouter, Depends
from digital_prescription.features.reminders.schemas import ReminderView, CourseCalendarResponse
from digital_prescription.features.reminders.service import ReminderService
from digital_prescription.dependencies import get_current_patient, get_today
from digital_prescription.features.auth.models import User


router = APIRouter(prefix="/reminders", tags=["Medication Reminders"])


@router.get("/today", response_model=List[ReminderView])
async def get_today_reminders(
    current_patient: User = Depends(get_current_patient),
    today: date = Depends(get_today)
):
    """
    Get today's medication reminders for the current patient.

    Reminders for courses that are due today but have no row yet are created
    on the fly. Calling this repeatedly on the same day returns the same rows.

    Requires patient authentication.
    """
    return await ReminderService.get_due_reminders(str(current_patient.id), today)


@router.post("/{medication_id}/mark-taken", response_model=ReminderView)
async def mark_taken(
    medication_id: str,
    current_patient: User = Depends(get_current_patient),
    today: date = Depends(get_today)
):
    """
    Mark today's dose of a medication as taken.

    Requires patient authentication.
    """
    return await ReminderService.mark_taken(
        medication_id=medication_id,
        today=today,
        patient_id=str(current_patient.id),
    )


@router.get("/{medication_id}/calendar", response_model=CourseCalendarResponse)
async def get_course_calendar(
    medication_id: str,
    current_patient: User = Depends(get_current_patient),
    today: date = Depends(get_today)
):
    """
    Get the full day-by-day calendar of a medication course.

    Requires patient authentication.
    """
    return await ReminderService.get_course_calendar(
        medication_id=medication_id,
        today=today,
        patient_id=str(current_patient.id),
    )
