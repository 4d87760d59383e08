# Reminders Feature - Service

from typing import List, Optional, Tuple
from datetime import date
from beanie import PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError
from digital_prescription.features.reminders.models import ReminderRecord
from digital_prescription.features.reminders.schemas import (
    MedicationSnapshot,
    ReminderView,
    CalendarDay,
    CourseCalendarResponse,
)
from digital_prescription.features.reminders.schedule import (
    derive_end_date,
    is_due,
    day_number_for,
    taken_day_number,
    course_dates,
)
from digital_prescription.features.prescriptions.models import MedicationCourse
from digital_prescription.features.auth.service import AuthService
from digital_prescription.core.logging import logger
from digital_prescription.shared.exceptions import NotFoundException


class ReminderService:
    """
    Service class for daily medication reminders.

    Reminder rows are created lazily, only for the date being queried and only
    while that date lies inside the course window. `today` is always passed in.
    """

    @staticmethod
    def course_to_snapshot(course: MedicationCourse) -> MedicationSnapshot:
        """Convert MedicationCourse document to the snapshot embedded in views."""
        return MedicationSnapshot(
            id=str(course.id),
            name=course.medication_name,
            dosage_timing=course.dosage_timing,
            duration_days=course.duration_days,
            start_date=course.start_date,
            end_date=course.end_date,
        )

    @staticmethod
    def reminder_to_view(reminder: ReminderRecord, course: MedicationCourse) -> ReminderView:
        """Convert ReminderRecord document to response schema."""
        return ReminderView(
            id=str(reminder.id),
            medication=ReminderService.course_to_snapshot(course),
            date=reminder.reminder_date,
            taken=reminder.taken,
            day_number=reminder.day_number,
        )

    @staticmethod
    async def get_course(medication_id: str, patient_id: Optional[str] = None) -> MedicationCourse:
        """
        Get a medication course by ID with an optional ownership check.

        Raises:
            NotFoundException: If the course does not exist or belongs to another patient
        """
        try:
            course = await MedicationCourse.get(PydanticObjectId(medication_id))
        except (InvalidId, TypeError):
            raise NotFoundException("Medication not found")

        if not course:
            raise NotFoundException("Medication not found")

        if patient_id and course.patient_id != patient_id:
            raise NotFoundException("Medication not found")

        return course

    @staticmethod
    async def find_reminder(medication_id: str, on: date) -> Optional[ReminderRecord]:
        """Get the reminder row for a course on a date, if one exists."""
        return await ReminderRecord.find_one(
            ReminderRecord.medication_id == medication_id,
            ReminderRecord.reminder_date == on,
        )

    @staticmethod
    async def insert_or_fetch(reminder: ReminderRecord) -> Tuple[ReminderRecord, bool]:
        """
        Insert a new reminder row, or return the row a concurrent request inserted first.

        Returns:
            Tuple of (reminder, created)
        """
        try:
            await reminder.insert()
            return reminder, True
        except DuplicateKeyError:
            logger.info(
                f"Reminder for medication {reminder.medication_id} on {reminder.reminder_date} "
                f"already exists, re-fetching"
            )

        existing = await ReminderService.find_reminder(reminder.medication_id, reminder.reminder_date)
        if existing is None:
            # Unique index fired but the row is gone again; only a concurrent delete can do that
            raise NotFoundException("Medication not found")
        return existing, False

    @staticmethod
    async def backfill_start_date(course: MedicationCourse, today: date) -> MedicationCourse:
        """Give a course without a start date one starting today."""
        course.start_date = today
        if course.end_date is None:
            course.end_date = derive_end_date(today, course.duration_days)
        course.update_timestamp()
        await course.save()

        logger.warning(f"Medication {course.id} had no start date, defaulted to {today}")
        return course

    @staticmethod
    async def get_due_reminders(patient_id: str, today: date) -> List[ReminderView]:
        """
        Get today's reminders for a patient, creating any that are due but missing.

        Args:
            patient_id: Patient user ID
            today: Date to evaluate

        Returns:
            One view per course due on `today`, in course creation order

        Raises:
            NotFoundException: If the patient does not exist
        """
        await AuthService.get_patient(patient_id)

        courses = await MedicationCourse.find(
            MedicationCourse.patient_id == patient_id
        ).sort([("created_at", 1)]).to_list()

        result = []
        created = 0
        for course in courses:
            if course.start_date is None:
                await ReminderService.backfill_start_date(course, today)

            if not is_due(course.start_date, course.end_date, today):
                continue

            medication_id = str(course.id)
            reminder = await ReminderService.find_reminder(medication_id, today)

            if reminder is None:
                reminder, was_created = await ReminderService.insert_or_fetch(ReminderRecord(
                    medication_id=medication_id,
                    patient_id=patient_id,
                    reminder_date=today,
                    taken=False,
                    day_number=day_number_for(course.start_date, course.duration_days, today),
                ))
                created += int(was_created)

            result.append(ReminderService.reminder_to_view(reminder, course))

        logger.info(
            f"Patient {patient_id} has {len(result)} reminder(s) due on {today} "
            f"({created} created, {len(courses)} course(s) checked)"
        )

        return result

    @staticmethod
    async def mark_taken(
        medication_id: str,
        today: date,
        patient_id: Optional[str] = None
    ) -> ReminderView:
        """
        Mark a course's dose for `today` as taken, creating the day's row if needed.

        Args:
            medication_id: Medication course ID
            today: Date the dose was taken
            patient_id: When given, the course must belong to this patient

        Returns:
            The updated reminder

        Raises:
            NotFoundException: If the course does not exist
        """
        course = await ReminderService.get_course(medication_id, patient_id)

        reminder = await ReminderService.find_reminder(medication_id, today)

        if reminder is None:
            reminder, created = await ReminderService.insert_or_fetch(ReminderRecord(
                medication_id=medication_id,
                patient_id=course.patient_id,
                reminder_date=today,
                taken=True,
                day_number=taken_day_number(course.start_date, course.duration_days, today),
            ))
            if created:
                logger.info(f"Created taken reminder for medication {medication_id} on {today}")
                return ReminderService.reminder_to_view(reminder, course)

        reminder.day_number = taken_day_number(
            course.start_date, course.duration_days, today, current=reminder.day_number
        )
        reminder.taken = True
        reminder.update_timestamp()
        await reminder.save()

        logger.info(f"Marked medication {medication_id} taken on {today} (day {reminder.day_number})")

        return ReminderService.reminder_to_view(reminder, course)

    @staticmethod
    async def get_course_calendar(
        medication_id: str,
        today: date,
        patient_id: Optional[str] = None
    ) -> CourseCalendarResponse:
        """
        Get every day of a course with its taken state.

        Read-only: days without a reminder row are reported as not recorded,
        no rows are created. Day numbers are the ones listing would assign, so a
        single-day course shows day 0 even after mark-taken stored day 1.
        """
        course = await ReminderService.get_course(medication_id, patient_id)

        start_date = course.start_date or today
        end_date = course.end_date if course.start_date else derive_end_date(start_date, course.duration_days)

        records = await ReminderRecord.find(
            ReminderRecord.medication_id == medication_id
        ).to_list()
        by_date = {record.reminder_date: record for record in records}

        days = []
        for day in course_dates(start_date, end_date, today):
            record = by_date.get(day)
            days.append(CalendarDay(
                date=day,
                day_number=day_number_for(start_date, course.duration_days, day),
                taken=record.taken if record else False,
                recorded=record is not None,
            ))

        return CourseCalendarResponse(
            medication=ReminderService.course_to_snapshot(course),
            days=days,
            days_taken=sum(1 for day in days if day.taken),
        )
