# Prescriptions Feature - Service

from typing import List, Optional, Tuple
from datetime import date
from beanie import PydanticObjectId
from beanie.operators import In
from bson.errors import InvalidId
from pymongo.errors import PyMongoError
from digital_prescription.features.prescriptions.models import Prescription, MedicationCourse
from digital_prescription.features.prescriptions.schemas import (
    MedicationLine,
    RespondRequest,
    PrescriptionCreate,
    MedicationCourseResponse,
    PrescriptionResponse,
)
from digital_prescription.features.reminders.models import ReminderRecord
from digital_prescription.features.reminders.schedule import derive_end_date
from digital_prescription.features.side_effects.models import SideEffectLog
from digital_prescription.features.messages.service import MessageService
from digital_prescription.features.auth.models import User
from digital_prescription.features.auth.service import AuthService
from digital_prescription.core.logging import logger
from digital_prescription.shared.exceptions import (
    NotFoundException,
    ForbiddenException,
    BadRequestException,
)


class PrescriptionService:
    """Service class for issuing prescriptions and their medication courses."""

    @staticmethod
    def course_to_response(course: MedicationCourse) -> MedicationCourseResponse:
        """Convert MedicationCourse document to response schema."""
        return MedicationCourseResponse(
            id=str(course.id),
            prescription_id=course.prescription_id,
            patient_id=course.patient_id,
            medication_name=course.medication_name,
            dosage_timing=course.dosage_timing,
            duration_days=course.duration_days,
            start_date=course.start_date,
            end_date=course.end_date,
        )

    @staticmethod
    async def prescription_to_response(
        prescription: Prescription,
        courses: Optional[List[MedicationCourse]] = None
    ) -> PrescriptionResponse:
        """Convert Prescription document to response schema, loading its courses if not given."""
        if courses is None:
            courses = await MedicationCourse.find(
                MedicationCourse.prescription_id == str(prescription.id)
            ).sort([("created_at", 1)]).to_list()

        doctor = await AuthService.get_user_by_id(prescription.doctor_id)

        return PrescriptionResponse(
            id=str(prescription.id),
            doctor_id=prescription.doctor_id,
            doctor_name=doctor.username if doctor else None,
            patient_id=prescription.patient_id,
            message_id=prescription.message_id,
            diagnosis=prescription.diagnosis,
            issued_at=prescription.issued_at,
            medications=[PrescriptionService.course_to_response(c) for c in courses],
        )

    @staticmethod
    def build_course(prescription: Prescription, line: MedicationLine, today: date) -> MedicationCourse:
        """
        Build the course for one medication line.

        Raises:
            ValueError: If the line has no medication name
        """
        name = (line.medication_name or "").strip()
        if not name:
            raise ValueError("medication name is required")

        start_date = line.start_date or today

        return MedicationCourse(
            prescription_id=str(prescription.id),
            patient_id=prescription.patient_id,
            medication_name=name,
            dosage_timing=line.dosage_timing,
            duration_days=line.duration_days,
            start_date=start_date,
            end_date=derive_end_date(start_date, line.duration_days),
        )

    @staticmethod
    async def create_courses(
        prescription: Prescription,
        lines: List[MedicationLine],
        today: date
    ) -> Tuple[List[MedicationCourse], List[str]]:
        """
        Create one course per medication line.

        A failing line is recorded and skipped; it never undoes the prescription
        or the lines already created.

        Returns:
            Tuple of (created courses, failure descriptions)
        """
        courses = []
        failures = []

        for position, line in enumerate(lines, start=1):
            try:
                course = PrescriptionService.build_course(prescription, line, today)
                await course.insert()
            except (ValueError, PyMongoError) as e:
                failures.append(f"line {position}: {e}")
                continue
            courses.append(course)

        for failure in failures:
            logger.warning(f"Prescription {prescription.id}: skipped medication {failure}")

        return courses, failures

    @staticmethod
    async def issue_prescription(
        doctor: User,
        patient_id: str,
        request: RespondRequest,
        today: date,
        message_id: Optional[str] = None
    ) -> PrescriptionResponse:
        """
        Issue a prescription with its medication courses.

        Args:
            doctor: Issuing doctor
            patient_id: Patient user ID
            request: Diagnosis and medication lines
            today: Default start date for lines without one
            message_id: Symptom message being answered, if any

        Raises:
            NotFoundException: If the patient does not exist
        """
        await AuthService.get_patient(patient_id)

        prescription = Prescription(
            doctor_id=str(doctor.id),
            patient_id=patient_id,
            message_id=message_id,
            diagnosis=request.diagnosis,
        )
        await prescription.insert()

        courses, failures = await PrescriptionService.create_courses(
            prescription, request.medications, today
        )

        logger.info(
            f"Doctor {doctor.username} issued prescription {prescription.id} to patient {patient_id} "
            f"with {len(courses)} medication(s), {len(failures)} skipped"
        )

        return await PrescriptionService.prescription_to_response(prescription, courses)

    @staticmethod
    async def create_prescription(doctor: User, request: PrescriptionCreate, today: date) -> PrescriptionResponse:
        """Issue a prescription directly to a patient."""
        return await PrescriptionService.issue_prescription(
            doctor, request.patient_id, request, today
        )

    @staticmethod
    async def respond_to_message(
        doctor: User,
        message_id: str,
        request: RespondRequest,
        today: date
    ) -> PrescriptionResponse:
        """
        Answer a routed symptom message with a prescription for its sender.

        Raises:
            NotFoundException: If the message does not exist
            ForbiddenException: If the message was routed to another specialization
            BadRequestException: If the message has already been answered
        """
        message = await MessageService.get_message(message_id)

        if message.specialization != doctor.specialization:
            raise ForbiddenException("Message was routed to another specialization")

        if message.is_resolved:
            raise BadRequestException("Message has already been answered")

        response = await PrescriptionService.issue_prescription(
            doctor, message.sender_id, request, today, message_id=str(message.id)
        )

        await MessageService.resolve(message)

        return response

    @staticmethod
    async def get_prescriptions_for_patient(patient_id: str) -> List[PrescriptionResponse]:
        """Get all prescriptions of a patient, newest first."""
        prescriptions = await Prescription.find(
            Prescription.patient_id == patient_id
        ).sort([("issued_at", -1)]).to_list()

        return [await PrescriptionService.prescription_to_response(p) for p in prescriptions]

    @staticmethod
    async def get_prescription(prescription_id: str, user: User) -> Prescription:
        """
        Get a prescription by ID with access check.

        Only the issuing doctor and the patient it was issued to can see it.

        Raises:
            NotFoundException: If prescription not found or access denied
        """
        try:
            prescription = await Prescription.get(PydanticObjectId(prescription_id))
        except (InvalidId, TypeError):
            raise NotFoundException("Prescription not found")

        if not prescription:
            raise NotFoundException("Prescription not found")

        user_id = str(user.id)
        if user_id not in (prescription.doctor_id, prescription.patient_id):
            raise NotFoundException("Prescription not found")

        return prescription

    @staticmethod
    async def delete_prescription(prescription_id: str, doctor: User) -> int:
        """
        Delete a prescription together with its courses, their reminders and
        the side effects logged against them.

        Returns:
            Number of medication courses deleted

        Raises:
            ForbiddenException: If the doctor did not issue the prescription
        """
        prescription = await PrescriptionService.get_prescription(prescription_id, doctor)

        if prescription.doctor_id != str(doctor.id):
            raise ForbiddenException("Only the issuing doctor can delete a prescription")

        courses = await MedicationCourse.find(
            MedicationCourse.prescription_id == str(prescription.id)
        ).to_list()
        course_ids = [str(c.id) for c in courses]

        if course_ids:
            await ReminderRecord.find(In(ReminderRecord.medication_id, course_ids)).delete()
            await SideEffectLog.find(In(SideEffectLog.medication_id, course_ids)).delete()
            await MedicationCourse.find(
                MedicationCourse.prescription_id == str(prescription.id)
            ).delete()

        await prescription.delete()

        logger.info(f"Deleted prescription {prescription_id} and {len(course_ids)} medication course(s)")

        return len(course_ids)
