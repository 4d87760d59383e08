# Side Effects Feature - Service

from typing import List, Optional
from datetime import date
from beanie import PydanticObjectId
from bson.errors import InvalidId
from digital_prescription.features.side_effects.models import SideEffectLog
from digital_prescription.features.side_effects.schemas import SideEffectCreate, SideEffectResponse
from digital_prescription.features.prescriptions.models import MedicationCourse
from digital_prescription.features.reminders.service import ReminderService
from digital_prescription.core.logging import logger
from digital_prescription.shared.exceptions import NotFoundException


class SideEffectService:
    """Service class for side effect logs."""

    @staticmethod
    def log_to_response(log: SideEffectLog, medication_name: Optional[str] = None) -> SideEffectResponse:
        """Convert SideEffectLog document to response schema."""
        return SideEffectResponse(
            id=str(log.id),
            patient_id=log.patient_id,
            medication_id=log.medication_id,
            medication_name=medication_name,
            description=log.description,
            severity=log.severity,
            date_logged=log.date_logged,
            created_at=log.created_at,
        )

    @staticmethod
    async def create_log(patient_id: str, data: SideEffectCreate, today: date) -> SideEffectResponse:
        """
        Log a side effect against one of the patient's medication courses.

        Raises:
            NotFoundException: If the course does not exist or is not the patient's
        """
        course = await ReminderService.get_course(data.medication_id, patient_id)

        log = SideEffectLog(
            patient_id=patient_id,
            medication_id=str(course.id),
            description=data.description,
            severity=data.severity.upper() if data.severity else None,
            date_logged=data.date_logged or today,
        )
        await log.insert()

        logger.info(f"Patient {patient_id} logged a side effect for medication {course.id}")

        return SideEffectService.log_to_response(log, course.medication_name)

    @staticmethod
    async def get_logs_for_patient(patient_id: str) -> List[SideEffectResponse]:
        """Get a patient's side effect logs, newest first."""
        logs = await SideEffectLog.find(
            SideEffectLog.patient_id == patient_id
        ).sort([("date_logged", -1), ("created_at", -1)]).to_list()

        names = {}
        result = []
        for log in logs:
            if log.medication_id not in names:
                try:
                    course = await MedicationCourse.get(PydanticObjectId(log.medication_id))
                except (InvalidId, TypeError):
                    course = None
                names[log.medication_id] = course.medication_name if course else None
            result.append(SideEffectService.log_to_response(log, names[log.medication_id]))

        return result

    @staticmethod
    async def delete_log(log_id: str, patient_id: str) -> None:
        """
        Delete one of the patient's side effect logs.

        Raises:
            NotFoundException: If the log does not exist or is not the patient's
        """
        try:
            log = await SideEffectLog.get(PydanticObjectId(log_id))
        except (InvalidId, TypeError):
            raise NotFoundException("Side effect log not found")

        if not log or log.patient_id != patient_id:
            raise NotFoundException("Side effect log not found")

        await log.delete()
