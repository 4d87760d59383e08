# Messages Feature - Service

from typing import List, Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from digital_prescription.features.messages.models import SymptomMessage
from digital_prescription.features.messages.schemas import (
    SubmitFormRequest,
    SubmitFormResponse,
    SymptomMessageResponse,
)
from digital_prescription.features.auth.models import User
from digital_prescription.core.logging import logger
from digital_prescription.shared.exceptions import NotFoundException, BadRequestException


SEVERITY_PRIORITY = {"HIGH": 3, "MEDIUM": 2}


def severity_priority(severity: Optional[str]) -> int:
    """HIGH=3, MEDIUM=2, anything else (LOW or unset)=1."""
    return SEVERITY_PRIORITY.get((severity or "LOW").upper(), 1)


class MessageService:
    """Service class for routing symptom messages to doctors."""

    @staticmethod
    def message_to_response(message: SymptomMessage) -> SymptomMessageResponse:
        """Convert SymptomMessage document to response schema."""
        return SymptomMessageResponse(
            id=str(message.id),
            sender_id=message.sender_id,
            sender_name=message.sender_name,
            specialization=message.specialization,
            content=message.content,
            severity=message.severity,
            sent_at=message.sent_at,
            is_resolved=message.is_resolved,
        )

    @staticmethod
    async def submit_form(patient: User, form: SubmitFormRequest) -> SubmitFormResponse:
        """
        Route a patient's symptom report to the doctors of the requested specialization.

        Raises:
            BadRequestException: If no doctor has that specialization
        """
        specialization = form.disease_type.strip()
        doctors = await User.find(
            User.role == "DOCTOR",
            User.specialization == specialization,
        ).to_list()

        if not doctors:
            raise BadRequestException(f"No doctor found with specialization: {specialization}")

        message = SymptomMessage(
            sender_id=str(patient.id),
            sender_name=patient.username,
            specialization=specialization,
            receiver_id=str(doctors[0].id),
            content=form.content,
            severity=form.severity.upper() if form.severity else None,
        )
        await message.insert()

        logger.info(
            f"Routed message {message.id} from {patient.username} to the {specialization} pool "
            f"({len(doctors)} doctor(s))"
        )

        return SubmitFormResponse(
            message=f"Request routed to the {specialization} doctor pool ({len(doctors)} doctors).",
            message_id=str(message.id),
            doctor_count=len(doctors),
        )

    @staticmethod
    async def get_inbox(doctor: User) -> List[SymptomMessageResponse]:
        """
        Get unresolved messages for a doctor's specialization.

        Ordered by severity (HIGH first), then oldest first.

        Raises:
            BadRequestException: If the doctor has no specialization
        """
        if not doctor.specialization:
            raise BadRequestException("Doctor specialization is not set.")

        messages = await SymptomMessage.find(
            SymptomMessage.specialization == doctor.specialization,
            SymptomMessage.is_resolved == False
        ).to_list()

        messages.sort(key=lambda m: (-severity_priority(m.severity), m.sent_at))

        return [MessageService.message_to_response(m) for m in messages]

    @staticmethod
    async def get_message(message_id: str) -> SymptomMessage:
        """
        Get a message by ID.

        Raises:
            NotFoundException: If message not found
        """
        try:
            message = await SymptomMessage.get(PydanticObjectId(message_id))
        except (InvalidId, TypeError):
            raise NotFoundException("Message not found")

        if not message:
            raise NotFoundException("Message not found")

        return message

    @staticmethod
    async def resolve(message: SymptomMessage) -> SymptomMessage:
        """Take a message out of the doctor inbox."""
        message.is_resolved = True
        message.update_timestamp()
        await message.save()
        return message
