# Prescriptions Feature - Router

from datetime import date
from fastapi import APIRouter, Depends, status
from digital_prescription.features.prescriptions.schemas import (
    RespondRequest,
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionListResponse,
)
from digital_prescription.features.prescriptions.service import PrescriptionService
from digital_prescription.dependencies import (
    get_current_user,
    get_current_doctor,
    get_current_patient,
    get_today,
)
from digital_prescription.features.auth.models import User
from digital_prescription.shared.schemas import MessageResponse


router = APIRouter(tags=["Prescriptions"])


# ============== Doctor Endpoints ==============

@router.post("/doctor/respond/{message_id}", response_model=PrescriptionResponse)
async def respond_to_message(
    message_id: str,
    request: RespondRequest,
    current_doctor: User = Depends(get_current_doctor),
    today: date = Depends(get_today)
):
    """
    Answer a patient's symptom message with a prescription.

    One medication course is created per line; lines without a start date
    start today. Lines that cannot be saved are skipped. The message is
    marked resolved.

    Requires doctor authentication.
    """
    return await PrescriptionService.respond_to_message(current_doctor, message_id, request, today)


@router.post("/prescriptions", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription(
    request: PrescriptionCreate,
    current_doctor: User = Depends(get_current_doctor),
    today: date = Depends(get_today)
):
    """
    Issue a prescription directly to a patient.

    Requires doctor authentication.
    """
    return await PrescriptionService.create_prescription(current_doctor, request, today)


@router.delete("/prescriptions/{prescription_id}", response_model=MessageResponse)
async def delete_prescription(
    prescription_id: str,
    current_doctor: User = Depends(get_current_doctor)
):
    """
    Delete a prescription, its medication courses and their reminders.

    Requires doctor authentication; only the issuing doctor may delete.
    """
    deleted = await PrescriptionService.delete_prescription(prescription_id, current_doctor)
    return MessageResponse(message=f"Prescription deleted with {deleted} medication(s)")


# ============== Patient Endpoints ==============

@router.get("/prescriptions/mine", response_model=PrescriptionListResponse)
async def get_my_prescriptions(current_patient: User = Depends(get_current_patient)):
    """
    Get the current patient's prescriptions, newest first.

    Requires patient authentication.
    """
    prescriptions = await PrescriptionService.get_prescriptions_for_patient(str(current_patient.id))
    return PrescriptionListResponse(prescriptions=prescriptions, total=len(prescriptions))


# ============== Shared Endpoints ==============

@router.get("/prescriptions/{prescription_id}", response_model=PrescriptionResponse)
async def get_prescription(
    prescription_id: str,
    current_user: User = Depends(get_current_user)
):
    """
    Get a prescription.

    Visible to the issuing doctor and the patient it belongs to.
    """
    prescription = await PrescriptionService.get_prescription(prescription_id, current_user)
    return await PrescriptionService.prescription_to_response(prescription)
