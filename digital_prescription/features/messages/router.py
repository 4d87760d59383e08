# Messages Feature - Router

from fastapi import APIRouter, Depends
from digital_prescription.features.messages.schemas import (
    SubmitFormRequest,
    SubmitFormResponse,
    InboxResponse,
)
from digital_prescription.features.messages.service import MessageService
from digital_prescription.features.auth.dependencies import get_current_doctor, get_current_patient
from digital_prescription.features.auth.models import User


router = APIRouter(tags=["Messages"])


@router.post("/patient/submit-form", response_model=SubmitFormResponse)
async def submit_form(
    form: SubmitFormRequest,
    current_patient: User = Depends(get_current_patient)
):
    """
    Submit a symptom report.

    The report is routed to every doctor whose specialization matches
    **disease_type**.

    Requires patient authentication.
    """
    return await MessageService.submit_form(current_patient, form)


@router.get("/doctor/messages", response_model=InboxResponse)
async def get_doctor_messages(current_doctor: User = Depends(get_current_doctor)):
    """
    Get unresolved messages for the current doctor's specialization.

    Most severe first, then oldest first.

    Requires doctor authentication.
    """
    messages = await MessageService.get_inbox(current_doctor)
    return InboxResponse(messages=messages, total=len(messages))
