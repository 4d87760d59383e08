# Side Effects Feature - Router

from datetime import date
from fastapi import APIRouter, Depends, status
from digital_prescription.features.side_effects.schemas import (
    SideEffectCreate,
    SideEffectResponse,
    SideEffectListResponse,
)
from digital_prescription.features.side_effects.service import SideEffectService
from digital_prescription.dependencies import get_current_patient, get_today
from digital_prescription.features.auth.models import User
from digital_prescription.shared.schemas import MessageResponse


router = APIRouter(prefix="/side-effects", tags=["Side Effects"])


@router.post("", response_model=SideEffectResponse, status_code=status.HTTP_201_CREATED)
async def create_side_effect(
    request: SideEffectCreate,
    current_patient: User = Depends(get_current_patient),
    today: date = Depends(get_today)
):
    """Log a side effect for one of the current patient's medications."""
    return await SideEffectService.create_log(str(current_patient.id), request, today)


@router.get("", response_model=SideEffectListResponse)
async def list_side_effects(current_patient: User = Depends(get_current_patient)):
    """List the current patient's side effect logs."""
    logs = await SideEffectService.get_logs_for_patient(str(current_patient.id))
    return SideEffectListResponse(side_effects=logs, total=len(logs))


@router.delete("/{log_id}", response_model=MessageResponse)
async def delete_side_effect(
    log_id: str,
    current_patient: User = Depends(get_current_patient)
):
    """Delete one of the current patient's side effect logs."""
    await SideEffectService.delete_log(log_id, str(current_patient.id))
    return MessageResponse(message="Side effect log deleted")
