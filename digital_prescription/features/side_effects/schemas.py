# Side Effects Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field


class SideEffectCreate(BaseModel):
    """Request schema for logging a side effect."""
    medication_id: str
    description: str = Field(..., min_length=1, max_length=2000)
    severity: Optional[str] = Field(None, description="HIGH, MEDIUM or LOW")
    date_logged: Optional[date] = Field(None, description="Defaults to today")


class SideEffectResponse(BaseModel):
    """Response schema for a side effect log entry."""
    id: str
    patient_id: str
    medication_id: str
    medication_name: Optional[str] = None
    description: str
    severity: Optional[str] = None
    date_logged: date
    created_at: datetime


class SideEffectListResponse(BaseModel):
    """Response schema for list of side effect logs."""
    side_effects: List[SideEffectResponse]
    total: int
