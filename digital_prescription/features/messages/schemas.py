# Messages Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class SubmitFormRequest(BaseModel):
    """Request schema for a patient's symptom report."""
    disease_type: str = Field(..., min_length=1, max_length=100, description="Specialization to route to")
    content: str = Field(..., min_length=1, max_length=5000)
    severity: Optional[str] = Field(None, description="HIGH, MEDIUM or LOW")


class SymptomMessageResponse(BaseModel):
    """Response schema for a symptom message."""
    id: str
    sender_id: str
    sender_name: str
    specialization: str
    content: str
    severity: Optional[str] = None
    sent_at: datetime
    is_resolved: bool


class SubmitFormResponse(BaseModel):
    """Response schema after routing a symptom report."""
    message: str
    message_id: str
    doctor_count: int


class InboxResponse(BaseModel):
    """Response schema for a doctor's inbox."""
    messages: List[SymptomMessageResponse]
    total: int
