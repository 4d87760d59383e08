# Prescriptions Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field


# ============== Request Schemas ==============

class MedicationLine(BaseModel):
    """One medication line of a prescription request."""
    medication_name: Optional[str] = Field(None, max_length=200)
    dosage_timing: Optional[str] = Field(None, max_length=200, description="e.g. Morning, Night")
    duration_days: int = Field(0, ge=0, description="0 means a single day")
    start_date: Optional[date] = Field(None, description="Defaults to today")


class RespondRequest(BaseModel):
    """Request schema for answering a symptom message with a prescription."""
    diagnosis: Optional[str] = Field(None, max_length=2000)
    medications: List[MedicationLine] = Field(default_factory=list)


class PrescriptionCreate(RespondRequest):
    """Request schema for issuing a prescription directly to a patient."""
    patient_id: str


# ============== Response Schemas ==============

class MedicationCourseResponse(BaseModel):
    """Response schema for a medication course."""
    id: str
    prescription_id: str
    patient_id: str
    medication_name: str
    dosage_timing: Optional[str] = None
    duration_days: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PrescriptionResponse(BaseModel):
    """Response schema for a prescription."""
    id: str
    doctor_id: str
    doctor_name: Optional[str] = None
    patient_id: str
    message_id: Optional[str] = None
    diagnosis: Optional[str] = None
    issued_at: datetime
    medications: List[MedicationCourseResponse]


class PrescriptionListResponse(BaseModel):
    """Response schema for list of prescriptions."""
    prescriptions: List[PrescriptionResponse]
    total: int
