"""Shared fixtures: an in-memory MongoDB with every document model registered."""

import uuid
from datetime import date
from typing import Optional

import pytest
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from digital_prescription.database import document_models
from digital_prescription.features.auth.models import User
from digital_prescription.features.prescriptions.models import MedicationCourse
from digital_prescription.features.reminders.schedule import derive_end_date


@pytest.fixture
async def db():
    """Fresh in-memory database per test."""
    client = AsyncMongoMockClient()
    database = client[f"test_{uuid.uuid4().hex}"]
    await init_beanie(database=database, document_models=document_models())
    yield database


@pytest.fixture
async def patient(db) -> User:
    user = User(username="jane", password_hash="not-a-real-hash", role="PATIENT")
    await user.insert()
    return user


@pytest.fixture
async def other_patient(db) -> User:
    user = User(username="john", password_hash="not-a-real-hash", role="PATIENT")
    await user.insert()
    return user


@pytest.fixture
async def doctor(db) -> User:
    user = User(
        username="dr.house",
        password_hash="not-a-real-hash",
        role="DOCTOR",
        specialization="Cardiology",
    )
    await user.insert()
    return user


@pytest.fixture
def make_course(patient):
    """Factory inserting a medication course for `patient`."""

    async def _make(
        start_date: Optional[date],
        duration_days: int = 5,
        name: str = "Amoxicillin 500mg",
        end_date: Optional[date] = None,
        derive_end: bool = True,
        owner: Optional[User] = None,
    ) -> MedicationCourse:
        if derive_end and start_date is not None and end_date is None:
            end_date = derive_end_date(start_date, duration_days)

        course = MedicationCourse(
            prescription_id="rx-test",
            patient_id=str((owner or patient).id),
            medication_name=name,
            dosage_timing="Morning, Night",
            duration_days=duration_days,
            start_date=start_date,
            end_date=end_date,
        )
        await course.insert()
        return course

    return _make
