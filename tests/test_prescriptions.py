"""Prescription issuance, partial medication-line failure and cascade deletion."""

import logging
from datetime import date

import pytest
from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from digital_prescription.features.auth.models import User
from digital_prescription.features.messages.models import SymptomMessage
from digital_prescription.features.prescriptions.models import Prescription, MedicationCourse
from digital_prescription.features.prescriptions.schemas import (
    MedicationLine,
    RespondRequest,
    PrescriptionCreate,
)
from digital_prescription.features.prescriptions.service import PrescriptionService
from digital_prescription.features.reminders.models import ReminderRecord
from digital_prescription.features.reminders.service import ReminderService
from digital_prescription.features.side_effects.models import SideEffectLog
from digital_prescription.shared.exceptions import (
    NotFoundException,
    ForbiddenException,
    BadRequestException,
)


TODAY = date(2024, 1, 1)


async def routed_message(patient, doctor) -> SymptomMessage:
    message = SymptomMessage(
        sender_id=str(patient.id),
        sender_name=patient.username,
        specialization="Cardiology",
        receiver_id=str(doctor.id),
        content="Chest tightness",
        severity="HIGH",
    )
    await message.insert()
    return message


async def test_respond_creates_courses_and_resolves_message(patient, doctor):
    message = await routed_message(patient, doctor)
    request = RespondRequest(
        diagnosis="Angina",
        medications=[
            MedicationLine(medication_name="Aspirin", dosage_timing="Morning", duration_days=5),
            MedicationLine(
                medication_name="Nitroglycerin",
                dosage_timing="As needed",
                duration_days=10,
                start_date=date(2024, 1, 3),
            ),
        ],
    )

    response = await PrescriptionService.respond_to_message(doctor, str(message.id), request, TODAY)

    assert response.patient_id == str(patient.id)
    assert response.doctor_name == "dr.house"
    assert response.message_id == str(message.id)
    assert response.diagnosis == "Angina"

    aspirin, nitro = response.medications
    assert aspirin.start_date == TODAY
    assert aspirin.end_date == date(2024, 1, 6)
    assert aspirin.patient_id == str(patient.id)
    assert nitro.start_date == date(2024, 1, 3)
    assert nitro.end_date == date(2024, 1, 13)

    stored = await SymptomMessage.get(message.id)
    assert stored.is_resolved is True


async def test_failed_medication_line_does_not_fail_prescription(patient, doctor):
    request = PrescriptionCreate(
        patient_id=str(patient.id),
        diagnosis="Infection",
        medications=[
            MedicationLine(medication_name="   ", duration_days=3),
            MedicationLine(medication_name="Amoxicillin", duration_days=7),
            MedicationLine(medication_name=None, duration_days=2),
        ],
    )

    response = await PrescriptionService.create_prescription(doctor, request, TODAY)

    assert [m.medication_name for m in response.medications] == ["Amoxicillin"]
    assert await Prescription.find_all().count() == 1
    assert await MedicationCourse.find_all().count() == 1


async def test_line_that_fails_to_save_is_skipped(patient, doctor, monkeypatch, caplog):
    """A database error on one course keeps the prescription and the other courses."""
    insert = MedicationCourse.insert

    async def flaky_insert(self, *args, **kwargs):
        if self.medication_name == "Ibuprofen":
            raise PyMongoError("write concern timeout")
        return await insert(self, *args, **kwargs)

    monkeypatch.setattr(MedicationCourse, "insert", flaky_insert)
    request = PrescriptionCreate(
        patient_id=str(patient.id),
        diagnosis="Sprained ankle",
        medications=[
            MedicationLine(medication_name="Paracetamol", duration_days=3),
            MedicationLine(medication_name="Ibuprofen", duration_days=5),
            MedicationLine(medication_name="Arnica gel", duration_days=7),
        ],
    )

    with caplog.at_level(logging.WARNING, logger="digital_prescription"):
        response = await PrescriptionService.create_prescription(doctor, request, TODAY)

    assert [m.medication_name for m in response.medications] == ["Paracetamol", "Arnica gel"]
    assert await Prescription.find_all().count() == 1
    stored = await MedicationCourse.find_all().to_list()
    assert sorted(c.medication_name for c in stored) == ["Arnica gel", "Paracetamol"]

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "line 2" in warnings[0].getMessage()
    assert "write concern timeout" in warnings[0].getMessage()


async def test_zero_duration_course_ends_on_start(patient, doctor):
    request = PrescriptionCreate(
        patient_id=str(patient.id),
        medications=[MedicationLine(medication_name="Single dose", duration_days=0)],
    )

    response = await PrescriptionService.create_prescription(doctor, request, TODAY)

    assert response.medications[0].end_date == TODAY


def test_negative_duration_is_rejected_at_the_boundary():
    with pytest.raises(ValueError):
        MedicationLine(medication_name="Aspirin", duration_days=-1)


async def test_respond_to_unknown_message(doctor):
    with pytest.raises(NotFoundException):
        await PrescriptionService.respond_to_message(
            doctor, str(PydanticObjectId()), RespondRequest(), TODAY
        )


async def test_respond_outside_specialization_is_forbidden(patient, doctor):
    message = await routed_message(patient, doctor)
    neurologist = User(
        username="dr.strange",
        password_hash="not-a-real-hash",
        role="DOCTOR",
        specialization="Neurology",
    )
    await neurologist.insert()

    with pytest.raises(ForbiddenException):
        await PrescriptionService.respond_to_message(
            neurologist, str(message.id), RespondRequest(diagnosis="Migraine"), TODAY
        )

    assert await Prescription.find_all().count() == 0
    stored = await SymptomMessage.get(message.id)
    assert stored.is_resolved is False


async def test_answered_message_cannot_be_answered_again(patient, doctor):
    message = await routed_message(patient, doctor)
    await PrescriptionService.respond_to_message(
        doctor, str(message.id), RespondRequest(diagnosis="Angina"), TODAY
    )

    with pytest.raises(BadRequestException):
        await PrescriptionService.respond_to_message(
            doctor, str(message.id), RespondRequest(diagnosis="Angina"), TODAY
        )

    assert await Prescription.find_all().count() == 1


async def test_prescription_for_unknown_patient(doctor):
    request = PrescriptionCreate(patient_id=str(PydanticObjectId()))

    with pytest.raises(NotFoundException):
        await PrescriptionService.create_prescription(doctor, request, TODAY)

    assert await Prescription.find_all().count() == 0


async def test_patient_sees_own_prescriptions(patient, other_patient, doctor):
    await PrescriptionService.create_prescription(
        doctor,
        PrescriptionCreate(patient_id=str(patient.id), medications=[MedicationLine(medication_name="A")]),
        TODAY,
    )
    await PrescriptionService.create_prescription(
        doctor, PrescriptionCreate(patient_id=str(other_patient.id)), TODAY
    )

    prescriptions = await PrescriptionService.get_prescriptions_for_patient(str(patient.id))

    assert len(prescriptions) == 1
    assert prescriptions[0].medications[0].medication_name == "A"


async def test_prescription_hidden_from_other_users(patient, other_patient, doctor):
    response = await PrescriptionService.create_prescription(
        doctor, PrescriptionCreate(patient_id=str(patient.id)), TODAY
    )

    assert await PrescriptionService.get_prescription(response.id, patient)
    assert await PrescriptionService.get_prescription(response.id, doctor)
    with pytest.raises(NotFoundException):
        await PrescriptionService.get_prescription(response.id, other_patient)


async def test_delete_cascades_to_courses_reminders_and_side_effects(patient, doctor):
    response = await PrescriptionService.create_prescription(
        doctor,
        PrescriptionCreate(
            patient_id=str(patient.id),
            medications=[MedicationLine(medication_name="Aspirin", duration_days=5)],
        ),
        TODAY,
    )
    await ReminderService.get_due_reminders(str(patient.id), TODAY)
    assert await ReminderRecord.find_all().count() == 1
    await SideEffectLog(
        patient_id=str(patient.id),
        medication_id=response.medications[0].id,
        description="Nausea",
        date_logged=TODAY,
    ).insert()
    unrelated = SideEffectLog(
        patient_id=str(patient.id),
        medication_id=str(PydanticObjectId()),
        description="Headache",
        date_logged=TODAY,
    )
    await unrelated.insert()

    deleted = await PrescriptionService.delete_prescription(response.id, doctor)

    assert deleted == 1
    assert await Prescription.find_all().count() == 0
    assert await MedicationCourse.find_all().count() == 0
    assert await ReminderRecord.find_all().count() == 0
    remaining = await SideEffectLog.find_all().to_list()
    assert [log.id for log in remaining] == [unrelated.id]


async def test_only_issuing_doctor_can_delete(patient, doctor):
    response = await PrescriptionService.create_prescription(
        doctor, PrescriptionCreate(patient_id=str(patient.id)), TODAY
    )

    with pytest.raises(ForbiddenException):
        await PrescriptionService.delete_prescription(response.id, patient)
