"""Symptom routing by specialization and the severity-ordered doctor inbox."""

from datetime import datetime, timedelta

import pytest

from digital_prescription.features.auth.models import User
from digital_prescription.features.messages.models import SymptomMessage
from digital_prescription.features.messages.schemas import SubmitFormRequest
from digital_prescription.features.messages.service import MessageService, severity_priority
from digital_prescription.shared.exceptions import BadRequestException


def test_severity_priority():
    assert severity_priority("HIGH") == 3
    assert severity_priority("medium") == 2
    assert severity_priority("LOW") == 1
    assert severity_priority(None) == 1
    assert severity_priority("whatever") == 1


async def test_submit_form_routes_to_specialization(patient, doctor):
    second = User(username="dr.wilson", password_hash="x", role="DOCTOR", specialization="Cardiology")
    await second.insert()

    response = await MessageService.submit_form(
        patient,
        SubmitFormRequest(disease_type="Cardiology", content="Palpitations", severity="high"),
    )

    assert response.doctor_count == 2
    message = await MessageService.get_message(response.message_id)
    assert message.sender_id == str(patient.id)
    assert message.specialization == "Cardiology"
    assert message.severity == "HIGH"
    assert message.is_resolved is False


async def test_submit_form_without_matching_doctor(patient, doctor):
    with pytest.raises(BadRequestException):
        await MessageService.submit_form(
            patient, SubmitFormRequest(disease_type="Dermatology", content="Rash")
        )

    assert await SymptomMessage.find_all().count() == 0


async def test_inbox_orders_by_severity_then_age(patient, doctor):
    base = datetime(2024, 1, 1, 9, 0)
    for content, severity, minutes in [
        ("old low", "LOW", 0),
        ("new high", "HIGH", 30),
        ("old high", "HIGH", 10),
        ("medium", "MEDIUM", 5),
        ("unset", None, 1),
    ]:
        await SymptomMessage(
            sender_id=str(patient.id),
            sender_name=patient.username,
            specialization="Cardiology",
            receiver_id=str(doctor.id),
            content=content,
            severity=severity,
            sent_at=base + timedelta(minutes=minutes),
        ).insert()
    await SymptomMessage(
        sender_id=str(patient.id),
        sender_name=patient.username,
        specialization="Cardiology",
        receiver_id=str(doctor.id),
        content="resolved",
        severity="HIGH",
        is_resolved=True,
    ).insert()
    await SymptomMessage(
        sender_id=str(patient.id),
        sender_name=patient.username,
        specialization="Neurology",
        receiver_id="someone-else",
        content="other pool",
        severity="HIGH",
    ).insert()

    inbox = await MessageService.get_inbox(doctor)

    assert [m.content for m in inbox] == ["old high", "new high", "medium", "old low", "unset"]


async def test_inbox_requires_specialization(db):
    doctor = User(username="dr.nobody", password_hash="x", role="DOCTOR")
    await doctor.insert()

    with pytest.raises(BadRequestException):
        await MessageService.get_inbox(doctor)
