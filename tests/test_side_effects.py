"""Side effect logging against a patient's own medication courses."""

from datetime import date

import pytest

from digital_prescription.features.side_effects.schemas import SideEffectCreate
from digital_prescription.features.side_effects.service import SideEffectService
from digital_prescription.shared.exceptions import NotFoundException


TODAY = date(2024, 1, 2)


async def test_log_defaults_to_today(patient, make_course):
    course = await make_course(date(2024, 1, 1))

    log = await SideEffectService.create_log(
        str(patient.id),
        SideEffectCreate(medication_id=str(course.id), description="Nausea", severity="medium"),
        TODAY,
    )

    assert log.date_logged == TODAY
    assert log.severity == "MEDIUM"
    assert log.medication_name == "Amoxicillin 500mg"


async def test_cannot_log_against_other_patients_course(patient, other_patient, make_course):
    course = await make_course(date(2024, 1, 1), owner=other_patient)

    with pytest.raises(NotFoundException):
        await SideEffectService.create_log(
            str(patient.id),
            SideEffectCreate(medication_id=str(course.id), description="Headache"),
            TODAY,
        )


async def test_list_and_delete_own_logs(patient, other_patient, make_course):
    course = await make_course(date(2024, 1, 1))
    older = await SideEffectService.create_log(
        str(patient.id),
        SideEffectCreate(medication_id=str(course.id), description="Dizziness", date_logged=date(2024, 1, 1)),
        TODAY,
    )
    await SideEffectService.create_log(
        str(patient.id),
        SideEffectCreate(medication_id=str(course.id), description="Rash"),
        TODAY,
    )

    logs = await SideEffectService.get_logs_for_patient(str(patient.id))
    assert [log.description for log in logs] == ["Rash", "Dizziness"]

    with pytest.raises(NotFoundException):
        await SideEffectService.delete_log(older.id, str(other_patient.id))

    await SideEffectService.delete_log(older.id, str(patient.id))
    logs = await SideEffectService.get_logs_for_patient(str(patient.id))
    assert [log.description for log in logs] == ["Rash"]
