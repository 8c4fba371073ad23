"""Assegnazione paziente -> professionista."""
import pytest

from emergency.errors import NotFoundError
from emergency.models import PatientStatus


def test_smallest_id_wins(er):
    er.add_professional("B01", "Anna", "Blu", "Cardiologia", "2024-01-01 to 2024-12-31")
    er.add_professional("A01", "Luca", "Gialli", "Cardiologia", "2024-01-01 to 2024-12-31")
    er.add_patient("CF1", "Mario", "Rossi", "1980-01-01", "Dolore toracico", "2024-05-05")
    assert er.assign_patient_to_professional("CF1", "Cardiologia") == "A01"


def test_only_professionals_in_service_on_admission_date(er_with_staff):
    er_with_staff.add_patient("CF1", "Mario", "Rossi", "1980-01-01", "x", "2024-03-01")
    er_with_staff.add_patient("CF2", "Anna", "Bianchi", "1980-01-01", "x", "2025-03-01")
    er_with_staff.add_patient("CF3", "Luca", "Verdi", "1980-01-01", "x", "2024-07-01")
    assert er_with_staff.assign_patient_to_professional("CF1", "Cardiologia") == "M001"
    assert er_with_staff.assign_patient_to_professional("CF2", "Cardiologia") == "M002"
    assert er_with_staff.assign_patient_to_professional("CF3", "Cardiologia") == "M001"


def test_bounds_are_inclusive(er_with_staff):
    er_with_staff.add_patient("CF1", "Mario", "Rossi", "1980-01-01", "x", "2024-06-30")
    assert er_with_staff.assign_patient_to_professional("CF1", "Ortopedia") == "M003"


def test_unknown_patient(er_with_staff):
    with pytest.raises(NotFoundError):
        er_with_staff.assign_patient_to_professional("NOPE", "Cardiologia")


def test_no_candidate(er_with_staff):
    er_with_staff.add_patient("CF1", "Mario", "Rossi", "1980-01-01", "x", "2026-01-01")
    with pytest.raises(NotFoundError):
        er_with_staff.assign_patient_to_professional("CF1", "Cardiologia")
    with pytest.raises(NotFoundError):
        er_with_staff.assign_patient_to_professional("CF1", "Dermatologia")


def test_assignment_does_not_change_patient(er_with_staff):
    er_with_staff.add_patient("CF1", "Mario", "Rossi", "1980-01-01", "x", "2024-03-01")
    er_with_staff.assign_patient_to_professional("CF1", "Cardiologia")
    p = er_with_staff.patients.get("CF1")
    assert p.status is PatientStatus.ADMITTED
    assert p.department_name == ""
