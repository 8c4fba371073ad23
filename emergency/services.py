from __future__ import annotations

from os import PathLike
from typing import IO

from sqlalchemy import distinct, func, select

from .config import Settings, get_settings
from .db import create_memory_engine, make_session_factory, session_scope
from .errors import NotFoundError
from .importers import read_departments, read_professionals
from .models import Department, Patient, PatientStatus, Professional, Report
from .registries import DepartmentRegistry, PatientRegistry, ProfessionalRegistry, ReportLedger


class EmergencyApp:
    """
    Istanza del Pronto Soccorso: possiede in esclusiva il database in memoria e
    i quattro archivi. Non è thread-safe; chi la usa da più thread deve
    proteggerla con un unico lock.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.engine = create_memory_engine(echo=self.settings.sql_echo)
        self._factory = make_session_factory(self.engine)

        self.professionals = ProfessionalRegistry(self._factory)
        self.departments = DepartmentRegistry(self._factory)
        self.patients = PatientRegistry(self._factory)
        self.reports = ReportLedger(self._factory, self.professionals, start=self.settings.report_id_start)

    def close(self) -> None:
        self.engine.dispose()

    # =========================
    # Professionisti e reparti
    # =========================
    def add_professional(self, id: str, name: str, surname: str, specialization: str, period: str) -> None:
        self.professionals.add(id, name, surname, specialization, period)

    def get_professional_by_id(self, id: str) -> Professional:
        return self.professionals.get_by_id(id)

    def get_professionals(self, specialization: str) -> list[str]:
        return self.professionals.list_by_specialization(specialization)

    def get_professionals_in_service(self, specialization: str, period: str) -> list[str]:
        return self.professionals.list_available_in_period(specialization, period)

    def add_department(self, name: str, max_patients: int) -> None:
        self.departments.add(name, max_patients)

    def get_departments(self) -> list[str]:
        return self.departments.list_names()

    # =========================
    # Import CSV
    # =========================
    def read_from_file_professionals(self, source: str | PathLike | IO[str]) -> int:
        return read_professionals(self, source)

    def read_from_file_departments(self, source: str | PathLike | IO[str]) -> int:
        return read_departments(self, source)

    # =========================
    # Pazienti
    # =========================
    def add_patient(
        self,
        fiscal_code: str,
        name: str,
        surname: str,
        date_of_birth: str,
        reason: str,
        date_time_accepted: str,
    ) -> Patient:
        return self.patients.add_or_get(fiscal_code, name, surname, date_of_birth, reason, date_time_accepted)

    def get_patient(self, identifier: str) -> list[Patient]:
        return self.patients.find(identifier)

    def get_patients_by_date(self, date: str) -> list[str]:
        return self.patients.list_by_admission_date(date)

    # =========================
    # Assegnazione (use case core)
    # =========================
    def assign_patient_to_professional(self, fiscal_code: str, specialization: str) -> str:
        """
        Use case: abbinare un paziente a un professionista.
        - specializzazione uguale a quella richiesta
        - periodo di servizio che contiene l'orario di accettazione
        - a parità vince l'id lessicograficamente più piccolo
        Non modifica lo stato del paziente.
        """
        patient = self.patients.get(fiscal_code)

        candidates = [
            p
            for p in self.professionals.by_specialization(specialization)
            if p.contains_date(patient.date_time_accepted)
        ]
        if not candidates:
            raise NotFoundError(
                f"Nessun professionista '{specialization}' disponibile il {patient.date_time_accepted}"
            )
        if len(candidates) == 1:
            return candidates[0].id
        return min(candidates, key=lambda p: p.id).id

    def save_report(self, professional_id: str, fiscal_code: str, date: str, description: str) -> Report:
        return self.reports.record(professional_id, fiscal_code, date, description)

    # =========================
    # Ricovero / dimissione
    # =========================
    def discharge_or_hospitalize(self, fiscal_code: str, department_name: str) -> PatientStatus:
        """
        Ricovera il paziente se il reparto ha ancora posti liberi, altrimenti
        lo dimette. Solo un paziente ADMITTED può cambiare stato.
        """
        with session_scope(self._factory) as s:
            patient = s.get(Patient, fiscal_code)
            if patient is None:
                raise NotFoundError(f"Paziente non trovato: {fiscal_code}")
            department = s.get(Department, department_name)
            if department is None:
                raise NotFoundError(f"Reparto non trovato: {department_name}")
            if patient.status is not PatientStatus.ADMITTED:
                raise NotFoundError(f"Paziente {fiscal_code} già {patient.status.value}")

            occupied = s.execute(
                select(func.count())
                .select_from(Patient)
                .where(
                    Patient.status == PatientStatus.HOSPITALIZED,
                    Patient.department_name == department_name,
                )
            ).scalar_one()

            if department.max_patients - occupied > 0:
                patient.status = PatientStatus.HOSPITALIZED
                patient.department_name = department_name
            else:
                patient.status = PatientStatus.DISCHARGED
            return patient.status

    def verify_patient(self, fiscal_code: str) -> bool:
        return self.patients.get(fiscal_code).status is PatientStatus.HOSPITALIZED

    # =========================
    # Statistiche
    # =========================
    def get_number_of_patients(self) -> int:
        return self.patients.count()

    def get_number_of_patients_by_date(self, date: str) -> int:
        return self.patients.count(admitted_on=date)

    def get_number_of_patients_hospitalized_by_department(self, department_name: str) -> int:
        self.departments.get(department_name)
        return self.patients.count(status=PatientStatus.HOSPITALIZED, department=department_name)

    def get_number_of_patients_discharged(self) -> int:
        return self.patients.count(status=PatientStatus.DISCHARGED)

    def get_number_of_patients_assigned_to_professional_discharged(self, specialization: str) -> int:
        """Pazienti dimessi con almeno un referto di un professionista della specializzazione."""
        q = (
            select(func.count(distinct(Patient.fiscal_code)))
            .select_from(Report)
            .join(Professional, Professional.id == Report.professional_id)
            .join(Patient, Patient.fiscal_code == Report.fiscal_code)
            .where(
                Professional.specialization == specialization,
                Patient.status == PatientStatus.DISCHARGED,
            )
        )
        with session_scope(self._factory) as s:
            return s.execute(q).scalar_one()
