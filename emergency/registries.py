"""
Archivi in memoria del Pronto Soccorso.

Ogni archivio lavora sulle sessioni dell'istanza proprietaria: nessun dato è
condiviso tra due EmergencyApp. Le regole di scrittura sono volutamente
asimmetriche:
- professionisti e reparti: l'ultima scrittura vince (sovrascrittura)
- pazienti: la prima scrittura vince (add_or_get è idempotente)
- referti: id progressivi assegnati dal registro, mai riutilizzati
"""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from .db import session_scope
from .errors import NotFoundError
from .models import Department, Patient, PatientStatus, Professional, Report


# =========================
# Professionisti
# =========================
class ProfessionalRegistry:
    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._factory = factory

    def add(self, id: str, name: str, surname: str, specialization: str, period: str) -> Professional:
        with session_scope(self._factory) as s:
            return s.merge(
                Professional(id=id, name=name, surname=surname, specialization=specialization, period=period)
            )

    def exists(self, id: str) -> bool:
        with session_scope(self._factory) as s:
            return s.get(Professional, id) is not None

    def get_by_id(self, id: str) -> Professional:
        with session_scope(self._factory) as s:
            pro = s.get(Professional, id)
            if pro is None:
                raise NotFoundError(f"Professionista non trovato: {id}")
            return pro

    def by_specialization(self, specialization: str) -> list[Professional]:
        """Record con la specializzazione esatta, in ordine crescente di id."""
        with session_scope(self._factory) as s:
            q = select(Professional).where(Professional.specialization == specialization).order_by(Professional.id)
            return list(s.scalars(q))

    def list_by_specialization(self, specialization: str) -> list[str]:
        return [p.id for p in self.by_specialization(specialization)]

    def list_available_in_period(self, specialization: str, period: str) -> list[str]:
        ids = [p.id for p in self.by_specialization(specialization) if p.is_available(period)]
        if not ids:
            raise NotFoundError(f"Nessun professionista '{specialization}' in servizio nel periodo {period}")
        return ids


# =========================
# Reparti
# =========================
class DepartmentRegistry:
    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._factory = factory

    def add(self, name: str, max_patients: int) -> Department:
        with session_scope(self._factory) as s:
            return s.merge(Department(name=name, max_patients=max_patients))

    def get(self, name: str) -> Department:
        with session_scope(self._factory) as s:
            dep = s.get(Department, name)
            if dep is None:
                raise NotFoundError(f"Reparto non trovato: {name}")
            return dep

    def list_names(self) -> list[str]:
        with session_scope(self._factory) as s:
            names = list(s.scalars(select(Department.name).order_by(Department.name)))
        if not names:
            raise NotFoundError("Nessun reparto registrato")
        return names


# =========================
# Pazienti
# =========================
class PatientRegistry:
    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._factory = factory

    def add_or_get(
        self,
        fiscal_code: str,
        name: str,
        surname: str,
        date_of_birth: str,
        reason: str,
        date_time_accepted: str,
    ) -> Patient:
        with session_scope(self._factory) as s:
            existing = s.get(Patient, fiscal_code)
            if existing is not None:
                return existing

            p = Patient(
                fiscal_code=fiscal_code,
                name=name,
                surname=surname,
                date_of_birth=date_of_birth,
                reason=reason,
                date_time_accepted=date_time_accepted,
                department_name="",
                status=PatientStatus.ADMITTED,
            )
            s.add(p)
            s.flush()
            return p

    def get(self, fiscal_code: str) -> Patient:
        with session_scope(self._factory) as s:
            p = s.get(Patient, fiscal_code)
            if p is None:
                raise NotFoundError(f"Paziente non trovato: {fiscal_code}")
            return p

    def find(self, identifier: str) -> list[Patient]:
        """
        `identifier` può essere un codice fiscale o un cognome.
        Vince l'insieme strettamente più numeroso; a parità (anche entrambi
        vuoti) vince quello per codice fiscale.
        """
        with session_scope(self._factory) as s:
            by_surname = list(
                s.scalars(select(Patient).where(Patient.surname == identifier).order_by(Patient.fiscal_code))
            )
            by_code = list(
                s.scalars(select(Patient).where(Patient.fiscal_code == identifier).order_by(Patient.fiscal_code))
            )
        if len(by_surname) > len(by_code):
            return by_surname
        return by_code

    def list_by_admission_date(self, date: str) -> list[str]:
        with session_scope(self._factory) as s:
            q = select(Patient).where(Patient.date_time_accepted == date).order_by(Patient.fiscal_code)
            matches = list(s.scalars(q))
        matches.sort(key=Patient.last_first, reverse=True)
        return [p.fiscal_code for p in matches]

    def count(
        self,
        status: PatientStatus | None = None,
        admitted_on: str | None = None,
        department: str | None = None,
    ) -> int:
        q = select(func.count()).select_from(Patient)
        if status is not None:
            q = q.where(Patient.status == status)
        if admitted_on is not None:
            q = q.where(Patient.date_time_accepted == admitted_on)
        if department is not None:
            q = q.where(Patient.department_name == department)
        with session_scope(self._factory) as s:
            return s.execute(q).scalar_one()


# =========================
# Referti
# =========================
class ReportLedger:
    def __init__(
        self,
        factory: sessionmaker[Session],
        professionals: ProfessionalRegistry,
        start: int = 1000,
    ) -> None:
        self._factory = factory
        self._professionals = professionals
        self._next_id = start

    def record(self, professional_id: str, fiscal_code: str, date: str, description: str) -> Report:
        if not self._professionals.exists(professional_id):
            raise NotFoundError(f"Professionista non trovato: {professional_id}")

        with session_scope(self._factory) as s:
            r = Report(
                id=str(self._next_id),
                professional_id=professional_id,
                fiscal_code=fiscal_code,
                date=date,
                description=description,
            )
            s.add(r)
        # il numero si consuma solo dopo il commit riuscito
        self._next_id += 1
        return r

    def get(self, report_id: str) -> Report:
        with session_scope(self._factory) as s:
            r = s.get(Report, report_id)
            if r is None:
                raise NotFoundError(f"Referto non trovato: {report_id}")
            return r

    def all(self) -> list[Report]:
        with session_scope(self._factory) as s:
            reports = list(s.scalars(select(Report)))
        return sorted(reports, key=lambda r: int(r.id))
