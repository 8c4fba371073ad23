from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from fastapi import FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field

from .config import Settings, get_settings
from .errors import DataImportError, NotFoundError
from .models import Patient, Professional, Report
from .seed import seed_base
from .services import EmergencyApp

logger = logging.getLogger(__name__)

T = TypeVar("T")


# Schemi

class ProfessionalIn(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    surname: str
    specialization: str
    period: str = Field(..., description="yyyy-MM-dd to yyyy-MM-dd")


class DepartmentIn(BaseModel):
    name: str = Field(..., min_length=1)
    max_patients: int


class PatientIn(BaseModel):
    fiscal_code: str = Field(..., min_length=1)
    name: str
    surname: str
    date_of_birth: str
    reason: str
    date_time_accepted: str


class AssignmentIn(BaseModel):
    fiscal_code: str
    specialization: str


class ReportIn(BaseModel):
    professional_id: str
    fiscal_code: str
    date: str
    description: str


class DischargeIn(BaseModel):
    fiscal_code: str
    department_name: str


def professional_flat(p: Professional) -> dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "surname": p.surname,
        "specialization": p.specialization,
        "period": p.period,
    }


def patient_flat(p: Patient) -> dict[str, Any]:
    return {
        "fiscal_code": p.fiscal_code,
        "name": p.name,
        "surname": p.surname,
        "date_of_birth": p.date_of_birth,
        "reason": p.reason,
        "date_time_accepted": p.date_time_accepted,
        "department_name": p.department_name,
        "status": p.status.value,
    }


def report_flat(r: Report) -> dict[str, Any]:
    return {
        "id": r.id,
        "professional_id": r.professional_id,
        "fiscal_code": r.fiscal_code,
        "date": r.date,
        "description": r.description,
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Factory dell'API (avvio: uvicorn --factory emergency.api_main:create_app).
    Ogni chiamata crea una propria istanza EmergencyApp, chiusa allo shutdown.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    er = EmergencyApp(settings)
    # EmergencyApp non è thread-safe: un solo lock per tutta l'istanza
    lock = threading.Lock()

    def call(fn: Callable[..., T], *args: Any) -> T:
        with lock:
            try:
                return fn(*args)
            except NotFoundError as e:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Dati iniziali: CSV configurati e seed dimostrativo (idempotente)
        try:
            if settings.departments_csv:
                er.read_from_file_departments(settings.departments_csv)
            if settings.professionals_csv:
                er.read_from_file_professionals(settings.professionals_csv)
            if settings.seed_demo:
                seed_base(er)
                logger.info("Seed dimostrativo caricato")
            yield
        finally:
            er.close()

    app = FastAPI(title="Pronto Soccorso API", version="1.0.0", lifespan=lifespan)
    app.state.emergency = er

    # Professionisti

    @app.post("/api/professionisti")
    def api_add_professional(payload: ProfessionalIn) -> dict[str, Any]:
        call(er.add_professional, payload.id, payload.name, payload.surname, payload.specialization, payload.period)
        return {"ok": True, "id": payload.id}

    @app.get("/api/professionisti")
    def api_professionals(specialization: str = Query(...)) -> list[str]:
        return call(er.get_professionals, specialization)

    @app.get("/api/professionisti/in-servizio")
    def api_professionals_in_service(
        specialization: str = Query(...),
        period: str = Query(...),
    ) -> list[str]:
        return call(er.get_professionals_in_service, specialization, period)

    @app.get("/api/professionisti/{professional_id}")
    def api_professional(professional_id: str) -> dict[str, Any]:
        return professional_flat(call(er.get_professional_by_id, professional_id))

    @app.post("/api/professionisti/import")
    def api_import_professionals(path: str = Query(...)) -> dict[str, Any]:
        try:
            n = call(er.read_from_file_professionals, path)
        except DataImportError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return {"ok": True, "importati": n}

    # Reparti

    @app.post("/api/reparti")
    def api_add_department(payload: DepartmentIn) -> dict[str, Any]:
        call(er.add_department, payload.name, payload.max_patients)
        return {"ok": True, "name": payload.name}

    @app.get("/api/reparti")
    def api_departments() -> list[str]:
        return call(er.get_departments)

    @app.post("/api/reparti/import")
    def api_import_departments(path: str = Query(...)) -> dict[str, Any]:
        try:
            n = call(er.read_from_file_departments, path)
        except DataImportError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return {"ok": True, "importati": n}

    @app.get("/api/reparti/{department_name}/ricoverati")
    def api_hospitalized(department_name: str) -> dict[str, Any]:
        n = call(er.get_number_of_patients_hospitalized_by_department, department_name)
        return {"reparto": department_name, "ricoverati": n}

    # Pazienti

    @app.post("/api/pazienti")
    def api_add_patient(payload: PatientIn) -> dict[str, Any]:
        p = call(
            er.add_patient,
            payload.fiscal_code,
            payload.name,
            payload.surname,
            payload.date_of_birth,
            payload.reason,
            payload.date_time_accepted,
        )
        return patient_flat(p)

    @app.get("/api/pazienti")
    def api_find_patients(identifier: str = Query(...)) -> list[dict]:
        return [patient_flat(p) for p in call(er.get_patient, identifier)]

    @app.get("/api/pazienti/per-data")
    def api_patients_by_date(date: str = Query(...)) -> list[str]:
        return call(er.get_patients_by_date, date)

    @app.get("/api/pazienti/{fiscal_code}/ricoverato")
    def api_verify_patient(fiscal_code: str) -> dict[str, Any]:
        return {"fiscal_code": fiscal_code, "ricoverato": call(er.verify_patient, fiscal_code)}

    # Assegnazione, referti, esito

    @app.post("/api/assegnazioni")
    def api_assign(payload: AssignmentIn) -> dict[str, Any]:
        pro_id = call(er.assign_patient_to_professional, payload.fiscal_code, payload.specialization)
        return {"fiscal_code": payload.fiscal_code, "professional_id": pro_id}

    @app.post("/api/referti")
    def api_save_report(payload: ReportIn) -> dict[str, Any]:
        r = call(er.save_report, payload.professional_id, payload.fiscal_code, payload.date, payload.description)
        return report_flat(r)

    @app.get("/api/referti")
    def api_reports() -> list[dict]:
        return [report_flat(r) for r in call(er.reports.all)]

    @app.post("/api/esiti")
    def api_discharge_or_hospitalize(payload: DischargeIn) -> dict[str, Any]:
        esito = call(er.discharge_or_hospitalize, payload.fiscal_code, payload.department_name)
        return {"fiscal_code": payload.fiscal_code, "status": esito.value}

    # Statistiche

    @app.get("/api/statistiche")
    def api_stats(
        date: str | None = Query(None),
        specialization: str | None = Query(None),
    ) -> dict[str, Any]:
        def snapshot() -> dict[str, Any]:
            # un solo lock per tutti i contatori: fotografia coerente
            out: dict[str, Any] = {
                "pazienti": er.get_number_of_patients(),
                "dimessi": er.get_number_of_patients_discharged(),
            }
            if date is not None:
                out["pazienti_per_data"] = er.get_number_of_patients_by_date(date)
            if specialization is not None:
                out["dimessi_per_specializzazione"] = (
                    er.get_number_of_patients_assigned_to_professional_discharged(specialization)
                )
            return out

        return call(snapshot)

    return app
