from __future__ import annotations

import enum

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base
from .periods import period_contains


class PatientStatus(enum.Enum):
    ADMITTED = "ADMITTED"
    DISCHARGED = "DISCHARGED"
    HOSPITALIZED = "HOSPITALIZED"


class Professional(Base):
    __tablename__ = "professionals"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    surname: Mapped[str] = mapped_column(String(80), nullable=False)
    specialization: Mapped[str] = mapped_column(String(120), nullable=False)
    # "yyyy-MM-dd to yyyy-MM-dd"
    period: Mapped[str] = mapped_column(String(40), nullable=False)

    def is_available(self, desired_period: str) -> bool:
        return period_contains(self.period, desired_period)

    def contains_date(self, timestamp: str) -> bool:
        # istante puntuale: inizio e fine coincidono
        return period_contains(self.period, timestamp)

    def __repr__(self) -> str:
        return f"Professional({self.id}, {self.name} {self.surname}, {self.specialization})"


class Department(Base):
    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(120), primary_key=True)
    max_patients: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"Department({self.name}, max={self.max_patients})"


class Patient(Base):
    __tablename__ = "patients"

    fiscal_code: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    surname: Mapped[str] = mapped_column(String(80), nullable=False)
    date_of_birth: Mapped[str] = mapped_column(String(20), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    date_time_accepted: Mapped[str] = mapped_column(String(40), nullable=False)
    # vuoto finché il paziente non viene ricoverato
    department_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    status: Mapped[PatientStatus] = mapped_column(
        Enum(PatientStatus), default=PatientStatus.ADMITTED, nullable=False
    )

    def last_first(self) -> str:
        return self.surname + self.name

    def __repr__(self) -> str:
        return f"Patient({self.fiscal_code}, {self.name} {self.surname}, {self.status.value})"


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    professional_id: Mapped[str] = mapped_column(String(40), nullable=False)
    fiscal_code: Mapped[str] = mapped_column(String(40), nullable=False)
    date: Mapped[str] = mapped_column(String(40), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Report({self.id}, {self.professional_id} -> {self.fiscal_code})"
