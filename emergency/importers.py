"""
Caricamento massivo da CSV (una riga di intestazione, poi un record per riga).

Formati:
- professionisti: id,name,surname,specialization,period
- reparti:        name,maxPatients
"""
from __future__ import annotations

import logging
from os import PathLike
from typing import IO, TYPE_CHECKING, Iterator

import pandas as pd

from .errors import DataImportError

if TYPE_CHECKING:
    from .services import EmergencyApp

logger = logging.getLogger(__name__)

PROFESSIONAL_COLUMNS = ["id", "name", "surname", "specialization", "period"]
DEPARTMENT_COLUMNS = ["name", "max_patients"]


def _rows(source: str | PathLike | IO[str] | None, columns: list[str]) -> Iterator[tuple[int, list[str]]]:
    if source is None:
        raise DataImportError("Sorgente CSV mancante")

    try:
        df = pd.read_csv(
            source,
            header=0,
            names=columns,
            index_col=False,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        # file completamente vuoto: niente da importare
        return
    except (OSError, pd.errors.ParserError) as e:
        raise DataImportError(f"Errore lettura CSV: {e}") from e

    # riga 1 = intestazione
    for lineno, row in enumerate(df.itertuples(index=False, name=None), start=2):
        values = list(row)
        # con keep_default_na=False i campi mancanti arrivano come stringa vuota
        if any(pd.isna(v) or v == "" for v in values):
            raise DataImportError(f"Riga {lineno}: campi mancanti (attesi {len(columns)})")
        yield lineno, values


def read_professionals(app: EmergencyApp, source: str | PathLike | IO[str] | None) -> int:
    count = 0
    for _, (id, name, surname, specialization, period) in _rows(source, PROFESSIONAL_COLUMNS):
        app.add_professional(id, name, surname, specialization, period)
        count += 1
    logger.info("Importati %d professionisti", count)
    return count


def read_departments(app: EmergencyApp, source: str | PathLike | IO[str] | None) -> int:
    count = 0
    for lineno, (name, max_patients) in _rows(source, DEPARTMENT_COLUMNS):
        try:
            capacity = int(max_patients)
        except ValueError as e:
            raise DataImportError(f"Riga {lineno}: capienza non numerica '{max_patients}'") from e
        app.add_department(name, capacity)
        count += 1
    logger.info("Importati %d reparti", count)
    return count
