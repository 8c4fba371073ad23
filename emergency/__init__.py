"""
Gestione accettazione Pronto Soccorso.

Struttura:
- db.py         : engine SQLite in memoria e sessioni SQLAlchemy
- models.py     : modelli ORM e enum di stato paziente
- periods.py    : confronto lessicografico dei periodi di servizio
- registries.py : archivi professionisti, reparti, pazienti e referti
- services.py   : EmergencyApp (assegnazione, ricovero/dimissione, statistiche)
- importers.py  : caricamento massivo da CSV
- seed.py       : dati dimostrativi
- api_main.py   : API FastAPI
- cli.py        : interfaccia a riga di comando
"""
from .errors import DataImportError, EmergencyError, NotFoundError
from .models import PatientStatus
from .services import EmergencyApp

__all__ = [
    "DataImportError",
    "EmergencyApp",
    "EmergencyError",
    "NotFoundError",
    "PatientStatus",
]
