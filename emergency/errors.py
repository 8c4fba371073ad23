from __future__ import annotations


class EmergencyError(Exception):
    """Errore base del Pronto Soccorso."""


class NotFoundError(EmergencyError):
    """Entità assente oppure nessun candidato compatibile con la richiesta."""


class DataImportError(EmergencyError):
    """File di import mancante o riga malformata."""
