from __future__ import annotations

from .services import EmergencyApp


def seed_base(app: EmergencyApp) -> None:
    """
    Popola dati dimostrativi (idempotente):
    - reparti
    - professionisti
    """
    reparti = [
        ("Cardiologia", 10),
        ("Ortopedia", 5),
        ("Medicina Interna", 8),
    ]
    for nome, posti in reparti:
        app.add_department(nome, posti)

    professionisti = [
        ("M001", "Mario", "Rossi", "Cardiologia", "2024-01-01 to 2024-12-31"),
        ("M002", "Laura", "Bianchi", "Cardiologia", "2024-06-01 to 2025-05-31"),
        ("M003", "Paolo", "Verdi", "Ortopedia", "2024-01-01 to 2024-06-30"),
    ]
    for pid, nome, cognome, spec, periodo in professionisti:
        app.add_professional(pid, nome, cognome, spec, periodo)
