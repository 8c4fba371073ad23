from __future__ import annotations

import pytest

from emergency.config import Settings
from emergency.services import EmergencyApp


@pytest.fixture
def er():
    app = EmergencyApp(Settings())
    yield app
    app.close()


@pytest.fixture
def er_with_staff(er):
    er.add_professional("M001", "Mario", "Rossi", "Cardiologia", "2024-01-01 to 2024-12-31")
    er.add_professional("M002", "Laura", "Bianchi", "Cardiologia", "2024-06-01 to 2025-05-31")
    er.add_professional("M003", "Paolo", "Verdi", "Ortopedia", "2024-01-01 to 2024-06-30")
    er.add_department("Cardiologia", 2)
    er.add_department("Ortopedia", 1)
    return er
