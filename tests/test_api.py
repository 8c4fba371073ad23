"""API FastAPI."""
import pytest
from fastapi.testclient import TestClient

from emergency.api_main import create_app
from emergency.config import Settings
from emergency.errors import DataImportError


@pytest.fixture
def client():
    with TestClient(create_app(Settings(seed_demo=True))) as c:
        yield c


def test_seeded_departments(client):
    r = client.get("/api/reparti")
    assert r.status_code == 200
    assert r.json() == ["Cardiologia", "Medicina Interna", "Ortopedia"]


def test_empty_departments_is_404():
    with TestClient(create_app(Settings())) as c:
        r = c.get("/api/reparti")
        assert r.status_code == 404


def test_professional_endpoints(client):
    r = client.post(
        "/api/professionisti",
        json={"id": "A01", "name": "Anna", "surname": "Blu", "specialization": "Cardiologia",
              "period": "2024-01-01 to 2024-12-31"},
    )
    assert r.status_code == 200

    assert client.get("/api/professionisti", params={"specialization": "Cardiologia"}).json() == [
        "A01", "M001", "M002"
    ]
    r = client.get(
        "/api/professionisti/in-servizio",
        params={"specialization": "Ortopedia", "period": "2024-02-01 to 2024-02-10"},
    )
    assert r.json() == ["M003"]
    assert client.get("/api/professionisti/A01").json()["surname"] == "Blu"
    assert client.get("/api/professionisti/ZZZ").status_code == 404


def test_patient_flow(client):
    r = client.post(
        "/api/pazienti",
        json={"fiscal_code": "CF1", "name": "Mario", "surname": "Neri", "date_of_birth": "1980-01-01",
              "reason": "Dolore toracico", "date_time_accepted": "2024-07-01"},
    )
    assert r.status_code == 200
    assert r.json()["status"] == "ADMITTED"

    assert client.get("/api/pazienti", params={"identifier": "Neri"}).json()[0]["fiscal_code"] == "CF1"
    assert client.get("/api/pazienti/per-data", params={"date": "2024-07-01"}).json() == ["CF1"]

    r = client.post("/api/assegnazioni", json={"fiscal_code": "CF1", "specialization": "Cardiologia"})
    assert r.json()["professional_id"] == "M001"

    r = client.post(
        "/api/referti",
        json={"professional_id": "M001", "fiscal_code": "CF1", "date": "2024-07-01", "description": "ECG"},
    )
    assert r.json()["id"] == "1000"

    r = client.post("/api/esiti", json={"fiscal_code": "CF1", "department_name": "Cardiologia"})
    assert r.json()["status"] == "HOSPITALIZED"
    assert client.get("/api/pazienti/CF1/ricoverato").json()["ricoverato"] is True
    assert client.get("/api/reparti/Cardiologia/ricoverati").json()["ricoverati"] == 1

    stats = client.get("/api/statistiche", params={"date": "2024-07-01"}).json()
    assert stats["pazienti"] == 1
    assert stats["pazienti_per_data"] == 1
    assert stats["dimessi"] == 0


def test_assignment_errors_are_404(client):
    r = client.post("/api/assegnazioni", json={"fiscal_code": "NOPE", "specialization": "Cardiologia"})
    assert r.status_code == 404
    r = client.post(
        "/api/referti",
        json={"professional_id": "XXX", "fiscal_code": "CF1", "date": "2024-07-01", "description": "x"},
    )
    assert r.status_code == 404


def test_import_endpoint(client, tmp_path):
    path = tmp_path / "reparti.csv"
    path.write_text("name,maxPatients\nPediatria,4\n", encoding="utf-8")
    r = client.post("/api/reparti/import", params={"path": str(path)})
    assert r.json() == {"ok": True, "importati": 1}
    assert "Pediatria" in client.get("/api/reparti").json()

    r = client.post("/api/reparti/import", params={"path": str(tmp_path / "manca.csv")})
    assert r.status_code == 400


def test_module_exposes_only_the_factory():
    from emergency import api_main

    assert not hasattr(api_main, "app")


def test_startup_import_failure_propagates(tmp_path):
    app = create_app(Settings(departments_csv=str(tmp_path / "manca.csv")))
    with pytest.raises(DataImportError):
        with TestClient(app):
            pass


def test_reports_listing_and_stats(client):
    client.post(
        "/api/pazienti",
        json={"fiscal_code": "CF2", "name": "Anna", "surname": "Blu", "date_of_birth": "1990-01-01",
              "reason": "Frattura", "date_time_accepted": "2024-03-01"},
    )
    client.post(
        "/api/referti",
        json={"professional_id": "M003", "fiscal_code": "CF2", "date": "2024-03-01", "description": "RX"},
    )
    assert [r["id"] for r in client.get("/api/referti").json()] == ["1000"]

    # Ortopedia ha 5 posti nel seed: ricoverato, non dimesso
    client.post("/api/esiti", json={"fiscal_code": "CF2", "department_name": "Ortopedia"})
    stats = client.get("/api/statistiche", params={"specialization": "Ortopedia"}).json()
    assert stats == {"pazienti": 1, "dimessi": 0, "dimessi_per_specializzazione": 0}
