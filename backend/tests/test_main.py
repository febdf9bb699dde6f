import os
import sys

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SEED_DEMO_DATA", "false")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import database, main
from app.models.employee import Employee


def test_health_and_routes_registered(monkeypatch):
    monkeypatch.setattr(main.settings, "seed_demo_data", False)

    with TestClient(main.app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "app": "VisaFlow"}

    paths = {route.path for route in main.app.routes}
    assert {
        "/api/employees",
        "/api/employees/{employee_id}",
        "/api/notifications",
        "/api/notifications/check",
        "/api/import",
        "/api/dashboard",
        "/api/data/backup",
    } <= paths


def test_startup_seeds_demo_employees(monkeypatch):
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(main.settings, "seed_demo_data", True)

    with TestClient(main.app):
        pass

    db = TestingSessionLocal()
    try:
        codes = sorted(e.employee_code for e in db.query(Employee).all())
    finally:
        db.close()
    assert codes == ["EMP001", "EMP002", "EMP003", "EMP004"]
