"""
Fixtures compartidas: engine SQLite en memoria inyectado en create_app.
"""
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from employee_api.core.config import Settings
from employee_api.db import build_engine, build_session_factory, init_db
from employee_api.main import create_app


def make_session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    return engine, build_session_factory(engine)


def make_client(**settings_overrides):
    """TestClient sin lifespan (no se usa como context manager) sobre una base nueva."""
    engine, _ = make_session_factory()
    settings = Settings(DATABASE_URL="sqlite://", DB_CREATE_TABLES=False, **settings_overrides)
    app = create_app(settings, engine=engine)
    return TestClient(app), engine


def employee_payload(**overrides):
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "phone": "1234567890",
        "zip": "10001",
        "hireDate": "02/29/2024",
    }
    payload.update(overrides)
    return payload
