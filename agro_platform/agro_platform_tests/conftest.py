"""
Pytest configuration for the Auth Service tests.

The environment is set before the service modules are imported so the
module-level settings and engine point at a throwaway SQLite file.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_agro_auth.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("PASSWORD_ROUNDS", "1000")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from agro_platform.agro_platform.auth_service.main import app  # noqa: E402
from agro_platform.agro_platform.auth_service.db import Base, engine, SessionLocal  # noqa: E402
from agro_platform.agro_platform.auth_service import models  # noqa: E402,F401
from agro_platform.agro_platform.auth_service.seed import seed_reference_data  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them with reference data before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_reference_data(db)


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def hasher():
    return app.state.password_hasher


@pytest.fixture
def codec():
    return app.state.token_codec


@pytest.fixture
def registration():
    return {
        "nombre": "Juan Pérez",
        "email": "juan@test.com",
        "contrasena": "123456",
        "tipo_usuario": "productor",
    }
