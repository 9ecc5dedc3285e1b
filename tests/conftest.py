import os

os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")
os.environ.setdefault("REDIS_HOST", "127.0.0.1")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from diario.config import AUTH_JWT_AUDIENCE, AUTH_JWT_SECRET
from diario.database import Base, get_db
from diario.domain.assistant.router import assistant_rate_limit
from diario.main import app


def make_token(sub: str = "auth-user-1", email: str = "terapeuta@example.com", **claims) -> str:
    payload = {"sub": sub, "email": email, "aud": AUTH_JWT_AUDIENCE, "role": "authenticated"}
    payload.update(claims)
    return jwt.encode(payload, AUTH_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[assistant_rate_limit] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {make_token(sub='auth-user-2', email='outro@example.com')}"}


@pytest.fixture
def clinic(client, auth_headers):
    response = client.post(
        "/clinics",
        json={
            "name": "Clínica Aurora",
            "type": "terceirizada",
            "payment_type": "sessao",
            "payment_amount": 100,
            "absence_payment_type": "confirmed_only",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def patient(client, auth_headers, clinic):
    response = client.post(
        "/patients",
        json={"clinic_id": clinic["id"], "name": "Ana Souza", "birthdate": "2015-03-10"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def record(client, headers, patient_id, day, status="presente", confirmed=None):
    response = client.post(
        "/evolutions",
        json={
            "patient_id": patient_id,
            "date": day,
            "text": "Sessão",
            "attendance_status": status,
            "confirmed_attendance": confirmed,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
