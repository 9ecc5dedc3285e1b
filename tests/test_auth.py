import time

from conftest import make_token
from jose import jwt

from diario.config import AUTH_JWT_SECRET
from diario.models import User


def test_missing_token_is_rejected(client):
    response = client.get("/clinics")
    assert response.status_code == 401


def test_malformed_token_is_rejected(client):
    response = client.get("/clinics", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token format"


def test_wrong_signature_is_rejected(client):
    token = jwt.encode({"sub": "x", "aud": "authenticated"}, "other-secret", algorithm="HS256")
    response = client.get("/clinics", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_wrong_audience_is_rejected(client):
    token = jwt.encode({"sub": "x", "aud": "anon"}, AUTH_JWT_SECRET, algorithm="HS256")
    response = client.get("/clinics", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client):
    token = make_token(exp=int(time.time()) - 60)
    response = client.get("/clinics", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_first_request_creates_profile(client, db_session):
    token = make_token(sub="new-user", email="nova@example.com", user_metadata={"full_name": "Nova"})
    response = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "nova@example.com"
    assert response.json()["name"] == "Nova"

    client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert db_session.query(User).filter(User.auth_uid == "new-user").count() == 1


def test_security_headers_present(client, auth_headers):
    response = client.get("/clinics", headers=auth_headers)
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
