from conftest import record

from diario.models import Evolution, Patient


def test_create_and_list_clinics(client, auth_headers, clinic):
    assert clinic["pays_on_absence"] is True
    assert clinic["absence_payment_type"] == "confirmed_only"
    assert clinic["is_archived"] is False

    response = client.get("/clinics", headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["Clínica Aurora"]


def test_clinics_are_scoped_to_owner(client, clinic, other_headers):
    assert client.get("/clinics", headers=other_headers).json() == []
    assert client.get(f"/clinics/{clinic['id']}", headers=other_headers).status_code == 404


def test_policy_never_syncs_legacy_flag(client, auth_headers, clinic):
    response = client.put(
        f"/clinics/{clinic['id']}", json={"absence_payment_type": "never"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["pays_on_absence"] is False

    response = client.put(
        f"/clinics/{clinic['id']}", json={"absence_payment_type": "always"}, headers=auth_headers
    )
    assert response.json()["pays_on_absence"] is True


def test_clearing_policy_restores_default(client, auth_headers, clinic):
    client.put(
        f"/clinics/{clinic['id']}", json={"absence_payment_type": "never"}, headers=auth_headers
    )
    response = client.put(
        f"/clinics/{clinic['id']}", json={"absence_payment_type": None}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["absence_payment_type"] is None
    assert response.json()["pays_on_absence"] is True

    summary = client.get("/financial/summary", headers=auth_headers).json()
    assert summary["clinics"][0]["absence_policy"] == "always"


def test_invalid_clinic_payload(client, auth_headers):
    bad_payloads = [
        {"name": "  "},
        {"name": "X", "type": "hospital"},
        {"name": "X", "payment_type": "semanal"},
        {"name": "X", "absence_payment_type": "sometimes"},
        {"name": "X", "schedule_by_day": {"Segunda": {"start": "25:00", "end": "12:00"}}},
        {"name": "X", "schedule_by_day": {"Segunda": {"start": "12:00", "end": "08:00"}}},
        {"name": "X", "weekdays": ["Monday"]},
    ]
    for payload in bad_payloads:
        assert client.post("/clinics", json=payload, headers=auth_headers).status_code == 422


def test_archive_hides_clinic_from_default_list(client, auth_headers, clinic):
    response = client.post(f"/clinics/{clinic['id']}/archive", headers=auth_headers)
    assert response.json()["is_archived"] is True

    assert client.get("/clinics", headers=auth_headers).json() == []
    archived = client.get("/clinics?include_archived=true", headers=auth_headers).json()
    assert [c["id"] for c in archived] == [clinic["id"]]

    client.post(f"/clinics/{clinic['id']}/unarchive", headers=auth_headers)
    assert len(client.get("/clinics", headers=auth_headers).json()) == 1


def test_delete_clinic_cascades(client, auth_headers, clinic, patient, db_session):
    record(client, auth_headers, patient["id"], "2024-05-02")

    response = client.delete(f"/clinics/{clinic['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deletedPatients"] == 1

    db_session.expire_all()
    assert db_session.query(Patient).count() == 0
    assert db_session.query(Evolution).count() == 0


def test_packages_crud(client, auth_headers, clinic):
    response = client.post(
        f"/clinics/{clinic['id']}/packages",
        json={"name": "Pacote mensal", "price": 600},
        headers=auth_headers,
    )
    assert response.status_code == 201
    package = response.json()
    assert package["is_active"] is True

    response = client.put(
        f"/clinics/packages/{package['id']}", json={"price": 650}, headers=auth_headers
    )
    assert response.json()["price"] == 650

    packages = client.get(f"/clinics/{clinic['id']}/packages", headers=auth_headers).json()
    assert [p["id"] for p in packages] == [package["id"]]

    assert client.delete(f"/clinics/packages/{package['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/clinics/{clinic['id']}/packages", headers=auth_headers).json() == []


def test_negative_package_price_rejected(client, auth_headers, clinic):
    response = client.post(
        f"/clinics/{clinic['id']}/packages", json={"name": "P", "price": -1}, headers=auth_headers
    )
    assert response.status_code == 422


def test_deleting_package_detaches_patients(client, auth_headers, clinic, db_session):
    package = client.post(
        f"/clinics/{clinic['id']}/packages", json={"name": "P", "price": 500}, headers=auth_headers
    ).json()
    patient = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Bruno",
            "birthdate": "2012-01-01",
            "package_id": package["id"],
        },
        headers=auth_headers,
    ).json()

    response = client.delete(f"/clinics/packages/{package['id']}", headers=auth_headers)
    assert response.json()["detachedPatients"] == 1

    refreshed = client.get(f"/patients/{patient['id']}", headers=auth_headers).json()
    assert refreshed["package_id"] is None
    assert refreshed["payment_value"] == 500


def test_clinic_notes(client, auth_headers, clinic):
    response = client.post(
        f"/clinics/{clinic['id']}/notes",
        json={"category": "urgent", "text": "Trocar sala"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    note = response.json()

    notes = client.get(f"/clinics/{clinic['id']}/notes", headers=auth_headers).json()
    assert [n["text"] for n in notes] == ["Trocar sala"]

    assert client.delete(f"/clinics/notes/{note['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/clinics/{clinic['id']}/notes", headers=auth_headers).json() == []


def test_note_category_validated(client, auth_headers, clinic):
    response = client.post(
        f"/clinics/{clinic['id']}/notes",
        json={"category": "random", "text": "x"},
        headers=auth_headers,
    )
    assert response.status_code == 422
