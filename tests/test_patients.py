from datetime import date

from conftest import record


def test_payment_value_defaults_to_clinic_amount(patient):
    assert patient["payment_type"] == "sessao"
    assert patient["payment_value"] == 100


def test_explicit_payment_value_kept(client, auth_headers, clinic):
    response = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Carla",
            "birthdate": "2010-06-01",
            "payment_value": 120,
        },
        headers=auth_headers,
    )
    assert response.json()["payment_value"] == 120


def test_package_price_overrides_payment_value(client, auth_headers, clinic):
    package = client.post(
        f"/clinics/{clinic['id']}/packages", json={"name": "P", "price": 450}, headers=auth_headers
    ).json()
    response = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Davi",
            "birthdate": "2011-02-02",
            "payment_value": 80,
            "package_id": package["id"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["payment_value"] == 450
    assert response.json()["package_id"] == package["id"]


def test_package_from_other_clinic_rejected(client, auth_headers, clinic):
    other = client.post("/clinics", json={"name": "Outra"}, headers=auth_headers).json()
    package = client.post(
        f"/clinics/{other['id']}/packages", json={"name": "P", "price": 300}, headers=auth_headers
    ).json()
    response = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Eva",
            "birthdate": "2011-02-02",
            "package_id": package["id"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_inactive_package_rejected(client, auth_headers, clinic):
    package = client.post(
        f"/clinics/{clinic['id']}/packages",
        json={"name": "P", "price": 300, "is_active": False},
        headers=auth_headers,
    ).json()
    response = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Eva",
            "birthdate": "2011-02-02",
            "package_id": package["id"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_package_change_applies_to_future_only(client, auth_headers, clinic, patient):
    record(client, auth_headers, patient["id"], "2024-05-02")
    before = client.get(
        f"/financial/patients/{patient['id']}?start=2024-05-01&end=2024-05-31", headers=auth_headers
    ).json()
    assert before["patient"]["revenue"] == 100

    package = client.post(
        f"/clinics/{clinic['id']}/packages", json={"name": "P", "price": 150}, headers=auth_headers
    ).json()
    response = client.put(
        f"/patients/{patient['id']}", json={"package_id": package["id"]}, headers=auth_headers
    )
    assert response.json()["payment_value"] == 150

    # Raising the package price later does not touch the stored patient value
    client.put(f"/clinics/packages/{package['id']}", json={"price": 999}, headers=auth_headers)
    refreshed = client.get(f"/patients/{patient['id']}", headers=auth_headers).json()
    assert refreshed["payment_value"] == 150


def test_patient_unknown_clinic(client, auth_headers):
    response = client.post(
        "/patients",
        json={"clinic_id": 999, "name": "X", "birthdate": "2011-02-02"},
        headers=auth_headers,
    )
    assert response.status_code == 404


def test_search_and_filter(client, auth_headers, clinic, patient):
    client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Felipe",
            "birthdate": "2013-09-09",
            "diagnosis": "TEA",
        },
        headers=auth_headers,
    )
    names = [p["name"] for p in client.get("/patients?search=tea", headers=auth_headers).json()]
    assert names == ["Felipe"]

    by_clinic = client.get(f"/patients?clinic_id={clinic['id']}", headers=auth_headers).json()
    assert len(by_clinic) == 2


def test_phone_is_normalized(client, auth_headers, clinic):
    response = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Gil",
            "birthdate": "2013-09-09",
            "phone": "(11) 98765-4321",
        },
        headers=auth_headers,
    )
    assert response.json()["phone"] == "+5511987654321"


def test_birthdays_by_month(client, auth_headers, patient):
    march = client.get("/patients/birthdays?month=3", headers=auth_headers).json()
    assert [p["id"] for p in march] == [patient["id"]]
    assert client.get("/patients/birthdays?month=4", headers=auth_headers).json() == []
    assert client.get("/patients/birthdays?month=13", headers=auth_headers).status_code == 400


def test_delete_patient(client, auth_headers, patient):
    assert client.delete(f"/patients/{patient['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/patients/{patient['id']}", headers=auth_headers).status_code == 404


def test_moving_clinic_rechecks_package(client, auth_headers, clinic):
    package = client.post(
        f"/clinics/{clinic['id']}/packages", json={"name": "P", "price": 80}, headers=auth_headers
    ).json()
    patient = client.post(
        "/patients",
        json={
            "clinic_id": clinic["id"],
            "name": "Hugo",
            "birthdate": "2012-04-04",
            "package_id": package["id"],
        },
        headers=auth_headers,
    ).json()
    other = client.post("/clinics", json={"name": "Beta"}, headers=auth_headers).json()

    response = client.put(
        f"/patients/{patient['id']}",
        json={"clinic_id": other["id"], "package_id": package["id"]},
        headers=auth_headers,
    )
    assert response.status_code == 400
    unchanged = client.get(f"/patients/{patient['id']}", headers=auth_headers).json()
    assert unchanged["clinic_id"] == clinic["id"]

    response = client.put(
        f"/patients/{patient['id']}", json={"clinic_id": other["id"]}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["clinic_id"] == other["id"]
    assert response.json()["package_id"] is None


def test_moving_clinic_moves_history(client, auth_headers, clinic, patient):
    today = date.today().isoformat()
    other = client.post(
        "/clinics",
        json={"name": "Beta", "payment_amount": 50, "absence_payment_type": "always"},
        headers=auth_headers,
    ).json()
    record(client, auth_headers, patient["id"], today, "presente")
    record(client, auth_headers, patient["id"], today, "falta")
    appointment = client.post(
        "/appointments",
        json={"patient_id": patient["id"], "date": today, "time": "09:00"},
        headers=auth_headers,
    ).json()
    assert appointment["clinic_id"] == clinic["id"]

    response = client.put(
        f"/patients/{patient['id']}", json={"clinic_id": other["id"]}, headers=auth_headers
    )
    assert response.status_code == 200

    moved = client.get(f"/evolutions?clinic_id={other['id']}", headers=auth_headers).json()
    assert len(moved) == 2
    assert client.get(f"/evolutions?clinic_id={clinic['id']}", headers=auth_headers).json() == []
    appointments = client.get(f"/appointments?patient_id={patient['id']}", headers=auth_headers).json()
    assert [a["clinic_id"] for a in appointments] == [other["id"]]

    # Financial and attendance views attribute the sessions to the same clinic
    summary = client.get("/financial/summary", headers=auth_headers).json()
    by_clinic = {c["clinic_id"]: c for c in summary["clinics"]}
    assert by_clinic[clinic["id"]]["patient_count"] == 0
    assert by_clinic[other["id"]]["absence_policy"] == "always"
    assert by_clinic[other["id"]]["revenue"] == 200
    assert by_clinic[other["id"]]["loss"] == 0

    report = client.get("/reports/attendance?period=month", headers=auth_headers).json()
    totals = {c["clinic_id"]: c["total"] for c in report["clinics"]}
    assert totals == {clinic["id"]: 0, other["id"]: 2}

    # Removing the old clinic keeps the moved history
    assert client.delete(f"/clinics/{clinic['id']}", headers=auth_headers).status_code == 200
    history = client.get(f"/evolutions?patient_id={patient['id']}", headers=auth_headers).json()
    assert len(history) == 2
