def test_update_profile(client, auth_headers):
    response = client.put(
        "/profile",
        json={"name": "Dra. Helena", "phone": "11 3333-4444", "professional_id": "CRP 06/123"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    profile = client.get("/profile", headers=auth_headers).json()
    assert profile["name"] == "Dra. Helena"
    assert profile["phone"] == "+551133334444"
    assert profile["email"] == "terapeuta@example.com"


def test_invalid_phone(client, auth_headers):
    response = client.put("/profile", json={"phone": "123"}, headers=auth_headers)
    assert response.status_code == 422


def test_single_default_stamp(client, auth_headers):
    first = client.post(
        "/stamps",
        json={"name": "Helena", "clinical_area": "Psicologia", "is_default": True},
        headers=auth_headers,
    ).json()
    second = client.post(
        "/stamps",
        json={"name": "Helena", "clinical_area": "Neuropsicologia", "is_default": True},
        headers=auth_headers,
    ).json()

    stamps = {s["id"]: s["is_default"] for s in client.get("/stamps", headers=auth_headers).json()}
    assert stamps == {first["id"]: False, second["id"]: True}

    client.put(f"/stamps/{first['id']}", json={"is_default": True}, headers=auth_headers)
    stamps = {s["id"]: s["is_default"] for s in client.get("/stamps", headers=auth_headers).json()}
    assert stamps == {first["id"]: True, second["id"]: False}


def test_deleting_stamp_clears_evolution_reference(client, auth_headers, patient):
    stamp = client.post(
        "/stamps", json={"name": "H", "clinical_area": "Fono"}, headers=auth_headers
    ).json()
    evolution = client.post(
        "/evolutions",
        json={"patient_id": patient["id"], "date": "2024-05-02", "stamp_id": stamp["id"]},
        headers=auth_headers,
    ).json()
    assert evolution["stamp_id"] == stamp["id"]

    assert client.delete(f"/stamps/{stamp['id']}", headers=auth_headers).status_code == 200
    refreshed = client.get(f"/evolutions/{evolution['id']}", headers=auth_headers).json()
    assert refreshed["stamp_id"] is None


def test_evolution_with_foreign_stamp_rejected(client, auth_headers, other_headers, patient):
    stamp = client.post(
        "/stamps", json={"name": "X", "clinical_area": "Y"}, headers=other_headers
    ).json()
    response = client.post(
        "/evolutions",
        json={"patient_id": patient["id"], "date": "2024-05-02", "stamp_id": stamp["id"]},
        headers=auth_headers,
    )
    assert response.status_code == 400
