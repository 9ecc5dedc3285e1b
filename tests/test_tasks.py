def test_task_lifecycle(client, auth_headers, patient):
    response = client.post(
        "/tasks", json={"title": "Ligar para responsável", "patient_id": patient["id"]}, headers=auth_headers
    )
    assert response.status_code == 201
    task = response.json()
    assert task["completed"] is False

    toggled = client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers).json()
    assert toggled["completed"] is True
    toggled = client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers).json()
    assert toggled["completed"] is False

    response = client.put(f"/tasks/{task['id']}", json={"title": "Ligar amanhã"}, headers=auth_headers)
    assert response.json()["title"] == "Ligar amanhã"

    assert client.delete(f"/tasks/{task['id']}", headers=auth_headers).status_code == 200
    assert client.get("/tasks", headers=auth_headers).json() == []


def test_filter_by_completion(client, auth_headers):
    first = client.post("/tasks", json={"title": "A"}, headers=auth_headers).json()
    client.post("/tasks", json={"title": "B"}, headers=auth_headers)
    client.post(f"/tasks/{first['id']}/toggle", headers=auth_headers)

    done = client.get("/tasks?completed=true", headers=auth_headers).json()
    assert [t["title"] for t in done] == ["A"]
    pending = client.get("/tasks?completed=false", headers=auth_headers).json()
    assert [t["title"] for t in pending] == ["B"]


def test_empty_title_rejected(client, auth_headers):
    assert client.post("/tasks", json={"title": "  "}, headers=auth_headers).status_code == 422


def test_task_for_unknown_patient(client, auth_headers):
    response = client.post("/tasks", json={"title": "A", "patient_id": 77}, headers=auth_headers)
    assert response.status_code == 404


def test_task_survives_patient_deletion(client, auth_headers, patient):
    task = client.post(
        "/tasks", json={"title": "A", "patient_id": patient["id"]}, headers=auth_headers
    ).json()
    client.delete(f"/patients/{patient['id']}", headers=auth_headers)

    tasks = client.get("/tasks", headers=auth_headers).json()
    assert [t["id"] for t in tasks] == [task["id"]]
    assert tasks[0]["patient_id"] is None
