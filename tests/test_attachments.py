import pytest

from diario.domain.attachments import service as attachment_service


@pytest.fixture
def fake_storage(monkeypatch):
    deleted = []
    monkeypatch.setattr(
        attachment_service.storage,
        "generate_presigned_url",
        lambda key, expiration=3600: f"https://storage.test/{key}?signed",
    )
    monkeypatch.setattr(attachment_service.storage, "delete_object", deleted.append)
    return deleted


def register(client, headers, parent_id, path="auth-user-1/evolutions/laudo.pdf"):
    return client.post(
        "/attachments",
        json={
            "parent_id": parent_id,
            "parent_type": "patient",
            "name": "laudo.pdf",
            "file_path": path,
            "file_type": "application/pdf",
            "file_size": 2048,
        },
        headers=headers,
    )


def test_register_list_and_url(client, auth_headers, patient, fake_storage):
    response = register(client, auth_headers, patient["id"])
    assert response.status_code == 201
    attachment = response.json()

    listed = client.get(
        f"/attachments?parent_type=patient&parent_id={patient['id']}", headers=auth_headers
    ).json()
    assert [a["id"] for a in listed] == [attachment["id"]]

    url = client.get(f"/attachments/{attachment['id']}/url", headers=auth_headers).json()
    assert url["url"] == "https://storage.test/auth-user-1/evolutions/laudo.pdf?signed"
    assert url["expires_in"] == 3600


def test_delete_removes_stored_object(client, auth_headers, patient, fake_storage):
    attachment = register(client, auth_headers, patient["id"]).json()
    assert client.delete(f"/attachments/{attachment['id']}", headers=auth_headers).status_code == 200
    assert fake_storage == ["auth-user-1/evolutions/laudo.pdf"]
    assert client.get("/attachments", headers=auth_headers).json() == []


def test_path_outside_user_folder_forbidden(client, auth_headers, patient, fake_storage):
    response = register(client, auth_headers, patient["id"], path="auth-user-2/laudo.pdf")
    assert response.status_code == 403


def test_path_traversal_rejected(client, auth_headers, patient, fake_storage):
    response = register(client, auth_headers, patient["id"], path="auth-user-1/../x.pdf")
    assert response.status_code == 422


def test_parent_must_be_owned(client, other_headers, patient, fake_storage):
    response = register(client, other_headers, patient["id"], path="auth-user-2/laudo.pdf")
    assert response.status_code == 404
