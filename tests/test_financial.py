import csv
from io import StringIO

from conftest import record

PERIOD = "start=2024-05-01&end=2024-05-31"


def add_patient(client, headers, clinic_id, name, **extra):
    payload = {"clinic_id": clinic_id, "name": name, "birthdate": "2010-01-01", **extra}
    response = client.post("/patients", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_worked_example_through_api(client, auth_headers, patient):
    record(client, auth_headers, patient["id"], "2024-05-02", "presente")
    record(client, auth_headers, patient["id"], "2024-05-09", "falta", True)
    record(client, auth_headers, patient["id"], "2024-05-16", "falta", False)
    record(client, auth_headers, patient["id"], "2024-05-23", "falta_remunerada")
    # outside the period
    record(client, auth_headers, patient["id"], "2024-06-01", "presente")

    response = client.get(f"/financial/patients/{patient['id']}?{PERIOD}", headers=auth_headers)
    assert response.status_code == 200
    row = response.json()["patient"]
    assert row["absence_policy"] == "confirmed_only"
    assert row["revenue"] == 300
    assert row["loss"] == 100
    assert row["net"] == 200
    assert row["sessions"]["total"] == 4


def test_clinic_net_equals_sum_of_patient_nets(client, auth_headers, clinic, patient):
    fixed = add_patient(client, auth_headers, clinic["id"], "Fixo", payment_type="fixo", payment_value=900)
    other = add_patient(client, auth_headers, clinic["id"], "Outro", payment_value=60)
    record(client, auth_headers, patient["id"], "2024-05-02")
    record(client, auth_headers, patient["id"], "2024-05-03", "falta")
    record(client, auth_headers, other["id"], "2024-05-04", "falta", True)
    record(client, auth_headers, fixed["id"], "2024-05-05", "falta")

    summary = client.get(f"/financial/summary?{PERIOD}", headers=auth_headers).json()
    clinic_row = summary["clinics"][0]
    patient_rows = [p for p in summary["patients"] if p["clinic_id"] == clinic["id"]]

    assert clinic_row["patient_count"] == 3
    assert clinic_row["net"] == sum(p["net"] for p in patient_rows)
    assert clinic_row["revenue"] == 100 + 900 + 60
    assert clinic_row["loss"] == 100
    assert clinic_row["share_percent"] == 100.0
    assert summary["totals"]["net"] == clinic_row["net"]


def test_share_percent_across_clinics(client, auth_headers, clinic, patient):
    second = client.post(
        "/clinics", json={"name": "Beta", "payment_amount": 300}, headers=auth_headers
    ).json()
    second_patient = add_patient(client, auth_headers, second["id"], "Beto")
    record(client, auth_headers, patient["id"], "2024-05-02")
    record(client, auth_headers, second_patient["id"], "2024-05-02")

    summary = client.get(f"/financial/summary?{PERIOD}", headers=auth_headers).json()
    shares = {c["clinic_name"]: c["share_percent"] for c in summary["clinics"]}
    assert shares == {"Beta": 75.0, "Clínica Aurora": 25.0}


def test_legacy_flag_used_without_explicit_policy(client, auth_headers):
    clinic = client.post(
        "/clinics",
        json={"name": "Legado", "payment_amount": 50, "pays_on_absence": False},
        headers=auth_headers,
    ).json()
    patient = add_patient(client, auth_headers, clinic["id"], "Lia")
    record(client, auth_headers, patient["id"], "2024-05-02", "falta", True)

    row = client.get(f"/financial/patients/{patient['id']}?{PERIOD}", headers=auth_headers).json()
    assert row["patient"]["absence_policy"] == "never"
    assert row["patient"]["revenue"] == 0
    assert row["patient"]["loss"] == 50


def test_private_revenue_added_to_grand_total(client, auth_headers, patient):
    record(client, auth_headers, patient["id"], "2024-05-02")
    for status in ("concluído", "agendado", "cancelado"):
        response = client.post(
            "/private-appointments",
            json={
                "client_name": "Cliente",
                "date": "2024-05-10",
                "time": "10:00",
                "price": 200,
                "status": status,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201

    totals = client.get(f"/financial/summary?{PERIOD}", headers=auth_headers).json()["totals"]
    assert totals["private_revenue"] == 200
    assert totals["private_appointments"] == 3
    assert totals["grand_total"] == totals["net"] + 200


def test_archived_clinics_excluded_by_default(client, auth_headers, clinic, patient):
    record(client, auth_headers, patient["id"], "2024-05-02")
    client.post(f"/clinics/{clinic['id']}/archive", headers=auth_headers)

    summary = client.get(f"/financial/summary?{PERIOD}", headers=auth_headers).json()
    assert summary["clinics"] == []
    assert summary["totals"]["revenue"] == 0

    summary = client.get(
        f"/financial/summary?{PERIOD}&include_archived=true", headers=auth_headers
    ).json()
    assert summary["clinics"][0]["is_archived"] is True
    assert summary["totals"]["revenue"] == 100


def test_period_defaults_to_current_month(client, auth_headers):
    summary = client.get("/financial/summary", headers=auth_headers).json()
    assert summary["start"].endswith("-01")
    assert summary["start"][:7] == summary["end"][:7]


def test_end_before_start_rejected(client, auth_headers):
    response = client.get(
        "/financial/summary?start=2024-05-31&end=2024-05-01", headers=auth_headers
    )
    assert response.status_code == 400


def test_unknown_clinic_filter(client, auth_headers):
    response = client.get("/financial/summary?clinic_id=999", headers=auth_headers)
    assert response.status_code == 404


def test_csv_export(client, auth_headers, patient):
    record(client, auth_headers, patient["id"], "2024-05-02")
    response = client.get(f"/financial/export?{PERIOD}", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=financeiro_2024-05-01_2024-05-31" in response.headers["content-disposition"]

    rows = list(csv.reader(StringIO(response.text)))
    assert rows[0][0] == "Paciente"
    assert rows[1][0] == "Ana Souza"
    assert rows[1][-1] == "100.00"
