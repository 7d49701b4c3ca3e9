"""
Tests for the medication catalog and health check endpoints.
"""


def test_medications_returns_fixed_catalog(client):
    response = client.get("/medications")

    assert response.status_code == 200
    assert response.json() == [
        {"id": "1", "name": "Lisinopril (10mg)", "taken": True, "time": "08:00"},
        {"id": "2", "name": "Metformin (500mg)", "taken": True, "time": "12:00"},
        {"id": "3", "name": "Atorvastatin (20mg)", "taken": False, "time": "20:00"},
    ]


def test_medications_catalog_is_not_shared_state(client):
    from nova_health.controllers.medication_controller import MedicationController

    meds = MedicationController().list_medications()
    meds[2].taken = True

    assert client.get("/medications").json()[2]["taken"] is False


def test_health_check_reports_inference_target(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["inference_model"] == "amazon.titan-text-express-v1"
    assert body["aws_region"] == "us-east-1"
