"""
Tests for the dashboard state and its gateway client.
"""
import json
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from nova_health.dashboard import Dashboard, GatewayClient, Tab, UserProfile


def gateway(handler) -> GatewayClient:
    http_client = httpx.Client(
        base_url="http://gateway.test", transport=httpx.MockTransport(handler)
    )
    return GatewayClient(base_url="http://gateway.test", http_client=http_client)


def test_initial_state():
    dashboard = Dashboard()

    assert dashboard.active_tab is Tab.AGENT
    assert [(e.origin, e.text) for e in dashboard.transcript] == [
        ("agent", "Hi Alex 👋 How are you feeling today?")
    ]
    assert [m.name for m in dashboard.medications] == [
        "Lisinopril (10mg)",
        "Metformin (500mg)",
        "Atorvastatin (20mg)",
    ]
    assert dashboard.steps == 3842
    assert dashboard.bmi == Decimal("24.2")
    assert dashboard.bmi_category == "Normal"
    assert dashboard.meal_photo is None


def test_select_tab_accepts_names():
    dashboard = Dashboard()

    assert dashboard.select_tab("records") is Tab.RECORDS
    assert dashboard.select_tab(Tab.PROFILE) is Tab.PROFILE
    with pytest.raises(ValueError):
        dashboard.select_tab("settings")


def test_add_toggle_delete_medication():
    dashboard = Dashboard()

    added = dashboard.add_medication("  Aspirin 75mg ")
    assert added.name == "Aspirin 75mg"
    assert added.taken is False
    assert dashboard.medications[-1] is added

    assert dashboard.add_medication("   ") is None
    assert len(dashboard.medications) == 4

    assert dashboard.toggle_medication(0).taken is False
    assert dashboard.toggle_medication(0).taken is True

    removed = dashboard.delete_medication(1)
    assert removed.name == "Metformin (500mg)"
    assert [m.name for m in dashboard.medications] == [
        "Lisinopril (10mg)",
        "Atorvastatin (20mg)",
        "Aspirin 75mg",
    ]

    with pytest.raises(IndexError):
        dashboard.toggle_medication(3)
    with pytest.raises(IndexError):
        dashboard.delete_medication(-1)


def test_medication_reminder():
    dashboard = Dashboard()
    assert dashboard.medication_reminder == "Next medication due soon: Atorvastatin (20mg) at 20:00."

    dashboard.toggle_medication(2)
    assert dashboard.next_medication is None
    assert dashboard.medication_reminder == "All medications have been taken for the day."

    dashboard.add_medication("Vitamin D")
    assert dashboard.medication_reminder == "Next medication due soon: Vitamin D."


def test_steps_clamp_only_on_increment():
    dashboard = Dashboard(steps=9800)

    assert dashboard.add_steps() == 10000
    assert dashboard.add_steps() == 10000
    assert dashboard.step_progress == 100.0

    assert dashboard.set_steps(12000) == 12000
    assert dashboard.step_progress == 100.0

    assert dashboard.reset_steps() == 0
    assert dashboard.step_progress == 0.0


@pytest.mark.parametrize(
    "weight, category",
    [(50, "Underweight"), (70, "Normal"), (80, "Overweight"), (95, "Obese")],
)
def test_bmi_category(weight, category):
    assert Dashboard(weight_kg=weight).bmi_category == category


def test_meal_photo_is_local_only(tmp_path):
    photo = tmp_path / "lunch.jpg"
    photo.write_bytes(b"\xff\xd8\xff")
    dashboard = Dashboard()

    assert dashboard.attach_meal_photo(photo) == photo
    assert "lunch" not in dashboard.build_chat_request("hi").model_dump_json()

    dashboard.clear_meal_photo()
    assert dashboard.meal_photo is None

    with pytest.raises(FileNotFoundError):
        dashboard.attach_meal_photo(tmp_path / "missing.jpg")


def test_send_posts_snapshot_and_appends_reply():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"reply": "Great job!"}, headers={"X-Reply-Status": "ok"})

    dashboard = Dashboard(user_id="azmath")
    entry = dashboard.send("How am I doing?", gateway(handler))

    assert entry.origin == "agent"
    assert entry.text == "Great job!"
    assert [(e.origin, e.text) for e in dashboard.transcript[-2:]] == [
        ("user", "How am I doing?"),
        ("agent", "Great job!"),
    ]
    assert seen["path"] == "/chat"
    assert seen["body"]["message"] == "How am I doing?"
    assert seen["body"]["userId"] == "azmath"
    health = seen["body"]["healthData"]
    assert health["steps"] == 3842
    assert health["bmi"] == "24.2"
    assert health["medicationReminder"] == "Next medication due soon: Atorvastatin (20mg) at 20:00."
    assert [m["name"] for m in health["medications"] if not m["taken"]] == ["Atorvastatin (20mg)"]


def test_send_ignores_blank_input():
    def handler(request):
        raise AssertionError("gateway should not be called")

    dashboard = Dashboard()
    assert dashboard.send("   ", gateway(handler)) is None
    assert len(dashboard.transcript) == 1


def test_send_reports_server_error():
    dashboard = Dashboard()
    client = gateway(lambda request: httpx.Response(500, json={"reply": "Oops, AI error!"}))

    assert dashboard.send("hi", client).text == "Server error: Oops, AI error!"


def test_send_falls_back_to_reason_phrase():
    dashboard = Dashboard()
    client = gateway(lambda request: httpx.Response(502, json={}))

    assert dashboard.send("hi", client).text == "Server error: Bad Gateway"


def test_send_reports_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    dashboard = Dashboard()
    entry = dashboard.send("hi", gateway(handler))

    assert entry.text == "Error: connection refused"
    assert dashboard.transcript[-2].text == "hi"


def test_send_reports_undecodable_body():
    dashboard = Dashboard()
    client = gateway(lambda request: httpx.Response(200, text="<html>"))

    assert dashboard.send("hi", client).text.startswith("Error: ")


def test_client_against_gateway_app(client, fake_inference):
    http_client = client  # TestClient is an httpx.Client
    gateway_client = GatewayClient(base_url="http://testserver", http_client=http_client)
    dashboard = Dashboard()

    entry = dashboard.send("How am I doing?", gateway_client)

    assert entry.text == "Hello!"
    assert "Pending Medications: Atorvastatin (20mg)" in fake_inference.prompts[0]
    assert "BMI: 24.2" in fake_inference.prompts[0]


def test_list_medications(client):
    gateway_client = GatewayClient(base_url="http://testserver", http_client=client)

    meds = gateway_client.list_medications()

    assert [m.id for m in meds] == ["1", "2", "3"]
    assert meds[2].taken is False


def test_profile_defaults_and_greeting():
    dashboard = Dashboard()

    assert dashboard.profile.name == "Alex Johnson"
    assert dashboard.profile.email == "alex@example.com"
    assert dashboard.profile.wellness_score == 78
    assert all(dashboard.profile.preferences.values())
    assert dashboard.transcript[0].text.startswith("Hi Alex ")


def test_custom_profile_drives_greeting():
    dashboard = Dashboard(profile=UserProfile(name="Sam Rivera", email="sam@example.com"))

    assert dashboard.transcript[0].text == "Hi Sam 👋 How are you feeling today?"


def test_toggle_preference():
    dashboard = Dashboard()

    assert dashboard.toggle_preference("Fitness Nudges") is False
    assert dashboard.profile.preferences["Fitness Nudges"] is False
    assert dashboard.toggle_preference("Fitness Nudges") is True

    with pytest.raises(KeyError):
        dashboard.toggle_preference("Dark Mode")


def test_profile_is_not_sent_to_gateway():
    payload = Dashboard().build_chat_request("hi").model_dump_json(by_alias=True)

    assert "alex@example.com" not in payload
