"""Tests for the HTTP control API."""

import io
import time

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from screenflow.clock import FakeClock
from screenflow.config import GlobalConfig
from screenflow.dependencies import build_runtime
from screenflow.main import create_app


@pytest.fixture
def runtime():
    return build_runtime(GlobalConfig(), clock=FakeClock())


@pytest.fixture
def client(runtime):
    app = create_app(runtime=runtime, run_loop=False)
    with TestClient(app) as client:
        yield client


# --- States ---

def test_active_state(client):
    response = client.get("/api/states/active")
    assert response.status_code == 200
    assert response.json() == {"active_state": "idle"}


def test_available_states(client):
    response = client.get("/api/states/available")
    assert response.json() == {"available_states": ["idle", "alert", "dashboard"]}


def test_activate_with_fade_and_context(client, runtime):
    response = client.post(
        "/api/states/activate/alert",
        json={"effect": "fade", "duration": 0.5, "context": {"message": "HI"}},
    )
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "active_state": "alert"}

    machine = runtime.state_machine
    assert machine.get_current_state_name() == "alert"
    assert machine.get_current_state().message == "HI"
    assert machine.is_transitioning

    transition = client.get("/api/states/transition").json()
    assert transition == {"transitioning": True, "effect": "fade", "duration": 0.5, "progress": 0.0}


def test_activate_slide_with_direction(client, runtime):
    response = client.post("/api/states/activate/dashboard", json={"effect": "slide", "direction": "up"})
    assert response.status_code == 200
    assert runtime.state_machine.get_active_transition().effect.value == "slide_up"


def test_activate_without_body_uses_defaults(client, runtime):
    response = client.post("/api/states/activate/dashboard")
    assert response.status_code == 200
    assert runtime.state_machine.get_current_state_name() == "dashboard"

    transition = runtime.state_machine.get_active_transition()
    assert transition.effect.value == "none"
    assert transition.duration == 0.3


def test_activate_instant(client, runtime):
    client.post("/api/states/activate/alert", json={"effect": "none", "duration": 0})
    assert runtime.state_machine.get_current_state_name() == "alert"
    assert not runtime.state_machine.is_transitioning
    assert client.get("/api/states/transition").json() == {"transitioning": False}


def test_activate_dashboard_with_bad_values(client, runtime):
    response = client.post(
        "/api/states/activate/dashboard",
        json={"effect": "none", "duration": 0, "context": {"value1": "abc", "value2": 30}},
    )
    assert response.status_code == 200

    dashboard = runtime.state_machine.get_current_state()
    assert runtime.state_machine.get_current_state_name() == "dashboard"
    assert (dashboard.value1, dashboard.value2) == (75, 30)


def test_activate_unknown_state(client, runtime):
    response = client.post("/api/states/activate/missing")
    assert response.status_code == 404
    assert runtime.state_machine.get_current_state_name() == "idle"


def test_activate_unknown_effect(client, runtime):
    response = client.post("/api/states/activate/alert", json={"effect": "spin"})
    assert response.status_code == 400
    assert "Unknown transition effect" in response.json()["detail"]
    assert runtime.state_machine.get_current_state_name() == "idle"


def test_activate_rejects_negative_duration(client):
    response = client.post("/api/states/activate/alert", json={"effect": "fade", "duration": -1})
    assert response.status_code == 422


# --- Display ---

def test_display_info(client, runtime):
    runtime.state_machine.tick()
    assert client.get("/api/display/info").json() == {
        "width": 128,
        "height": 32,
        "frames_presented": 1,
    }


def test_snapshot_png(client, runtime):
    runtime.state_machine.tick()
    response = client.get("/api/display/snapshot")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")

    image = Image.open(io.BytesIO(response.content))
    assert image.size == (512, 128)


def test_snapshot_scale_bounds(client):
    assert client.get("/api/display/snapshot", params={"scale": 1}).status_code == 200
    assert client.get("/api/display/snapshot", params={"scale": 0}).status_code == 422
    assert client.get("/api/display/snapshot", params={"scale": 17}).status_code == 422


# --- Lifespan ---

def test_lifespan_runs_state_machine_loop():
    cfg = GlobalConfig()
    runtime = build_runtime(cfg)
    app = create_app(runtime=runtime)

    with TestClient(app):
        deadline = time.monotonic() + 2.0
        while runtime.surface.present_count == 0 and time.monotonic() < deadline:
            time.sleep(0.01)

        assert runtime.surface.present_count > 0
