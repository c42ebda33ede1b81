"""Integration tests for the forest plot web API.

These tests spin up a TestClient using FastAPI and verify that the
session endpoints return expected responses and status codes.
"""

import pytest
from fastapi.testclient import TestClient

from fpg.web.app import app

CSV_BYTES = b"study,effect,ci_low,ci_high\nA,1.0,0.8,1.25\nB,2.0,1.5,2.6\n"


@pytest.fixture
def client():
    """Return a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/api/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


def _upload(client, session_id: str, content: bytes, name: str = "data.csv"):
    return client.post(
        f"/api/sessions/{session_id}/upload",
        files={"file": (name, content, "text/csv")},
    )


def test_homepage(client):
    """Verify the homepage loads and contains expected text."""
    response = client.get("/")
    assert response.status_code == 200
    assert "Forest Plot Generator" in response.text
    assert "Upload CSV" in response.text


def test_static_script(client):
    response = client.get("/static/forest.js")
    assert response.status_code == 200


def test_upload_and_payload(client, session_id):
    response = _upload(client, session_id, CSV_BYTES)
    assert response.status_code == 200
    assert response.json()["rows"] == 2
    assert response.json()["file_name"] == "data.csv"

    payload = client.get(f"/api/sessions/{session_id}/payload").json()
    markers = payload["traces"][1]
    assert markers["y"] == [2, 1]
    assert payload["layout"]["shapes"][0]["x0"] == 1.0
    assert [row["study"] for row in payload["table"]] == ["A", "B"]


def test_failed_upload_keeps_rows(client, session_id):
    _upload(client, session_id, CSV_BYTES)
    response = _upload(client, session_id, b"study,effect\nA,1\nB,1,2,3\n", name="broken.csv")
    assert response.status_code == 400
    state = client.get(f"/api/sessions/{session_id}").json()
    assert state["rows"] == 2
    assert state["file_name"] == "data.csv"


def test_options_update(client, session_id):
    _upload(client, session_id, CSV_BYTES)
    response = client.patch(
        f"/api/sessions/{session_id}/options",
        json={"is_ratio": False, "mirror_x": True, "x_label": "Mean difference"},
    )
    assert response.status_code == 200
    assert response.json()["options"]["is_ratio"] is False

    layout = client.get(f"/api/sessions/{session_id}/payload").json()["layout"]
    assert layout["xaxis"]["type"] == "linear"
    assert layout["xaxis"]["autorange"] == "reversed"
    assert layout["xaxis"]["title"]["text"] == "Mean difference"
    assert layout["shapes"][0]["x0"] == 0.0


def test_invalid_options_rejected(client, session_id):
    response = client.patch(f"/api/sessions/{session_id}/options", json={"marker_scale": 0})
    assert response.status_code == 422


def test_colors_update(client, session_id):
    response = client.patch(f"/api/sessions/{session_id}/colors", json={"ci_color": "#ff0000"})
    assert response.status_code == 200
    assert response.json()["colors"]["ci_color"] == "rgba(255, 0, 0, 1)"


def test_invalid_color_rejected(client, session_id):
    response = client.patch(f"/api/sessions/{session_id}/colors", json={"ci_color": "not-a-color"})
    assert response.status_code == 422


def test_clear_rows(client, session_id):
    _upload(client, session_id, CSV_BYTES)
    response = client.delete(f"/api/sessions/{session_id}/rows")
    assert response.status_code == 200
    assert response.json()["rows"] == 0
    assert response.json()["file_name"] is None


def test_unknown_session_returns_404(client):
    response = client.get("/api/sessions/nonexistent/payload")
    assert response.status_code == 404


def test_stateless_render(client):
    body = {
        "rows": [
            {"study": "A", "effect": 1.0, "ci_low": 0.8, "ci_high": 1.25},
            {"study": "Subgroup"},
            {"study": "B", "effect": 2.0, "ci_low": 1.5, "ci_high": 2.6},
        ],
        "options": {"is_ratio": True, "mirror_x": True},
    }
    response = client.post("/api/render", json=body)
    assert response.status_code == 200
    payload = response.json()
    values = payload["layout"]["xaxis"]["tickvals"]
    assert values == sorted(values, reverse=True)
    assert payload["table"][1]["is_subheader"] is True
