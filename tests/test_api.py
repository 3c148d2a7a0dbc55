"""
Tests for the HTTP surface (notesynth.main): health and render endpoints.
"""
import sys
import os
import base64

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fastapi.testclient import TestClient
from notesynth.core.io import HEADER_SIZE
from notesynth.main import app

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "notesynth"}


def test_render_returns_wav():
    response = client.post("/render", json={"score": "120\n2\n0 C04 1\n1 E04 1\n"})
    assert response.status_code == 200
    body = response.json()
    wav = base64.b64decode(body["audio"])
    assert wav[:4] == b"RIFF"
    assert len(wav) == HEADER_SIZE + 2 * 44100
    assert body["notes"] == 2
    assert body["num_samples"] == 44100
    assert body["qc"]["status"] == "pass"


def test_render_with_params():
    response = client.post(
        "/render",
        json={"score": "60\n1\n0 A04 1\n", "params": {"note_amplitude": 0.0}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["num_samples"] == 44100
    assert body["qc"]["status"] == "warn"


def test_render_rejects_sample_rate_override():
    response = client.post(
        "/render",
        json={"score": "60\n1\n0 A04 1\n", "params": {"sample_rate": 8000}},
    )
    assert response.status_code == 422
    assert "InvalidArguments" in response.json()["detail"]


def test_render_silent_score_is_json_safe():
    response = client.post("/render", json={"score": "60\n1\n"})
    assert response.status_code == 200
    qc = response.json()["qc"]
    assert qc["peak_dbfs"] is None
    assert qc["status"] == "warn"


def test_render_bad_pitch():
    response = client.post("/render", json={"score": "60\n1\n0 H04 1\n"})
    assert response.status_code == 422
    assert "InvalidPitch" in response.json()["detail"]


def test_render_bad_params():
    response = client.post("/render", json={"score": "60\n1\n", "params": {"tempo": 1}})
    assert response.status_code == 422
    assert "InvalidArguments" in response.json()["detail"]


def test_render_song_too_long():
    response = client.post("/render", json={"score": "1e-300\n1e300\n"})
    assert response.status_code == 422
    assert "MalformedScore" in response.json()["detail"]


def test_render_missing_score():
    response = client.post("/render", json={})
    assert response.status_code == 422
