"""
Tests for the FastAPI endpoints using the in-process TestClient.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

import api


@pytest.fixture
def client(monkeypatch):
	monkeypatch.setenv("FILMGATE_WORK_DELAY_MS", "0")
	monkeypatch.delenv("FILMGATE_DATA_PATH", raising=False)
	with TestClient(api.app) as c:  # context manager runs the lifespan startup
		yield c


def test_health(client):
	body = client.get("/health").json()
	assert body["status"] == "ok"
	assert body["catalog_ready"] is True
	assert body["catalog_size"] == 10


def test_search_dragon(client):
	resp = client.get("/search", params={"keyword": "DRAGON"})
	assert resp.status_code == 200
	body = resp.json()
	assert [m["title"] for m in body["matches"]] == ["How to Train Your Dragon", "Dragonheart"]
	assert body["matches"][0]["rating"] == 92.5
	assert body["dropped"] == 0
	assert 'Keyword: "DRAGON" | Matches: 2' in body["report"]
	assert api.GATE.available == api.GATE.capacity


def test_search_requires_keyword(client):
	assert client.get("/search").status_code == 422


def test_batch(client):
	resp = client.post("/batch", json={"keywords": ["dragon", "magic", "war", "zzz-nomatch"], "slots": 2})
	assert resp.status_code == 200
	body = resp.json()
	assert body["slots"] == 2
	assert body["peak_in_flight"] <= 2
	assert [t["state"] for t in body["tasks"]] == ["done"] * 4
	assert {t["keyword"]: t["matches"] for t in body["tasks"]} == {"dragon": 2, "magic": 2, "war": 2, "zzz-nomatch": 0}
	assert body["output"].count("Sorted by popularity rating (descending)") == 4
	assert "(No matches found)" in body["output"]


def test_batch_rejects_bad_slots(client):
	resp = client.post("/batch", json={"keywords": ["dragon"], "slots": 0})
	assert resp.status_code == 422


def test_search_bounds_long_keyword(client):
	keyword = "a" * 62 + "dragonZZZ"
	body = client.get("/search", params={"keyword": keyword}).json()
	assert body["keyword"] == keyword[:63]
	assert len(body["keyword"]) == 63

	task = client.post("/batch", json={"keywords": [keyword]}).json()["tasks"][0]
	assert task["keyword"] == body["keyword"]
	assert task["matches"] == len(body["matches"]) == 0
