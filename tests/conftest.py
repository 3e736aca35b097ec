"""Shared fixtures: an app on a temp SQLite file with a static 83 USD/INR rate."""

import pytest
from fastapi.testclient import TestClient

from hedge_tracker.core.config import Settings
from hedge_tracker.db.seed import seed_user
from hedge_tracker.main import create_app

TEST_SECRET = "test-secret-for-hedge-tracker-0123456789"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        db_path=tmp_path / "test.sqlite3",
        jwt_secret=TEST_SECRET,
        exchange_rate_provider="static",
        fallback_usd_inr_rate=83.0,
        enable_registration=True,
    )


@pytest.fixture
def app(settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app):
    return TestClient(app)


def login(client, user_id, password):
    resp = client.post("/api/auth/login", json={"userId": user_id, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def alice(app, client, settings):
    seed_user(settings.db_path, "alice", "alice-password")
    return login(client, "alice", "alice-password")


@pytest.fixture
def bob(app, client, settings):
    seed_user(settings.db_path, "bob", "bob-password")
    return login(client, "bob", "bob-password")


@pytest.fixture
def investment_payload():
    return {
        "bettingId": "bet-001",
        "team1": "Mumbai Indians",
        "team2": "Chennai Super Kings",
        "date": "2025-04-12",
        "odds1": 2,
        "odds2": 2,
        "winner": "team1",
        "currency": "INR",
    }
