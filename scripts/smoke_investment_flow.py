"""Smoke script for the end-to-end investment flow.

Sequence (temp database, static 83 rate, registration enabled):
 1. Register + log in.
 2. Create a hedge where team1 wins.
 3. Flip it to a six on team1 with team2 winning (metrics recomputed).
 4. Print summary, then delete.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import json
import os
import tempfile

from fastapi.testclient import TestClient

from hedge_tracker.core.config import Settings
from hedge_tracker.main import create_app


def run():
    with tempfile.TemporaryDirectory() as d:
        settings = Settings(
            db_path=os.path.join(d, "smoke.db"),
            jwt_secret="smoke-secret-smoke-secret-smoke-secret",
            enable_registration=True,
        )
        client = TestClient(create_app(settings_override=settings))
        creds = {"userId": "smoke", "password": "smoke-pass-123"}
        client.post("/api/auth/register", json=creds)
        token = client.post("/api/auth/login", json=creds).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        created = client.post(
            "/api/investments",
            headers=headers,
            json={
                "bettingId": "smoke-1",
                "team1": "Mumbai",
                "team2": "Chennai",
                "date": "2025-04-12",
                "odds1": 1.8,
                "odds2": 2.2,
                "winner": "team1",
                "currency": "INR",
            },
        ).json()
        updated = client.put(
            f"/api/investments/{created['id']}",
            headers=headers,
            json={"sixTeam1": True, "winner": "team2"},
        ).json()
        summary = client.get("/api/investments/summary", headers=headers).json()
        deleted = client.delete(f"/api/investments/{created['id']}", headers=headers)

        print(
            json.dumps(
                {
                    "created": created,
                    "updated": updated,
                    "summary": summary,
                    "delete_status": deleted.status_code,
                },
                indent=2,
            )
        )


if __name__ == "__main__":
    run()
