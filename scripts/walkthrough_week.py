#!/usr/bin/env python3
"""
Play one week of Goal Slayer against a running API.

Steps:
  - register (or log in) a user
  - pick the first two goals of every category
  - complete both goals in the first N categories
  - print the week's progress and a few recommendations

Usage examples:
  - Against a local backend:
      uvicorn goalslayer.main:app --app-dir backend &
      python scripts/walkthrough_week.py --base-url http://localhost:8000
  - Complete four categories to reach "rock":
      python scripts/walkthrough_week.py --base-url http://localhost:8000 --complete 4
"""

from __future__ import annotations

import argparse
import sys

import httpx


def login_or_register(client: httpx.Client, email: str, password: str) -> str:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    if r.status_code == 401:
        r = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "firstName": "Walkthrough"},
        )
    if r.status_code >= 300:
        raise RuntimeError(f"auth -> HTTP {r.status_code}: {r.text}")
    return r.json()["token"]


def pick_goals(client: httpx.Client) -> list[str]:
    """Two goals from every category, in catalog order."""
    goal_ids: list[str] = []
    for category in client.get("/api/categories").json():
        goals = client.get(f"/api/categories/{category['id']}/goals").json()
        goal_ids.extend(g["id"] for g in goals[:2])
    return goal_ids


def main() -> None:
    ap = argparse.ArgumentParser(description="Select, complete and report one week of goals")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--email", default="walkthrough@goalslayer.app")
    ap.add_argument("--password", default="walkthrough-password")
    ap.add_argument("--complete", type=int, default=2, help="Categories to fully complete (0-6)")
    args = ap.parse_args()

    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=15) as client:
        token = login_or_register(client, args.email, args.password)
        client.headers["Authorization"] = f"Bearer {token}"

        r = client.post("/api/user/select-goals", json={"goalIds": pick_goals(client)})
        if r.status_code >= 300:
            print(f"select-goals -> HTTP {r.status_code}: {r.text}", file=sys.stderr)
            sys.exit(1)
        selection = r.json()

        categories_done = []
        for ug in selection:
            name = ug["goal"]["category"]["name"]
            if name not in categories_done:
                if len(categories_done) >= args.complete:
                    continue
                categories_done.append(name)
            client.patch(f"/api/user-goals/{ug['id']}/complete").raise_for_status()

        progress = client.get("/api/user/progress").json()
        print(f"Week of {progress['weekStart']}: {progress['completedGoals']}/{progress['totalGoals']} goals")
        print(f"Categories completed: {progress['categoriesCompleted']}")
        achievement = progress.get("achievement")
        print(f"Achievement: {achievement['level'] if achievement else 'none yet'}")

        print("\nRecommended next:")
        for rec in client.get("/api/goals/recommendations").json()[:5]:
            print(f"  {rec['score']:6.2f}  {rec['goal']['description']}  ({rec['reason']})")


if __name__ == "__main__":
    main()
