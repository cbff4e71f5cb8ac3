from types import SimpleNamespace

import pytest

from goalslayer.services.achievements import achievement_tier, count_completed_categories


@pytest.mark.parametrize(
    "completed,tier",
    [(0, "none"), (1, "none"), (2, "track"), (3, "track"), (4, "rock"), (5, "rock"), (6, "slayed")],
)
def test_achievement_tier(completed, tier):
    assert achievement_tier(completed) == tier


def _ug(category, completed):
    return SimpleNamespace(completed=completed, goal=SimpleNamespace(category=SimpleNamespace(name=category)))


def test_count_completed_categories_example_week():
    week = [
        _ug("Personal", True), _ug("Personal", True),
        _ug("Health", True), _ug("Health", True),
        _ug("Fun", True), _ug("Fun", False),
        _ug("Family", False), _ug("Family", False),
        _ug("Career", False), _ug("Career", False),
        _ug("Inner Peace", False), _ug("Inner Peace", False),
    ]
    completed = count_completed_categories(week)
    assert completed == 2
    assert achievement_tier(completed) == "track"


def test_no_achievement_below_two_categories(client, make_user, select_week, complete_categories):
    user = make_user()
    selection = select_week(user)
    complete_categories(user, selection, 1)

    assert client.get("/api/user/achievements", headers=user.headers).json() == []
    progress = client.get("/api/user/progress", headers=user.headers).json()
    assert progress["categoriesCompleted"] == 1
    assert progress["achievement"] is None


def test_first_crossing_is_kept(client, make_user, select_week, complete_categories):
    user = make_user()
    selection = select_week(user)

    complete_categories(user, selection, 2)
    achievements = client.get("/api/user/achievements", headers=user.headers).json()
    assert len(achievements) == 1
    assert achievements[0]["level"] == "track"
    assert achievements[0]["categoriesCompleted"] == 2

    # Finish everything: still one row, still the first tier reached
    week = client.get("/api/user/goals/week", headers=user.headers).json()
    for ug in week:
        if not ug["completed"]:
            client.patch(f"/api/user-goals/{ug['id']}/complete", headers=user.headers)

    achievements = client.get("/api/user/achievements", headers=user.headers).json()
    assert len(achievements) == 1
    assert achievements[0]["level"] == "track"

    progress = client.get("/api/user/progress", headers=user.headers).json()
    assert progress["categoriesCompleted"] == 6
    assert progress["achievement"]["level"] == "track"
    assert progress["progressPercentage"] == 100


def test_achievement_survives_uncompleting(client, make_user, select_week, complete_categories):
    user = make_user()
    selection = select_week(user)
    complete_categories(user, selection, 4)

    # categories finish one at a time, so the week's row was written at two
    before = client.get("/api/user/achievements", headers=user.headers).json()
    assert [(a["level"], a["categoriesCompleted"]) for a in before] == [("track", 2)]

    first = selection[0]
    r = client.patch(f"/api/user-goals/{first['id']}/complete", headers=user.headers)
    assert r.json()["completed"] is False
    assert r.json()["completedAt"] is None

    after = client.get("/api/user/achievements", headers=user.headers).json()
    assert after == before
    progress = client.get("/api/user/progress", headers=user.headers).json()
    assert progress["categoriesCompleted"] == 3
    assert progress["achievement"]["level"] == "track"


def test_earning_records_activity(client, make_user, select_week, complete_categories):
    user = make_user()
    complete_categories(user, select_week(user), 6)

    feed = client.get("/api/activity-feed", headers=user.headers).json()
    earned = [a for a in feed if a["activityType"] == "achievement_earned"]
    assert len(earned) == 1
    assert earned[0]["data"]["level"] == "track"
