from datetime import datetime, time, timedelta

from goalslayer.core.time_utils import current_week_start
from goalslayer.models.achievement import Achievement
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal
from goalslayer.models.user_goal import UserGoal


def _seed_week(db, user_id, week_start, completed_categories):
    """Two goals per category; both done in the first `completed_categories`."""
    categories = db.query(Category).order_by(Category.name).all()
    for i, category in enumerate(categories):
        goals = (
            db.query(Goal).filter(Goal.category_id == category.id).order_by(Goal.description).limit(2).all()
        )
        for goal in goals:
            done = i < completed_categories
            db.add(
                UserGoal(
                    user_id=user_id,
                    goal_id=goal.id,
                    week_start=week_start,
                    completed=done,
                    completed_at=datetime.combine(week_start, time(9)) if done else None,
                )
            )
    db.commit()


def test_weekly_stats(client, db, make_user):
    user = make_user()
    this_week = current_week_start()
    last_week = this_week - timedelta(weeks=1)
    _seed_week(db, user.id, last_week, 2)
    _seed_week(db, user.id, this_week, 0)
    _seed_week(db, user.id, this_week - timedelta(weeks=10), 6)  # outside a 4-week window

    r = client.get("/api/analytics/weekly-stats", params={"weeks": 4}, headers=user.headers)
    assert r.status_code == 200
    stats = r.json()
    assert [s["week"] for s in stats] == [last_week.isoformat(), this_week.isoformat()]
    assert stats[0]["totalGoals"] == 12
    assert stats[0]["completedGoals"] == 4
    assert stats[0]["completionRate"] == 33.3
    assert stats[0]["categoriesCompleted"] == 2
    assert stats[1]["completionRate"] == 0.0

    r = client.get("/api/analytics/weekly-stats", headers=user.headers)
    assert len(r.json()) == 3


def test_weekly_stats_bounds(client, make_user):
    user = make_user()
    r = client.get("/api/analytics/weekly-stats", params={"weeks": 0}, headers=user.headers)
    assert r.status_code == 400


def test_category_performance(client, db, make_user):
    user = make_user()
    this_week = current_week_start()
    _seed_week(db, user.id, this_week, 1)
    _seed_week(db, user.id, this_week - timedelta(weeks=1), 1)

    perf = client.get("/api/analytics/category-performance", headers=user.headers).json()
    assert len(perf) == 6
    assert [p["categoryName"] for p in perf] == sorted(p["categoryName"] for p in perf)
    first = perf[0]
    assert first["categoryName"] == "Career"
    assert first["totalGoals"] == 4
    assert first["completedGoals"] == 4
    assert first["completionRate"] == 100.0
    assert all(p["completionRate"] == 0.0 for p in perf[1:])


def test_completion_trends(client, db, make_user):
    user = make_user()
    now = datetime.now()
    goal = db.query(Goal).first()
    week = current_week_start()
    for days_ago in (1, 1, 2, 45):
        db.add(
            UserGoal(
                user_id=user.id,
                goal_id=goal.id,
                week_start=week,
                completed=True,
                completed_at=now - timedelta(days=days_ago),
            )
        )
    db.commit()

    trends = client.get("/api/analytics/completion-trends", params={"days": 30}, headers=user.headers).json()
    assert trends == [
        {"date": (now - timedelta(days=2)).date().isoformat(), "completedCount": 1},
        {"date": (now - timedelta(days=1)).date().isoformat(), "completedCount": 2},
    ]


def test_achievement_progression(client, db, make_user):
    user = make_user()
    this_week = current_week_start()
    db.add(Achievement(user_id=user.id, week_start=this_week, categories_completed=4, level="rock"))
    db.add(
        Achievement(
            user_id=user.id,
            week_start=this_week - timedelta(weeks=2),
            categories_completed=2,
            level="track",
        )
    )
    db.commit()

    series = client.get("/api/analytics/achievement-progression", headers=user.headers).json()
    assert [p["level"] for p in series] == ["track", "rock"]
    assert series[1] == {"week": this_week.isoformat(), "level": "rock", "categoriesCompleted": 4}

    listed = client.get("/api/user/achievements", headers=user.headers).json()
    assert [a["level"] for a in listed] == ["rock", "track"]


def test_analytics_are_per_user(client, db, make_user):
    alice = make_user()
    bob = make_user()
    _seed_week(db, alice.id, current_week_start(), 3)

    assert client.get("/api/analytics/weekly-stats", headers=bob.headers).json() == []
    assert client.get("/api/analytics/category-performance", headers=bob.headers).json() == []
