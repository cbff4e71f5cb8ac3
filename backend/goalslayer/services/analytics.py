"""Historical roll-ups for the analytics charts.

All series are computed in Python from plain row tuples so the same code
runs on Postgres and sqlite.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from goalslayer.core.constants import CATEGORY_COMPLETION_THRESHOLD
from goalslayer.models.achievement import Achievement
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal
from goalslayer.models.user_goal import UserGoal


def _rate(done: int, total: int) -> float:
    return round(done / total * 100, 1) if total else 0.0


def weekly_completion_stats(db: Session, user_id: str, start: date, end: date) -> list[dict]:
    rows = (
        db.query(UserGoal.week_start, Goal.category_id, UserGoal.completed)
        .join(Goal, UserGoal.goal_id == Goal.id)
        .filter(UserGoal.user_id == user_id)
        .filter(UserGoal.week_start >= start)
        .filter(UserGoal.week_start <= end)
        .all()
    )

    totals: dict[date, int] = defaultdict(int)
    done: dict[date, int] = defaultdict(int)
    done_per_category: dict[date, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for week, category_id, completed in rows:
        totals[week] += 1
        if completed:
            done[week] += 1
            done_per_category[week][category_id] += 1

    return [
        {
            "week": week,
            "total_goals": totals[week],
            "completed_goals": done[week],
            "completion_rate": _rate(done[week], totals[week]),
            "categories_completed": sum(
                1 for n in done_per_category[week].values() if n >= CATEGORY_COMPLETION_THRESHOLD
            ),
        }
        for week in sorted(totals)
    ]


def category_performance(db: Session, user_id: str, start: date, end: date) -> list[dict]:
    rows = (
        db.query(Category.id, Category.name, UserGoal.completed)
        .select_from(UserGoal)
        .join(Goal, UserGoal.goal_id == Goal.id)
        .join(Category, Goal.category_id == Category.id)
        .filter(UserGoal.user_id == user_id)
        .filter(UserGoal.week_start >= start)
        .filter(UserGoal.week_start <= end)
        .all()
    )

    stats: dict[str, dict] = {}
    for category_id, name, completed in rows:
        entry = stats.setdefault(
            category_id,
            {"category_id": category_id, "category_name": name, "total_goals": 0, "completed_goals": 0},
        )
        entry["total_goals"] += 1
        if completed:
            entry["completed_goals"] += 1

    out = []
    for entry in sorted(stats.values(), key=lambda e: e["category_name"]):
        entry["completion_rate"] = _rate(entry["completed_goals"], entry["total_goals"])
        out.append(entry)
    return out


def completion_trends(db: Session, user_id: str, days: int, now: datetime | None = None) -> list[dict]:
    """Completed goals per calendar day over the last `days` days."""
    now = now or datetime.now()
    since = now - timedelta(days=days)
    rows = (
        db.query(UserGoal.completed_at)
        .filter(UserGoal.user_id == user_id)
        .filter(UserGoal.completed.is_(True))
        .filter(UserGoal.completed_at >= since)
        .filter(UserGoal.completed_at <= now)
        .all()
    )

    per_day: dict[date, int] = defaultdict(int)
    for (completed_at,) in rows:
        if completed_at is not None:
            per_day[completed_at.date()] += 1
    return [{"date": day, "completed_count": per_day[day]} for day in sorted(per_day)]


def achievement_progression(db: Session, user_id: str) -> list[dict]:
    rows = (
        db.query(Achievement.week_start, Achievement.level, Achievement.categories_completed)
        .filter(Achievement.user_id == user_id)
        .order_by(Achievement.week_start)
        .all()
    )
    return [
        {"week": week, "level": level, "categories_completed": count}
        for week, level, count in rows
    ]
