from datetime import datetime, time, timedelta
import random

from goalslayer.core.security import hash_password
from goalslayer.core.time_utils import current_week_start
from goalslayer.db import SessionLocal
from goalslayer.models.achievement import Achievement
from goalslayer.models.activity import ActivityFeed
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal
from goalslayer.models.user import User
from goalslayer.models.user_goal import UserGoal
from goalslayer.services.achievements import achievement_tier
from goalslayer.services.catalog import seed_catalog

DEMO_EMAIL = "demo@goalslayer.app"
DEMO_PASSWORD = "slay-the-week"


def get_or_create_demo_user(db) -> User:
    user = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if user:
        return user
    user = User(
        email=DEMO_EMAIL,
        password_hash=hash_password(DEMO_PASSWORD),
        first_name="Demo",
        last_name="User",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def clear_history(db, user_id: str) -> None:
    """Delete the demo user's selections and achievements so we can reseed cleanly."""
    db.query(UserGoal).filter(UserGoal.user_id == user_id).delete()
    db.query(Achievement).filter(Achievement.user_id == user_id).delete()
    db.query(ActivityFeed).filter(ActivityFeed.user_id == user_id).delete()
    db.commit()


def seed_weeks(db, user: User, weeks: int = 12) -> None:
    """Insert `weeks` past weeks of selections, ending with last week.

    Each week picks two random goals per category and completes each one
    with a per-category probability, so the charts show some contrast.
    """
    goals_by_category: dict[str, list[Goal]] = {}
    for goal in db.query(Goal).filter(Goal.is_custom.is_(False)).all():
        goals_by_category.setdefault(goal.category_id, []).append(goal)
    categories = db.query(Category).all()
    # Some categories get done more often than others
    success = {c.id: random.uniform(0.3, 0.9) for c in categories}

    this_monday = current_week_start()
    rows = 0
    for i in range(weeks, 0, -1):
        week_start = this_monday - timedelta(weeks=i)
        done_per_category = 0
        for category in categories:
            picked = random.sample(goals_by_category[category.id], 2)
            completed_here = 0
            for goal in picked:
                completed = random.random() < success[category.id]
                completed_at = None
                if completed:
                    completed_here += 1
                    day = week_start + timedelta(days=random.randint(0, 6))
                    completed_at = datetime.combine(day, time(hour=random.randint(7, 21)))
                db.add(
                    UserGoal(
                        user_id=user.id,
                        goal_id=goal.id,
                        week_start=week_start,
                        completed=completed,
                        completed_at=completed_at,
                    )
                )
                rows += 1
            if completed_here >= 2:
                done_per_category += 1

        level = achievement_tier(done_per_category)
        if level != "none":
            db.add(
                Achievement(
                    user_id=user.id,
                    week_start=week_start,
                    categories_completed=done_per_category,
                    level=level,
                )
            )

    db.commit()
    print(f"Seeded {rows} selections over {weeks} weeks for {user.email}")


def main():
    db = SessionLocal()
    try:
        seed_catalog(db)
        user = get_or_create_demo_user(db)
        clear_history(db, user.id)
        seed_weeks(db, user)
    finally:
        db.close()


if __name__ == "__main__":
    main()
