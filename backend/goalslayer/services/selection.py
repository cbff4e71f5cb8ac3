"""Weekly goal selection, completion toggling and the progress summary."""

import logging
from collections import Counter
from datetime import date, datetime

from sqlalchemy.orm import Session

from goalslayer.core.constants import GOALS_PER_CATEGORY, GOALS_PER_WEEK
from goalslayer.errors import NotFoundError, ValidationError
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal
from goalslayer.models.user_goal import UserGoal
from goalslayer.services import achievements
from goalslayer.services.catalog import visible_goals_query
from goalslayer.services.social import record_activity

logger = logging.getLogger(__name__)

SELECTION_COUNT_MESSAGE = "Must select exactly 12 goals (2 per category)"


def week_goals(db: Session, user_id: str, week_start: date) -> list[UserGoal]:
    """The user's selections for a week, ordered by category then goal."""
    return (
        db.query(UserGoal)
        .join(Goal, UserGoal.goal_id == Goal.id)
        .join(Category, Goal.category_id == Category.id)
        .filter(UserGoal.user_id == user_id)
        .filter(UserGoal.week_start == week_start)
        .order_by(Category.name, Goal.description)
        .all()
    )


def validate_selection(db: Session, user_id: str, goal_ids: list[str]) -> list[Goal]:
    """Check a submitted selection against the weekly rules.

    Exactly 12 distinct goals the user can see, two from every category.
    """
    if len(goal_ids) != GOALS_PER_WEEK:
        raise ValidationError(SELECTION_COUNT_MESSAGE)
    if len(set(goal_ids)) != len(goal_ids):
        raise ValidationError("Each goal can only be selected once")

    goals = visible_goals_query(db, user_id).filter(Goal.id.in_(goal_ids)).all()
    if len(goals) != len(goal_ids):
        raise ValidationError("One or more goals do not exist")

    per_category = Counter(g.category_id for g in goals)
    category_ids = {c for (c,) in db.query(Category.id).all()}
    if set(per_category) != category_ids or any(
        n != GOALS_PER_CATEGORY for n in per_category.values()
    ):
        raise ValidationError(SELECTION_COUNT_MESSAGE)
    return goals


def select_goals(db: Session, user_id: str, goal_ids: list[str], week_start: date) -> list[UserGoal]:
    """Replace the user's selection for `week_start`.

    Prior rows for that week are deleted, including their completion state.
    """
    validate_selection(db, user_id, goal_ids)

    db.query(UserGoal).filter(UserGoal.user_id == user_id).filter(
        UserGoal.week_start == week_start
    ).delete(synchronize_session=False)

    rows = [
        UserGoal(user_id=user_id, goal_id=goal_id, week_start=week_start, completed=False)
        for goal_id in goal_ids
    ]
    db.add_all(rows)
    record_activity(
        db,
        user_id,
        "goals_selected",
        f"Picked {len(rows)} goals for the week",
        data={"weekStart": week_start.isoformat()},
        commit=False,
    )
    db.commit()
    logger.info("User %s selected %d goals for week %s", user_id, len(rows), week_start)
    return week_goals(db, user_id, week_start)


def toggle_completion(db: Session, user_goal_id: str, user_id: str) -> UserGoal:
    """Flip a selection between done and not done.

    Re-evaluates the week's achievement afterwards.
    """
    user_goal = (
        db.query(UserGoal)
        .filter(UserGoal.id == user_goal_id)
        .filter(UserGoal.user_id == user_id)
        .first()
    )
    if not user_goal:
        raise NotFoundError("User goal not found")

    completing = not user_goal.completed
    user_goal.completed = completing
    user_goal.completed_at = datetime.now() if completing else None
    db.commit()
    db.refresh(user_goal)

    achievements.evaluate_weekly_achievement(
        db,
        user_id,
        user_goal.week_start,
        week_goals(db, user_id, user_goal.week_start),
    )
    return user_goal


def weekly_progress(db: Session, user_id: str, week_start: date) -> dict:
    goals = week_goals(db, user_id, week_start)
    total = len(goals)
    completed = sum(1 for ug in goals if ug.completed)

    colors = {ug.goal.category.name: ug.goal.category.color or "" for ug in goals}
    categories = [
        {"name": name, "color": colors[name], "completed": done, "total": count}
        for name, (done, count) in achievements.category_completion_counts(goals).items()
    ]

    return {
        "week_start": week_start,
        "total_goals": total,
        "completed_goals": completed,
        "categories": categories,
        "categories_completed": achievements.count_completed_categories(goals),
        "achievement": achievements.get_weekly_achievement(db, user_id, week_start),
        "progress_percentage": round(completed / total * 100) if total else 0,
    }
