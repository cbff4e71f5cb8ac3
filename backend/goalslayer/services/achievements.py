"""Weekly tiers.

A category is completed when at least two of its selected goals are done.
The number of completed categories maps onto a tier:

    0-1 -> none   (nothing stored)
    2-3 -> track
    4-5 -> rock
    6   -> slayed

The stored achievement for a week is written once, the first time the week
reaches a tier above "none", and is never updated afterwards.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from goalslayer.core.constants import CATEGORY_COMPLETION_THRESHOLD, TIER_NONE, TIER_THRESHOLDS
from goalslayer.models.achievement import Achievement
from goalslayer.models.user_goal import UserGoal
from goalslayer.services.social import record_activity

logger = logging.getLogger(__name__)


def achievement_tier(categories_completed: int) -> str:
    for minimum, level in TIER_THRESHOLDS:
        if categories_completed >= minimum:
            return level
    return TIER_NONE


def category_completion_counts(user_goals: Iterable[UserGoal]) -> dict[str, tuple[int, int]]:
    """Map category name -> (completed, total) for a week's selections."""
    counts: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for ug in user_goals:
        stats = counts[ug.goal.category.name]
        stats[1] += 1
        if ug.completed:
            stats[0] += 1
    return {name: (done, total) for name, (done, total) in counts.items()}


def count_completed_categories(user_goals: Iterable[UserGoal]) -> int:
    return sum(
        1
        for done, _total in category_completion_counts(user_goals).values()
        if done >= CATEGORY_COMPLETION_THRESHOLD
    )


def get_weekly_achievement(db: Session, user_id: str, week_start: date) -> Achievement | None:
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id)
        .filter(Achievement.week_start == week_start)
        .first()
    )


def list_achievements(db: Session, user_id: str) -> list[Achievement]:
    return (
        db.query(Achievement)
        .filter(Achievement.user_id == user_id)
        .order_by(Achievement.week_start.desc())
        .all()
    )


def evaluate_weekly_achievement(
    db: Session, user_id: str, week_start: date, user_goals: Iterable[UserGoal]
) -> Achievement | None:
    """Store an achievement for the week if one is due and none exists yet.

    `user_goals` is the week's full selection, freshly read. Returns the newly
    created row, or None when nothing was written.
    """
    completed = count_completed_categories(user_goals)
    level = achievement_tier(completed)
    if level == TIER_NONE:
        return None

    if get_weekly_achievement(db, user_id, week_start) is not None:
        return None

    achievement = Achievement(
        user_id=user_id,
        week_start=week_start,
        categories_completed=completed,
        level=level,
    )
    db.add(achievement)
    db.flush()
    record_activity(
        db,
        user_id,
        "achievement_earned",
        f"Earned the '{level}' achievement with {completed} categories completed",
        data={"achievementId": achievement.id, "level": level, "categoriesCompleted": completed},
        commit=False,
    )
    db.commit()
    db.refresh(achievement)
    logger.info("User %s reached '%s' for week %s", user_id, level, week_start)
    return achievement
