"""Goal recommendations.

Every candidate goal gets an additive score from independent signals:

  - never attempted by the user                        +20
  - attempted with completions          +15 x (completions / attempts)
  - attempted, never completed                          -5
  - category history                    +10 x (category completions / attempts)
  - category picked within the last 4 weeks              +5
  - popularity over all users            +8 x (completions / attempts)
  - user-authored goal                                   +5
  - category picked less often than the user's average   +3

Scores never go below zero. Nothing is cached or stored; the ranking is
rebuilt from the history on every request.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from goalslayer.core.constants import (
    REC_CATEGORY_SUCCESS_WEIGHT,
    REC_CUSTOM_GOAL_BONUS,
    REC_DEFAULT_REASON,
    REC_DIVERSITY_BONUS,
    REC_EXCELLENT_RATIO,
    REC_GOAL_SUCCESS_WEIGHT,
    REC_GOOD_RATIO,
    REC_LIMIT_ALL,
    REC_LIMIT_CATEGORY,
    REC_NEVER_COMPLETED_PENALTY,
    REC_NEW_GOAL_BONUS,
    REC_POPULARITY_WEIGHT,
    REC_RECENT_CATEGORY_BONUS,
    REC_RECENT_WINDOW_DAYS,
    REC_SEPARATOR,
)
from goalslayer.core.time_utils import week_start_datetime
from goalslayer.models.category import Category
from goalslayer.models.goal import Goal
from goalslayer.models.user_goal import UserGoal
from goalslayer.services.catalog import get_category, visible_goals_query


@dataclass
class HistoryEntry:
    goal_id: str
    category_id: str
    completed: bool
    week_start: date


@dataclass
class Tally:
    attempts: int = 0
    completions: int = 0

    def add(self, completed: bool) -> None:
        self.attempts += 1
        if completed:
            self.completions += 1

    @property
    def ratio(self) -> float:
        return self.completions / self.attempts if self.attempts else 0.0


@dataclass
class ScoredGoal:
    goal: Goal
    score: float
    notes: list[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        return REC_SEPARATOR.join(self.notes) if self.notes else REC_DEFAULT_REASON


def score_goals(
    goals: list[Goal],
    history: list[HistoryEntry],
    global_stats: dict[str, Tally],
    category_count: int,
    now: datetime | None = None,
) -> list[ScoredGoal]:
    """Score each candidate goal. Returns one entry per goal, unsorted."""
    now = now or datetime.now()
    recent_cutoff = now - timedelta(days=REC_RECENT_WINDOW_DAYS)

    by_goal: dict[str, Tally] = defaultdict(Tally)
    by_category: dict[str, Tally] = defaultdict(Tally)
    recent_categories: set[str] = set()
    for entry in history:
        by_goal[entry.goal_id].add(entry.completed)
        by_category[entry.category_id].add(entry.completed)
        if week_start_datetime(entry.week_start) >= recent_cutoff:
            recent_categories.add(entry.category_id)

    avg_per_category = len(history) / category_count if category_count else 0.0

    results = []
    for goal in goals:
        score = 0.0
        notes = []

        mine = by_goal.get(goal.id)
        if mine is None:
            score += REC_NEW_GOAL_BONUS
            notes.append("New goal to explore")
        elif mine.completions > 0:
            ratio = mine.ratio
            score += ratio * REC_GOAL_SUCCESS_WEIGHT
            if ratio >= REC_EXCELLENT_RATIO:
                notes.append("You consistently complete this goal")
            elif ratio >= REC_GOOD_RATIO:
                notes.append("You've had success with this goal")
        else:
            score += REC_NEVER_COMPLETED_PENALTY

        category = by_category.get(goal.category_id)
        if category is not None:
            score += category.ratio * REC_CATEGORY_SUCCESS_WEIGHT

        if goal.category_id in recent_categories:
            score += REC_RECENT_CATEGORY_BONUS

        popularity = global_stats.get(goal.id)
        if popularity is not None and popularity.attempts > 0:
            score += popularity.ratio * REC_POPULARITY_WEIGHT

        if goal.is_custom:
            score += REC_CUSTOM_GOAL_BONUS

        picked = category.attempts if category is not None else 0
        if picked < avg_per_category:
            score += REC_DIVERSITY_BONUS

        results.append(ScoredGoal(goal=goal, score=round(max(score, 0.0), 2), notes=notes))
    return results


def rank(scored: list[ScoredGoal], limit: int) -> list[ScoredGoal]:
    ordered = sorted(scored, key=lambda s: (-s.score, s.goal.description))
    return ordered[:limit]


def _user_history(db: Session, user_id: str) -> list[HistoryEntry]:
    rows = (
        db.query(UserGoal.goal_id, Goal.category_id, UserGoal.completed, UserGoal.week_start)
        .join(Goal, UserGoal.goal_id == Goal.id)
        .filter(UserGoal.user_id == user_id)
        .all()
    )
    return [
        HistoryEntry(goal_id=g, category_id=c, completed=bool(done), week_start=ws)
        for g, c, done, ws in rows
    ]


def _global_stats(db: Session, goal_ids: list[str]) -> dict[str, Tally]:
    if not goal_ids:
        return {}
    completed_int = func.sum(case((UserGoal.completed.is_(True), 1), else_=0))
    rows = (
        db.query(UserGoal.goal_id, func.count(UserGoal.id), completed_int)
        .filter(UserGoal.goal_id.in_(goal_ids))
        .group_by(UserGoal.goal_id)
        .all()
    )
    return {
        goal_id: Tally(attempts=int(attempts or 0), completions=int(completions or 0))
        for goal_id, attempts, completions in rows
    }


def recommend_goals(
    db: Session,
    user_id: str,
    category_id: str | None = None,
    now: datetime | None = None,
) -> list[ScoredGoal]:
    if category_id is not None:
        get_category(db, category_id)
    goals = visible_goals_query(db, user_id, category_id).all()
    if not goals:
        return []

    scored = score_goals(
        goals,
        _user_history(db, user_id),
        _global_stats(db, [g.id for g in goals]),
        db.query(func.count(Category.id)).scalar() or 0,
        now=now,
    )
    limit = REC_LIMIT_CATEGORY if category_id else REC_LIMIT_ALL
    return rank(scored, limit)
