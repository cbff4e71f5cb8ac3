from datetime import date, datetime
from typing import Optional

from pydantic import Field

from goalslayer.schemas.base import CamelModel
from goalslayer.schemas.catalog import GoalWithCategory


class UserGoalRead(CamelModel):
    id: str
    user_id: str
    goal_id: str
    week_start: date
    completed: bool = False
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class UserGoalWithGoal(UserGoalRead):
    goal: GoalWithCategory


class SelectGoalsRequest(CamelModel):
    # Length is checked by the route so the error message matches the game rule
    goal_ids: list[str] = Field(default_factory=list)


class AchievementRead(CamelModel):
    id: str
    user_id: str
    week_start: date
    categories_completed: int
    level: str
    created_at: Optional[datetime] = None


class CategoryProgress(CamelModel):
    name: str
    color: str = ""
    completed: int = 0
    total: int = 0


class WeeklyProgress(CamelModel):
    week_start: date
    total_goals: int
    completed_goals: int
    categories: list[CategoryProgress]
    categories_completed: int
    achievement: Optional[AchievementRead] = None
    progress_percentage: int
