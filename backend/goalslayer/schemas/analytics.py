from datetime import date

from goalslayer.schemas.base import CamelModel


class WeeklyStatsPoint(CamelModel):
    week: date
    total_goals: int
    completed_goals: int
    completion_rate: float  # percent
    categories_completed: int


class CategoryPerformance(CamelModel):
    category_id: str
    category_name: str
    total_goals: int
    completed_goals: int
    completion_rate: float  # percent


class CompletionTrendPoint(CamelModel):
    date: date
    completed_count: int


class AchievementProgressPoint(CamelModel):
    week: date
    level: str
    categories_completed: int
