from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from goalslayer.api.deps import get_current_user
from goalslayer.core.time_utils import current_week_start, window_start
from goalslayer.db import get_db
from goalslayer.models.user import User
from goalslayer.schemas.analytics import (
    AchievementProgressPoint,
    CategoryPerformance,
    CompletionTrendPoint,
    WeeklyStatsPoint,
)
from goalslayer.services import analytics

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/weekly-stats", response_model=list[WeeklyStatsPoint])
def weekly_stats(
    weeks: int = Query(12, ge=1, le=52),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    today = date.today()
    return analytics.weekly_completion_stats(
        db, user.id, window_start(weeks, today), current_week_start(today)
    )


@router.get("/category-performance", response_model=list[CategoryPerformance])
def category_performance(
    weeks: int = Query(12, ge=1, le=52),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    today = date.today()
    return analytics.category_performance(
        db, user.id, window_start(weeks, today), current_week_start(today)
    )


@router.get("/completion-trends", response_model=list[CompletionTrendPoint])
def completion_trends(
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return analytics.completion_trends(db, user.id, days)


@router.get("/achievement-progression", response_model=list[AchievementProgressPoint])
def achievement_progression(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return analytics.achievement_progression(db, user.id)
