from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from goalslayer.api.deps import get_current_user
from goalslayer.core.time_utils import current_week_start
from goalslayer.db import get_db
from goalslayer.errors import NotFoundError, ValidationError
from goalslayer.models.user import User
from goalslayer.schemas.user_goal import (
    AchievementRead,
    SelectGoalsRequest,
    UserGoalRead,
    UserGoalWithGoal,
    WeeklyProgress,
)
from goalslayer.services import achievements, selection

router = APIRouter(prefix="/api", tags=["user-goals"])


@router.get("/user/goals/week", response_model=list[UserGoalWithGoal])
def current_week_goals(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return selection.week_goals(db, user.id, current_week_start())


@router.post("/user/select-goals", response_model=list[UserGoalWithGoal])
def select_goals(
    payload: SelectGoalsRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replace this week's selection; completion state starts over."""
    try:
        return selection.select_goals(db, user.id, payload.goal_ids, current_week_start())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/user-goals/{user_goal_id}/complete", response_model=UserGoalRead)
def toggle_goal_completion(
    user_goal_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return selection.toggle_completion(db, user_goal_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/user/progress", response_model=WeeklyProgress)
def weekly_progress(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    progress = selection.weekly_progress(db, user.id, current_week_start())
    achievement = progress.pop("achievement")
    return WeeklyProgress(
        **progress,
        achievement=AchievementRead.model_validate(achievement) if achievement else None,
    )


@router.get("/user/achievements", response_model=list[AchievementRead])
def list_achievements(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return achievements.list_achievements(db, user.id)
