from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from goalslayer.api.deps import get_current_user
from goalslayer.db import get_db
from goalslayer.errors import NotFoundError
from goalslayer.models.user import User
from goalslayer.schemas.catalog import (
    CategoryRead,
    CustomGoalCreate,
    GoalRead,
    GoalWithCategory,
    Recommendation,
)
from goalslayer.services import catalog
from goalslayer.services.recommendations import recommend_goals

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return catalog.list_categories(db)


@router.get("/categories/{category_id}/goals", response_model=list[GoalRead])
def list_category_goals(
    category_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """System goals first, then the caller's own custom goals."""
    try:
        return catalog.goals_for_category(db, category_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/categories/{category_id}/goals", response_model=GoalRead, status_code=201)
def create_custom_goal(
    category_id: str,
    payload: CustomGoalCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return catalog.create_custom_goal(db, category_id, user.id, payload.description)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/goals/recommendations", response_model=list[Recommendation])
def goal_recommendations(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Rank goals for the caller.

    GET /api/goals/recommendations?categoryId=<id> narrows to one category
    and returns at most 6 entries; without it up to 12 are returned.
    """
    try:
        ranked = recommend_goals(db, user.id, category_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [
        Recommendation(
            goal_id=s.goal.id,
            goal=GoalWithCategory.model_validate(s.goal),
            score=s.score,
            reason=s.reason,
        )
        for s in ranked
    ]
