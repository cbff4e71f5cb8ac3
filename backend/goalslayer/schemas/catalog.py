from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from goalslayer.schemas.base import CamelModel


class CategoryRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None


class GoalRead(CamelModel):
    id: str
    category_id: str
    description: str
    is_custom: bool = False
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class GoalWithCategory(GoalRead):
    category: CategoryRead


class CustomGoalCreate(CamelModel):
    description: str = Field(max_length=500)

    @field_validator("description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Goal description is required")
        return v


class Recommendation(CamelModel):
    goal_id: str
    goal: GoalWithCategory
    score: float
    reason: str
