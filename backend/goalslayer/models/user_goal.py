from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class UserGoal(Base):
    """One goal picked by a user for one week."""

    __tablename__ = "user_goals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)

    # Monday of the week (local)
    week_start = Column(Date, nullable=False, index=True)

    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    goal = relationship("Goal", lazy="joined")
