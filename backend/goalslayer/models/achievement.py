from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Monday of the week the tier was reached in; one row per (user, week)
    week_start = Column(Date, nullable=False, index=True)

    categories_completed = Column(Integer, nullable=False)
    level = Column(String(50), nullable=False)  # track, rock, slayed

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
