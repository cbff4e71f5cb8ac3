from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from goalslayer.db import Base
from goalslayer.models.user import new_id


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    # Display metadata for the client, e.g. "fas fa-leaf" / "peace"
    icon = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
