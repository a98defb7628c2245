"""
Category model - shared labels for todos (no owner)
"""
from sqlalchemy import Column, Integer, String
from taskboard.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)  # hex, e.g. "#10B981"
