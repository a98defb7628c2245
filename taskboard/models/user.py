"""
User model - todo owners, created through registration
"""
from sqlalchemy import Column, Integer, String
from taskboard.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    avatar = Column(String, nullable=True)  # image URL
