"""
SQLAlchemy ORM models for persistence.
"""
from datetime import datetime
from sqlalchemy import Column, Date, DateTime, Float, String, Text

from db import Base


class EntryORM(Base):
    __tablename__ = "entries"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    hobby = Column(String, nullable=True)
    place = Column(String, nullable=True)
    country = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
