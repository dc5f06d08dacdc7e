"""
SQLAlchemy ORM models.

The kiosk persists exactly one thing: the catalog snapshot, stored as JSON
under a namespaced key. A key-value table keeps that contract simple.
"""

from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
