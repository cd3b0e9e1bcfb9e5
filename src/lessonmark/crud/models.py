"""Database table for stored topic content"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class TopicContentRow(SQLModel, table=True):
    """The current storage markup of one topic"""
    __tablename__ = "topic_content"
    id: Optional[int] = Field(default=None, primary_key=True)
    topic_id: str = Field(sa_column=Column(String(128), unique=True, index=True, nullable=False))
    type: str = Field(default="html", sa_column=Column(String(32), nullable=False))
    content: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
