"""Database table definitions for the build index"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import Field, SQLModel


class ResourceRecord(SQLModel, table=True):
    """One built resource: identity, derived metadata and a hash of what was written"""
    __tablename__ = "resources"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    resource_id: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    collection: str = Field(..., index=True, nullable=False)
    relative_path: str = Field(..., sa_column=Column(Text, nullable=False))
    slug: Optional[str] = Field(default=None, index=True)
    title: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    taxonomies: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    built_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
