"""Database table definition for articles"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import Field, SQLModel

from blogpub.core.models import ArticleStatus


class ArticleRow(SQLModel, table=True):
    """A blog article; content holds the structured form of its body"""
    __tablename__ = "articles"
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(..., sa_column=Column(String(255), nullable=False))
    author_name: str = Field(..., sa_column=Column(String(100), nullable=False, index=True))
    content: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    status: ArticleStatus = Field(default=ArticleStatus.draft, nullable=False)
    excerpt: str = Field(default="", sa_column=Column(Text, nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    reading_time: int = Field(default=1, nullable=False)
    content_hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False, index=True))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
