"""Database table definitions for collections and their articles"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class Collection(SQLModel, table=True):
    """A curated, titled collection of articles exported as one document"""
    __tablename__ = "collections"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class Article(SQLModel, table=True):
    """A single article whose body is stored as rich-text markup"""
    __tablename__ = "articles"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    collection_id: UUID = Field(..., foreign_key="collections.id", index=True, nullable=False)
    heading: str = Field(..., sa_column=Column(Text, nullable=False))
    subheading: str = Field(default="", sa_column=Column(Text, nullable=False))
    media_name: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    media_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    author: str = Field(default="", sa_column=Column(Text, nullable=False))
    body: str = Field(default="", sa_column=Column(Text, nullable=False))
    date: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    order_index: int = Field(default=0, nullable=False, description="Display position within the collection")
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
