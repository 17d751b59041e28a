"""
Search and help request schemas.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from src.schemas.article import ArticleSummary


class SearchResponse(BaseModel):
    """Search results in storage order."""

    query: str
    group: str
    results: List[ArticleSummary]


class HelpRequestCreate(BaseModel):
    """What the user needs and could not find."""

    message: str = Field(..., min_length=1, max_length=5000)


class HelpRequestResponse(BaseModel):
    """Stored help request."""

    id: int
    username: str
    message: str
    created_at: datetime

    class Config:
        from_attributes = True
