import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    slug: str
    title: str
    layout: str
    keywords: Optional[str] = None
    publishedDate: Optional[datetime.date] = None
    readingTime: Optional[str] = None
    warnings: int = 0


class PostDetail(PostSummary):
    body: str
    extra: Dict[str, str] = Field(default_factory=dict)
