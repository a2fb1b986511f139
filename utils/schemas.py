"""
Pydantic Schemas - Data Validation Models

Defines the Pydantic schemas used throughout the crawler:
- Target app entries loaded from target_apps.json
- Review records produced by the extractors and written to CSV

Usage:
    from utils.schemas import TargetApps

    targets = TargetApps(**raw_config)
    for app in targets.app_store:
        print(app.app_id, app.country)
"""

from typing import Optional

from pydantic import BaseModel, Field

# CSV column order, shared by the writer and the record model.
REVIEW_FIELDS = ("date", "star", "like", "dislike", "title", "review")


class TargetApp(BaseModel):
    """One crawl unit: an application in one storefront country.

    `pages` is the page the crawl starts from; when omitted the platform's
    own starting page is used.
    """

    app_id: str = Field(..., min_length=1, description="Platform-specific app identifier")
    country: str = Field(..., min_length=1, description="Storefront country / locale code")
    pages: Optional[int] = Field(default=None, ge=0, description="Start page override")

    class Config:
        frozen = True


class TargetApps(BaseModel):
    """Read-only snapshot of every configured target, grouped by platform.

    Missing platform keys default to empty; unknown keys are ignored.
    """

    app_store: tuple[TargetApp, ...] = Field(default=())
    play_store: tuple[TargetApp, ...] = Field(default=())

    class Config:
        frozen = True
        extra = "ignore"


class ReviewRecord(BaseModel):
    """A single platform-normalized review.

    A record is complete only when both `title` and `review` are non-empty;
    extractors drop incomplete ones.
    """

    date: str = ""
    star: int = 0
    like: int = 0
    dislike: int = Field(default=0, ge=0)
    title: str = ""
    review: str = ""

    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.review)

    def as_row(self) -> list:
        """Values in CSV column order."""
        return [getattr(self, name) for name in REVIEW_FIELDS]
