"""
Pydantic schemas for sitemap entries
"""

from pydantic import BaseModel, Field, StrictStr, validator
from typing import List
from datetime import datetime
from enum import Enum


class ChangeFrequency(str, Enum):
    """Crawl hint values allowed by the sitemap protocol"""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


class SlugRecord(BaseModel):
    """The only part of a catalog document the sitemap cares about"""

    slug: StrictStr = Field(
        ...,
        min_length=1,
        description="URL-safe identifier used as the last path segment",
        examples=["creme-hydratante"]
    )


class UrlEntry(BaseModel):
    """One <url> block of the sitemap"""

    url: str = Field(
        ...,
        description="Absolute URL (site origin + path)",
        examples=["https://beautydiscount.ma/products/creme-hydratante"]
    )

    last_modified: datetime = Field(
        ...,
        description="Generation time of the sitemap"
    )

    change_frequency: ChangeFrequency = Field(
        ...,
        description="How often crawlers should expect the page to change"
    )

    priority: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Relative priority within the site"
    )

    @validator('url')
    def validate_url(cls, v):
        """URLs must be absolute"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Sitemap URL must be absolute (http:// or https://)")
        return v


class SitemapResponse(BaseModel):
    """JSON listing of a freshly built sitemap"""

    entries: List[UrlEntry] = Field(
        default_factory=list,
        description="Entries in sitemap order"
    )

    total: int = Field(
        ...,
        ge=0,
        description="Number of entries"
    )

    generated_at: datetime = Field(
        ...,
        description="Timestamp shared by every entry"
    )
